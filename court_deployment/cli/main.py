"""
Single deployment entrypoint.

Usage:
    python -m court_deployment.cli.main deploy <plan_cfg.py> [--store deployments.json]
    python -m court_deployment.cli.main verify <plan_cfg.py>
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from court_deployment.commands import COMMANDS
from court_deployment.core.config.base_config import parse_base_args
from court_deployment.core.errors import DeploymentError, PlanConfigError


def build_parser() -> argparse.ArgumentParser:
    """Build the deployment CLI parser, with one subcommand per command."""
    parser = argparse.ArgumentParser(
        description="Court Deployment CLI",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, command in COMMANDS.items():
        sub = subparsers.add_parser(name, help=command.HELP)
        parse_base_args(sub)  # adds plan_cfg, --store, --cfg-options, --log-level
        command.add_args(sub)
        sub.set_defaults(run=command.run)

    return parser


def main(argv: List[str] | None = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Optional argv list (without program name). If None, uses `sys.argv[1:]`.

    Returns:
        Process exit code (0 for success).
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return int(args.run(args) or 0)
    except (DeploymentError, PlanConfigError) as exc:
        logging.getLogger("court_deployment").error(f"{type(exc).__name__}: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
