"""`deploy` command: run the full deployment state machine."""

from __future__ import annotations

import argparse
import asyncio

from court_deployment.commands.common import build_runner

HELP = "Deploy, wire and hand off the court modules (resumes from the deployment store)"


def add_args(parser: argparse.ArgumentParser) -> None:
    """Register deploy-specific CLI flags onto the command subparser."""
    parser.add_argument(
        "--skip-verification",
        action="store_true",
        help="Do not run the verification pass even if a verifier is available",
    )


def run(args: argparse.Namespace) -> int:
    if args.skip_verification:
        args.cfg_options = {**(args.cfg_options or {}), "verification.enabled": False}

    runner, logger = build_runner(args)

    logger.info("=" * 80)
    logger.info("Court Deployment")
    logger.info("=" * 80)

    asyncio.run(runner.run())
    return 0
