"""CLI commands.

Each command module exposes ``HELP``, ``add_args(parser)`` and ``run(args) -> int``.
"""

from court_deployment.commands import deploy, verify

COMMANDS = {
    "deploy": deploy,
    "verify": verify,
}

__all__ = ["COMMANDS", "deploy", "verify"]
