"""`verify` command: run only the verification pass against a complete store."""

from __future__ import annotations

import argparse
import asyncio

from court_deployment.commands.common import build_runner

HELP = "Verify every module recorded in the deployment store"


def add_args(parser: argparse.ArgumentParser) -> None:
    """The verify command only takes the common deployment arguments."""


def run(args: argparse.Namespace) -> int:
    runner, logger = build_runner(args)

    logger.info("=" * 80)
    logger.info("Court Verification")
    logger.info("=" * 80)

    asyncio.run(runner.run_verification())
    return 0
