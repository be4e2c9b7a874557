"""Wiring shared by the CLI commands."""

from __future__ import annotations

import argparse
import logging
from typing import Tuple

from court_deployment.core.config.base_config import DeploymentPlan, load_plan, setup_logging
from court_deployment.environments import build_environment
from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.pending_journal import PendingCreationJournal, journal_path_for
from court_deployment.runtime.runner import DeploymentRunner


def build_runner(args: argparse.Namespace) -> Tuple[DeploymentRunner, logging.Logger]:
    """Build a runner from parsed CLI arguments."""
    logger = setup_logging(args.log_level)
    plan: DeploymentPlan = load_plan(args)

    environment = build_environment(plan.environment_config)
    store_path = plan.store_config.path
    store = DeploymentStore(store_path, environment.network, logger)
    journal = PendingCreationJournal(journal_path_for(store_path), environment.network, logger)

    logger.info(f"Network: {environment.network}")
    logger.info(f"Deployment store: {store_path}")
    runner = DeploymentRunner(plan, environment, store, logger, journal=journal)
    return runner, logger
