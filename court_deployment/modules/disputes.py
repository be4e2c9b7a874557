"""DisputeManager descriptor."""

from __future__ import annotations

import logging
from typing import Any, Tuple

from court_deployment.core.config.constants import VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind
from court_deployment.modules.registry import ModuleDescriptor, module_registry


def build_args(ctx: BuildContext) -> Tuple[Any, ...]:
    court = ctx.plan.court
    return (ctx.controller_address, court.max_jurors_per_draft_batch, court.skipped_disputes)


def describe(ctx: BuildContext, logger: logging.Logger) -> None:
    court = ctx.plan.court
    logger.info(f"Deploying DisputeManager contract {VERSION} with config:")
    logger.info(f" - Controller:                              {ctx.controller_address}")
    logger.info(f" - Max number of jurors per draft batch:    {court.max_jurors_per_draft_batch}")
    logger.info(f" - # of skipped disputes:                   {court.skipped_disputes}")


DISPUTES = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.DISPUTES,
        contract_name="DisputeManager",
        build_args=build_args,
        describe=describe,
    )
)
