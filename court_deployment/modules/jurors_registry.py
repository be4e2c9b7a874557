"""JurorsRegistry descriptor."""

from __future__ import annotations

import logging
from typing import Any, Tuple

from court_deployment.core.config.base_config import DeploymentPlan, TokenConfig
from court_deployment.core.config.constants import MAX_UINT64, VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.numbers import token_to_string
from court_deployment.modules.registry import ModuleDescriptor, module_registry


def tokens(plan: DeploymentPlan) -> Tuple[TokenConfig, ...]:
    return (plan.jurors.token,)


def total_active_balance_limit(plan: DeploymentPlan) -> int:
    """Largest total active balance the registry accepts without overflowing final round weights."""
    return plan.jurors.min_active_balance * (MAX_UINT64 // plan.court.final_round_weight_precision)


def build_args(ctx: BuildContext) -> Tuple[Any, ...]:
    plan = ctx.plan
    return (ctx.controller_address, plan.jurors.token.address, total_active_balance_limit(plan))


def describe(ctx: BuildContext, logger: logging.Logger) -> None:
    jurors = ctx.plan.jurors
    limit = total_active_balance_limit(ctx.plan)
    logger.info(f"Deploying JurorsRegistry contract {VERSION} with config:")
    logger.info(f" - Controller:                              {ctx.controller_address}")
    logger.info(f" - Jurors token:                            {jurors.token.describe()}")
    min_active_balance = token_to_string(jurors.min_active_balance, jurors.token)
    logger.info(f" - Minimum active balance:                  {min_active_balance}")
    logger.info(f" - Total active balance limit:              {token_to_string(limit, jurors.token)}")


REGISTRY = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.REGISTRY,
        contract_name="JurorsRegistry",
        build_args=build_args,
        tokens=tokens,
        describe=describe,
    )
)
