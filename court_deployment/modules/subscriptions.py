"""CourtSubscriptions descriptor."""

from __future__ import annotations

import logging
from typing import Any, Tuple

from court_deployment.core.config.base_config import DeploymentPlan, TokenConfig
from court_deployment.core.config.constants import VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.numbers import token_to_string
from court_deployment.modules.registry import ModuleDescriptor, module_registry


def tokens(plan: DeploymentPlan) -> Tuple[TokenConfig, ...]:
    return (plan.subscriptions.fee_token,)


def build_args(ctx: BuildContext) -> Tuple[Any, ...]:
    subscriptions = ctx.plan.subscriptions
    return (
        ctx.controller_address,
        subscriptions.period_duration,
        subscriptions.fee_token.address,
        subscriptions.fee_amount,
        subscriptions.pre_payment_periods,
        subscriptions.resume_pre_paid_periods,
        subscriptions.late_payment_penalty_pct,
        subscriptions.governor_share_pct,
    )


def describe(ctx: BuildContext, logger: logging.Logger) -> None:
    subscriptions = ctx.plan.subscriptions
    fee = token_to_string(subscriptions.fee_amount, subscriptions.fee_token)
    logger.info(f"Deploying CourtSubscriptions contract {VERSION} with config:")
    logger.info(f" - Controller:                              {ctx.controller_address}")
    logger.info(f" - Period duration:                         {subscriptions.period_duration} terms")
    logger.info(f" - Fee token:                               {subscriptions.fee_token.describe()}")
    logger.info(f" - Fee amount:                              {fee}")
    logger.info(f" - Pre payment periods:                     {subscriptions.pre_payment_periods} periods")
    logger.info(f" - Resume pre-paid periods:                 {subscriptions.resume_pre_paid_periods} periods")
    logger.info(f" - Late payment penalty:                    {subscriptions.late_payment_penalty_pct} ‱")
    logger.info(f" - Governor share:                          {subscriptions.governor_share_pct} ‱")


SUBSCRIPTIONS = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.SUBSCRIPTIONS,
        contract_name="CourtSubscriptions",
        build_args=build_args,
        tokens=tokens,
        describe=describe,
    )
)
