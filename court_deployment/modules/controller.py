"""Controller (AragonCourt) descriptor."""

from __future__ import annotations

import logging
from typing import Any, Tuple

from court_deployment.core.config.base_config import DeploymentPlan, TokenConfig
from court_deployment.core.config.constants import VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.numbers import timestamp_to_string, token_to_string
from court_deployment.modules.registry import ModuleDescriptor, module_registry


def tokens(plan: DeploymentPlan) -> Tuple[TokenConfig, ...]:
    return (plan.court.fee_token,)


def build_args(ctx: BuildContext) -> Tuple[Any, ...]:
    """Constructor arguments; the sender starts as modules governor and hands the role off later."""
    plan = ctx.plan
    clock, governors, court = plan.clock, plan.governors, plan.court
    return (
        [clock.term_duration, clock.first_term_start_time],
        [governors.funds.address, governors.config.address, ctx.sender],
        court.fee_token.address,
        [court.juror_fee, court.draft_fee, court.settle_fee],
        [court.evidence_terms, court.commit_terms, court.reveal_terms, court.appeal_terms, court.appeal_confirm_terms],
        [court.penalty_pct, court.final_round_reduction],
        [
            court.first_round_jurors_number,
            court.appeal_step_factor,
            court.max_regular_appeal_rounds,
            court.final_round_lock_terms,
        ],
        [court.appeal_collateral_factor, court.appeal_confirm_collateral_factor],
        plan.jurors.min_active_balance,
    )


def describe(ctx: BuildContext, logger: logging.Logger) -> None:
    plan = ctx.plan
    clock, governors, court, jurors = plan.clock, plan.governors, plan.court, plan.jurors
    logger.info(f"Deploying AragonCourt contract {VERSION} with config:")
    logger.info(f" - Funds governor:                          {governors.funds.describe()}")
    logger.info(f" - Config governor:                         {governors.config.describe()}")
    logger.info(f" - Modules governor:                        {governors.modules.describe()} (initially sender)")
    logger.info(f" - Term duration:                           {clock.term_duration} seconds")
    logger.info(f" - First term start time:                   {timestamp_to_string(clock.first_term_start_time)}")
    logger.info(f" - Fee token:                               {court.fee_token.describe()}")
    logger.info(f" - Juror fee:                               {token_to_string(court.juror_fee, court.fee_token)}")
    logger.info(f" - Draft fee:                               {token_to_string(court.draft_fee, court.fee_token)}")
    logger.info(f" - Settle fee:                              {token_to_string(court.settle_fee, court.fee_token)}")
    logger.info(f" - Evidence terms:                          {court.evidence_terms}")
    logger.info(f" - Commit terms:                            {court.commit_terms}")
    logger.info(f" - Reveal terms:                            {court.reveal_terms}")
    logger.info(f" - Appeal terms:                            {court.appeal_terms}")
    logger.info(f" - Appeal confirmation terms:               {court.appeal_confirm_terms}")
    logger.info(f" - Juror penalty permyriad:                 {court.penalty_pct} ‱")
    logger.info(f" - First round jurors number:               {court.first_round_jurors_number}")
    logger.info(f" - Appeal step factor:                      {court.appeal_step_factor}")
    logger.info(f" - Max regular appeal rounds:               {court.max_regular_appeal_rounds}")
    logger.info(f" - Final round reduction:                   {court.final_round_reduction} ‱")
    logger.info(f" - Final round lock terms:                  {court.final_round_lock_terms}")
    logger.info(f" - Appeal collateral factor:                {court.appeal_collateral_factor} ‱")
    logger.info(f" - Appeal confirmation collateral factor:   {court.appeal_confirm_collateral_factor} ‱")
    min_active_balance = token_to_string(jurors.min_active_balance, jurors.token)
    logger.info(f" - Minimum active balance:                  {min_active_balance}")


CONTROLLER = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.CONTROLLER,
        contract_name="AragonCourt",
        build_args=build_args,
        dependencies=(),
        tokens=tokens,
        describe=describe,
    )
)
