"""Voting and Treasury descriptors; both only take the controller address."""

from __future__ import annotations

import logging
from typing import Any, Tuple

from court_deployment.core.config.constants import VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind
from court_deployment.modules.registry import ModuleDescriptor, module_registry


def build_args(ctx: BuildContext) -> Tuple[Any, ...]:
    return (ctx.controller_address,)


def _describer(contract_name: str):
    def describe(ctx: BuildContext, logger: logging.Logger) -> None:
        logger.info(f"Deploying {contract_name} contract {VERSION} with config:")
        logger.info(f" - Controller:                              {ctx.controller_address}")

    return describe


VOTING = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.VOTING,
        contract_name="CRVoting",
        build_args=build_args,
        describe=_describer("CRVoting"),
    )
)

TREASURY = module_registry.register(
    ModuleDescriptor(
        kind=ModuleKind.TREASURY,
        contract_name="CourtTreasury",
        build_args=build_args,
        describe=_describer("CourtTreasury"),
    )
)
