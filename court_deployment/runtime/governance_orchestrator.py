"""
Module wiring and modules governor handoff.

Both steps are gated on who currently holds the modules governor role on the
controller, read live before acting. Finding the role held by someone else is
an expected state on resumed runs and is reported, never raised.
"""

from __future__ import annotations

import logging
from typing import Mapping

from court_deployment.core.config.base_config import GovernorConfig
from court_deployment.core.config.constants import MODULE_IDS, WIRING_ORDER
from court_deployment.core.errors import DependencyNotReadyError
from court_deployment.core.governance import AuthorityAction, decide_authority_action
from court_deployment.core.interfaces import ControllerHandle, ModuleHandle
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.results import StepOutcome

_OUTCOMES = {
    AuthorityAction.TRANSFER: StepOutcome.APPLIED,
    AuthorityAction.ALREADY_SATISFIED: StepOutcome.ALREADY_SATISFIED,
    AuthorityAction.UNAUTHORIZED: StepOutcome.UNAUTHORIZED,
}


class GovernanceOrchestrator:
    """Runs the authority-gated configuration steps on the controller."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    async def wire_modules(
        self,
        controller: ControllerHandle,
        modules: Mapping[ModuleKind, ModuleHandle],
        caller: str,
        target: GovernorConfig,
    ) -> StepOutcome:
        """
        Register the dependent module addresses on the controller.

        Args:
            controller: Controller handle
            modules: Resolved handles of the dependent modules
            caller: Address sending the transactions
            target: Governor the modules role is meant to end up with

        Returns:
            APPLIED if the modules were set, otherwise why the step was skipped
        """
        missing = [kind.value for kind in WIRING_ORDER if kind not in modules or not modules[kind].address]
        if missing:
            raise DependencyNotReadyError("modules wiring", missing)

        current = await controller.get_modules_governor()
        action = decide_authority_action(current, caller, target.address)

        if action is AuthorityAction.TRANSFER:
            self.logger.info("Setting modules...")
            ids = [MODULE_IDS[kind] for kind in WIRING_ORDER]
            implementations = [modules[kind].address for kind in WIRING_ORDER]
            await controller.set_modules(ids, implementations)
            self.logger.info("Modules set successfully")
        elif action is AuthorityAction.ALREADY_SATISFIED:
            self.logger.warning(
                f"Cannot set modules since sender is no longer the modules governor "
                f"(already handed off to {target})"
            )
        else:
            self.logger.warning(
                f"Cannot set modules since sender is no longer the modules governor (held by {current})"
            )

        return _OUTCOMES[action]

    async def handoff_governance(
        self,
        controller: ControllerHandle,
        caller: str,
        target: GovernorConfig,
    ) -> StepOutcome:
        """
        Transfer the modules governor role from the caller to the target governor.

        Args:
            controller: Controller handle
            caller: Address sending the transactions
            target: Governor that should hold the role

        Returns:
            APPLIED if the role was transferred, otherwise why nothing was done
        """
        current = await controller.get_modules_governor()
        action = decide_authority_action(current, caller, target.address)

        if action is AuthorityAction.TRANSFER:
            self.logger.info(f"Transferring modules governor to {target} ...")
            await controller.change_modules_governor(target.address)
            self.logger.info(f"Modules governor transferred successfully to {target}")
        elif action is AuthorityAction.ALREADY_SATISFIED:
            self.logger.info(f"Modules governor is already set to {target}")
        else:
            self.logger.warning(f"Modules governor is already set to another address ({current})")

        return _OUTCOMES[action]
