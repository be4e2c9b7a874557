"""
Deployment runner for the court modules.

Drives the full run as a strict sequence of stages:
- Resolve the controller
- Resolve the dependent modules (disputes, registry, voting, treasury, subscriptions)
- Wire the modules on the controller
- Hand the modules governor role off to the plan's governor
- Verify the deployed modules

Every stage needs the previous one to have finished. Resolution stages persist
each module as soon as it is deployed, so a failed run resumes from the store
on the next invocation; no other checkpoint exists.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from court_deployment.core.config.base_config import DeploymentPlan
from court_deployment.core.errors import IncompleteDeploymentError
from court_deployment.core.interfaces import ControllerHandle, DeploymentEnvironment, ModuleHandle
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.results import DeploymentResult, DeploymentStage
from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.governance_orchestrator import GovernanceOrchestrator
from court_deployment.runtime.module_orchestrator import ModuleOrchestrator
from court_deployment.runtime.pending_journal import PendingCreationJournal
from court_deployment.runtime.verification_orchestrator import VerificationOrchestrator


class DeploymentRunner:
    """
    Runs the court deployment state machine against one network.

    The runner orchestrates three specialized components:
    1. ModuleOrchestrator: load or deploy each module
    2. GovernanceOrchestrator: wire modules and hand off the modules governor
    3. VerificationOrchestrator: verify every module at most once
    """

    def __init__(
        self,
        plan: DeploymentPlan,
        environment: DeploymentEnvironment,
        store: DeploymentStore,
        logger: logging.Logger,
        journal: Optional[PendingCreationJournal] = None,
    ):
        """
        Initialize deployment runner.

        Args:
            plan: Deployment plan
            environment: Network environment (sender, factory, optional verifier)
            store: Deployment store of the environment's network
            logger: Logger instance
            journal: Optional journal of in-flight creations
        """
        self.plan = plan
        self.environment = environment
        self.store = store
        self.logger = logger

        self.module_orchestrator = ModuleOrchestrator(plan, store, environment.factory, logger, journal=journal)
        self.governance_orchestrator = GovernanceOrchestrator(logger)
        self.verification_orchestrator = VerificationOrchestrator(
            plan.verification_config, environment.verifier, store, logger
        )

    async def run(self) -> DeploymentResult:
        """
        Execute the complete deployment.

        Returns:
            DeploymentResult describing what was loaded, deployed, applied or skipped
        """
        result = DeploymentResult(network=self.environment.network)
        try:
            sender = await self.environment.get_sender()
            handles: Dict[ModuleKind, ModuleHandle] = {}

            result.stage = DeploymentStage.RESOLVE_CONTROLLER
            await self._resolve(ModuleKind.CONTROLLER, sender, handles, result)

            result.stage = DeploymentStage.RESOLVE_DEPENDENTS
            for kind in ModuleKind.dependents():
                await self._resolve(kind, sender, handles, result)

            controller = self._controller(handles)
            target = self.plan.governors.modules

            result.stage = DeploymentStage.WIRE_MODULES
            result.wiring = await self.governance_orchestrator.wire_modules(controller, handles, sender, target)

            result.stage = DeploymentStage.HANDOFF_GOVERNANCE
            result.handoff = await self.governance_orchestrator.handoff_governance(controller, sender, target)

            result.stage = DeploymentStage.VERIFY
            result.verification = await self.verification_orchestrator.run(handles)

            result.stage = DeploymentStage.DONE
        except Exception:
            self.logger.error(f"Deployment aborted during stage '{result.stage.value}'")
            self._log_summary(result)
            raise

        self.logger.info("=" * 80)
        self.logger.info("Deployment Complete!")
        self.logger.info("=" * 80)
        self._log_summary(result)
        return result

    async def run_verification(self) -> DeploymentResult:
        """
        Run only the verification pass against an already complete store.

        Returns:
            DeploymentResult with every module loaded and the verification outcomes

        Raises:
            IncompleteDeploymentError: If some module has no deployment record
        """
        result = DeploymentResult(network=self.environment.network)
        missing = [kind.value for kind in ModuleKind if not self.store.has_address(kind)]
        if missing:
            raise IncompleteDeploymentError(
                f"Cannot verify network '{self.environment.network}': modules {missing} have not been deployed yet"
            )

        sender = await self.environment.get_sender()
        handles: Dict[ModuleKind, ModuleHandle] = {}
        for kind in ModuleKind:
            await self._resolve(kind, sender, handles, result)

        result.stage = DeploymentStage.VERIFY
        result.verification = await self.verification_orchestrator.run(handles)
        result.stage = DeploymentStage.DONE
        self._log_summary(result)
        return result

    async def _resolve(
        self,
        kind: ModuleKind,
        sender: str,
        handles: Dict[ModuleKind, ModuleHandle],
        result: DeploymentResult,
    ) -> None:
        resolved = await self.module_orchestrator.resolve(kind, sender, handles)
        handles[kind] = resolved.handle
        result.modules[kind] = resolved.outcome
        result.addresses[kind] = resolved.handle.address

    def _controller(self, handles: Dict[ModuleKind, ModuleHandle]) -> ControllerHandle:
        controller = handles[ModuleKind.CONTROLLER]
        if not isinstance(controller, ControllerHandle):
            raise TypeError(
                f"Factory returned {type(controller).__name__} for the controller; expected a ControllerHandle"
            )
        return controller

    def _log_summary(self, result: DeploymentResult) -> None:
        for line in result.summary():
            self.logger.info(line)
