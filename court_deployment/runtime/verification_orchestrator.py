"""
Verification orchestration for deployment workflows.

Publishes source verification for every deployed module, at most once per
module: a module whose record already carries a verification reference is
never sent again.
"""

import logging
from typing import Dict, Mapping, Optional

from court_deployment.core.config.base_config import VerificationConfig
from court_deployment.core.contexts import VerificationSource
from court_deployment.core.errors import IncompleteDeploymentError
from court_deployment.core.interfaces import ContractVerifier, ModuleHandle
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.results import VerificationOutcome
from court_deployment.runtime.deployment_store import DeploymentStore


class VerificationOrchestrator:
    """
    Orchestrates the verification pass.

    This class handles:
    - Skipping the whole pass when no verifier is available or it is disabled
    - Skipping modules that were verified by an earlier run
    - Recording each new verification reference as soon as it is returned
    """

    def __init__(
        self,
        config: VerificationConfig,
        verifier: Optional[ContractVerifier],
        store: DeploymentStore,
        logger: logging.Logger,
    ):
        """
        Initialize verification orchestrator.

        Args:
            config: Verification settings from the plan
            verifier: Verifier collaborator, None when verification is unavailable
            store: Deployment store of the target network
            logger: Logger instance
        """
        self.config = config
        self.verifier = verifier
        self.store = store
        self.logger = logger

    @property
    def enabled(self) -> bool:
        return self.verifier is not None and self.config.enabled

    @property
    def source(self) -> VerificationSource:
        return VerificationSource(package=self.config.source, headers=tuple(self.config.headers))

    async def run(self, handles: Mapping[ModuleKind, ModuleHandle]) -> Optional[Dict[ModuleKind, VerificationOutcome]]:
        """
        Verify every module that has not been verified yet.

        Args:
            handles: Resolved module handles

        Returns:
            Per-module outcome, or None when the pass is disabled
        """
        if self.verifier is None:
            self.logger.info("No verifier configured for this network, skipping verification...")
            return None
        if not self.config.enabled:
            self.logger.info("Verification disabled (verification.enabled=False), skipping...")
            return None

        self.logger.info("=" * 80)
        self.logger.info(f"Verifying contracts (source: {self.config.source})")
        self.logger.info("=" * 80)

        results = {}
        for kind, handle in handles.items():
            results[kind] = await self.verify_module(kind, handle)

        verified = sum(1 for outcome in results.values() if outcome is VerificationOutcome.VERIFIED)
        self.logger.info(f"Verification finished: {verified} verified, {len(results) - verified} already verified")
        return results

    async def verify_module(self, kind: ModuleKind, handle: ModuleHandle) -> VerificationOutcome:
        """
        Verify a single module unless its record already carries a verification reference.

        Args:
            kind: Module to verify
            handle: Resolved handle of the module

        Returns:
            VERIFIED if a verification was published now, ALREADY_VERIFIED otherwise
        """
        record = self.store.get(kind)
        if record is None:
            raise IncompleteDeploymentError(f"Cannot verify '{kind.value}': it has no deployment record")

        if record.is_verified:
            self.logger.debug(f"{kind.value} already verified at {record.verification_ref}")
            return VerificationOutcome.ALREADY_VERIFIED

        verification_ref = await self.verifier.verify(handle, self.source)
        self.store.record_verification(kind, verification_ref)
        self.logger.info(f"Verified {kind.value} at {handle.address}: {verification_ref}")
        return VerificationOutcome.VERIFIED
