"""
Module resolution for deployment runs.

Resolving a module either attaches to the instance recorded in the store
(load path) or deploys a new one and records it (deploy path).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from court_deployment.core.config.base_config import DeploymentPlan, TokenConfig
from court_deployment.core.config.constants import VERSION
from court_deployment.core.contexts import BuildContext
from court_deployment.core.errors import DependencyNotReadyError, ExternalCallFailure, PendingCreationError
from court_deployment.core.interfaces import ModuleFactory, ModuleHandle
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.records import DeploymentRecord
from court_deployment.core.results import ResolutionOutcome
from court_deployment.modules import module_registry
from court_deployment.modules.registry import ModuleDescriptor, ModuleRegistry
from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.pending_journal import PendingCreationJournal


@dataclass(frozen=True)
class ResolvedModule:
    """A module handle plus how it was obtained."""

    handle: ModuleHandle
    outcome: ResolutionOutcome


class ModuleOrchestrator:
    """
    Resolves modules one at a time.

    This class handles:
    - Reusing instances already recorded in the deployment store
    - Refusing to deploy a module before its prerequisites are resolved
    - Minting staging tokens the plan leaves without an address
    - Creating the module and recording it with a single store write
    """

    def __init__(
        self,
        plan: DeploymentPlan,
        store: DeploymentStore,
        factory: ModuleFactory,
        logger: logging.Logger,
        journal: Optional[PendingCreationJournal] = None,
        registry: ModuleRegistry = module_registry,
    ):
        """
        Initialize module orchestrator.

        Args:
            plan: Deployment plan
            store: Deployment store of the target network
            factory: Factory creating or attaching module instances
            logger: Logger instance
            journal: Optional journal of in-flight creations
            registry: Module descriptors
        """
        self.plan = plan
        self.store = store
        self.factory = factory
        self.logger = logger
        self.journal = journal
        self.registry = registry

    async def resolve(
        self,
        kind: ModuleKind,
        sender: str,
        resolved: Mapping[ModuleKind, ModuleHandle] = MappingProxyType({}),
    ) -> ResolvedModule:
        """
        Load or deploy a module.

        Args:
            kind: Module to resolve
            sender: Address sending the creation transaction
            resolved: Handles already resolved in this run

        Returns:
            ResolvedModule with the handle and whether it was loaded or deployed

        Raises:
            DependencyNotReadyError: If a prerequisite module is not resolved yet
        """
        descriptor = self.registry.get(kind)
        record = self.store.get(kind)

        if record is not None and record.address:
            return ResolvedModule(await self._load(descriptor, record.address), ResolutionOutcome.LOADED)

        return ResolvedModule(await self._deploy(descriptor, sender, resolved), ResolutionOutcome.DEPLOYED)

    async def _load(self, descriptor: ModuleDescriptor, address: str) -> ModuleHandle:
        self.logger.warning(f"Using previous deployed {descriptor.contract_name} instance at {address}")
        return await self.factory.attach(descriptor.kind, address)

    async def _deploy(
        self,
        descriptor: ModuleDescriptor,
        sender: str,
        resolved: Mapping[ModuleKind, ModuleHandle],
    ) -> ModuleHandle:
        kind = descriptor.kind
        self._check_dependencies(descriptor, resolved)
        self._check_pending(descriptor)

        for token in descriptor.tokens(self.plan):
            if not token.address:
                await self._mint_token(token)

        context = BuildContext(plan=self.plan, sender=sender, modules=MappingProxyType(dict(resolved)))
        if descriptor.describe is not None:
            descriptor.describe(context, self.logger)
        constructor_args = descriptor.build_args(context)

        if self.journal is not None:
            self.journal.mark(kind)
        try:
            handle = await self.factory.create(kind, constructor_args)
        except ExternalCallFailure:
            # a reported failure created nothing; only unobserved outcomes stay pending
            if self.journal is not None:
                self.journal.clear(kind)
            raise
        if not handle.address or not handle.creation_ref:
            raise ExternalCallFailure(
                f"Creating {descriptor.contract_name} returned no address or creation transaction "
                f"(address={handle.address!r}, transactionHash={handle.creation_ref!r})"
            )

        self.store.record_deployment(
            kind, DeploymentRecord(address=handle.address, creation_ref=handle.creation_ref, schema_version=VERSION)
        )
        if self.journal is not None:
            self.journal.clear(kind)

        self.logger.info(f"Created {descriptor.contract_name} instance at {handle.address}")
        return handle

    def _check_dependencies(self, descriptor: ModuleDescriptor, resolved: Mapping[ModuleKind, ModuleHandle]) -> None:
        missing = [
            dependency
            for dependency in descriptor.dependencies
            if dependency not in resolved or not resolved[dependency].address
        ]
        if missing:
            raise DependencyNotReadyError(descriptor.kind.value, [dependency.value for dependency in missing])

    def _check_pending(self, descriptor: ModuleDescriptor) -> None:
        if self.journal is None:
            return
        started = self.journal.pending().get(descriptor.kind)
        if started is None:
            return
        if not self.plan.resume_config.redeploy_pending:
            raise PendingCreationError(
                f"A previous run started creating {descriptor.contract_name} at {started} and never recorded it. "
                f"Check the sender's transactions for an orphan instance, then clear {self.journal.path} "
                "or set resume.redeploy_pending=True"
            )
        self.logger.warning(
            f"A previous run started creating {descriptor.contract_name} at {started} without recording it; "
            "an orphan instance may exist on-chain. Deploying again."
        )

    async def _mint_token(self, token: TokenConfig) -> None:
        self.logger.info(f"Deploying test token {token.symbol} ({token.decimals} decimals)...")
        address = await self.factory.create_token(token)
        token.assign_address(address)
        self.logger.info(f"Created test token {token.symbol} at {address}")
