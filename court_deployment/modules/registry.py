"""
Module registry for the court deployment.

Each module registers a descriptor that knows:
- which modules must be resolved before it can be deployed
- which plan tokens must have an address before deployment
- how to build its constructor arguments from the plan
- how to describe the deployment in the logs

This keeps the orchestrators module-agnostic: resolving or verifying any
module is the same routine parameterized by its descriptor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from court_deployment.core.config.base_config import DeploymentPlan, TokenConfig
from court_deployment.core.contexts import BuildContext
from court_deployment.core.module_kind import ModuleKind


def _no_tokens(plan: DeploymentPlan) -> Tuple[TokenConfig, ...]:
    return ()


@dataclass(frozen=True)
class ModuleDescriptor:
    """Static description of how a module is deployed."""

    kind: ModuleKind
    contract_name: str
    build_args: Callable[[BuildContext], Tuple[Any, ...]]
    dependencies: Tuple[ModuleKind, ...] = (ModuleKind.CONTROLLER,)
    tokens: Callable[[DeploymentPlan], Tuple[TokenConfig, ...]] = _no_tokens
    describe: Optional[Callable[[BuildContext, logging.Logger], None]] = None


class ModuleRegistry:
    def __init__(self) -> None:
        self._descriptors: Dict[ModuleKind, ModuleDescriptor] = {}

    def register(self, descriptor: ModuleDescriptor) -> ModuleDescriptor:
        if descriptor.kind in descriptor.dependencies:
            raise ValueError(f"Module '{descriptor.kind.value}' cannot depend on itself")
        self._descriptors[descriptor.kind] = descriptor
        return descriptor

    def get(self, kind: ModuleKind) -> ModuleDescriptor:
        kind = ModuleKind.from_value(kind)
        if kind not in self._descriptors:
            available = ", ".join(k.value for k in self.list())
            raise KeyError(f"No descriptor registered for module '{kind.value}'. Available: [{available}]")
        return self._descriptors[kind]

    def list(self) -> list[ModuleKind]:
        return [kind for kind in ModuleKind if kind in self._descriptors]


module_registry = ModuleRegistry()
