"""
Typed context objects passed between deployment steps.

Nothing here is persisted: contexts carry what one step needs from the steps
before it, so no orchestrator has to keep hidden state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Tuple

from court_deployment.core.module_kind import ModuleKind

if TYPE_CHECKING:
    from court_deployment.core.config.base_config import DeploymentPlan
    from court_deployment.core.interfaces import ModuleHandle


@dataclass(frozen=True)
class BuildContext:
    """
    Inputs for building a module's constructor arguments.

    Attributes:
        plan: Deployment plan
        sender: Address that will send the creation transaction
        modules: Handles resolved so far in this run
    """

    plan: "DeploymentPlan"
    sender: str
    modules: Mapping[ModuleKind, "ModuleHandle"] = field(default_factory=lambda: MappingProxyType({}))

    def address_of(self, kind: ModuleKind) -> Optional[str]:
        handle = self.modules.get(kind)
        return handle.address if handle is not None else None

    @property
    def controller_address(self) -> Optional[str]:
        return self.address_of(ModuleKind.CONTROLLER)


@dataclass(frozen=True)
class VerificationSource:
    """Source metadata published alongside each verified module."""

    package: str
    headers: Tuple[str, ...] = ()
