"""
Collaborator interfaces.

Implementations talk to the actual chain: they submit a transaction and
return only once it is confirmed. A call known to have failed raises
ExternalCallFailure; a call whose outcome could not be observed raises
anything else. The orchestrators never retry any of these calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple

from court_deployment.core.config.base_config import TokenConfig
from court_deployment.core.contexts import VerificationSource
from court_deployment.core.module_kind import ModuleKind


class ModuleHandle:
    """A deployed module instance."""

    def __init__(self, kind: ModuleKind, address: str, creation_ref: Optional[str] = None):
        self.kind = kind
        self.address = address
        self.creation_ref = creation_ref

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, address={self.address!r})"


class ControllerHandle(ModuleHandle, ABC):
    """The controller, which owns the modules governor role and the module table."""

    @abstractmethod
    async def get_modules_governor(self) -> str:
        """Return the address currently allowed to set modules."""

    @abstractmethod
    async def set_modules(self, ids: Sequence[str], addresses: Sequence[str]) -> None:
        """Register module implementations against their identifiers in one transaction."""

    @abstractmethod
    async def change_modules_governor(self, address: str) -> None:
        """Hand the modules governor role to another address."""


class ModuleFactory(ABC):
    """Creates module instances or attaches to existing ones."""

    @abstractmethod
    async def attach(self, kind: ModuleKind, address: str) -> ModuleHandle:
        """Return a handle for an instance already living at address. Sends no transaction."""

    @abstractmethod
    async def create(self, kind: ModuleKind, constructor_args: Tuple[Any, ...]) -> ModuleHandle:
        """Create a new instance and return its handle carrying address and creation_ref."""

    @abstractmethod
    async def create_token(self, token: TokenConfig) -> str:
        """Mint a test token for staging networks and return its address."""


class ContractVerifier(ABC):
    """Publishes source verification for deployed instances."""

    @abstractmethod
    async def verify(self, handle: ModuleHandle, source: VerificationSource) -> str:
        """Verify the instance and return a durable reference (usually a URL)."""


class DeploymentEnvironment(ABC):
    """Network the deployment runs against."""

    network: str = "local"

    @property
    @abstractmethod
    def factory(self) -> ModuleFactory:
        """Factory used to create or attach modules."""

    @property
    def verifier(self) -> Optional[ContractVerifier]:
        """Verifier for the network, None when verification is not available."""
        return None

    @abstractmethod
    async def get_sender(self) -> str:
        """Return the address sending transactions."""
