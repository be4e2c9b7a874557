"""
In-process chain for dry runs.

LocalEnvironment mimics the contracts just enough for the deployment flow:
deterministic addresses and transaction hashes, a controller tracking its
modules governor and module table, and a verifier returning explorer URLs.
State can be kept in a JSON file so a dry run resumes like a real one.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from court_deployment.core.config.base_config import TokenConfig
from court_deployment.core.contexts import VerificationSource
from court_deployment.core.errors import ExternalCallFailure
from court_deployment.core.governance import same_address
from court_deployment.core.interfaces import (
    ContractVerifier,
    ControllerHandle,
    DeploymentEnvironment,
    ModuleFactory,
    ModuleHandle,
)
from court_deployment.core.module_kind import ModuleKind
from court_deployment.environments.builder import ENVIRONMENTS
from court_deployment.runtime.deployment_store import dump_json_document, load_json_document

DEFAULT_SENDER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

logger = logging.getLogger(__name__)


class LocalChain:
    """
    Contract state of the dry-run network.

    Attributes:
        calls: State-changing calls made through this instance, oldest first,
               as tuples such as ("create", "voting") or ("set_modules",)
    """

    def __init__(self, network: str = "local", state_path: Optional[str] = None, fail_on: Iterable[str] = ()):
        """
        Initialize the chain.

        Args:
            network: Network name, mixed into generated addresses
            state_path: Optional JSON file persisting the chain between processes
            fail_on: Call keys that fail once, e.g. "create:voting", "verify:registry",
                     "set_modules" or "change_modules_governor". A "lost:create:<kind>"
                     key lands the creation but raises TimeoutError instead of returning
        """
        self.network = network
        self.state_path = state_path
        self._fail_on = set(fail_on)
        self.calls: List[Tuple[str, ...]] = []

        state = load_json_document(state_path) if state_path else {}
        self.nonce: int = state.get("nonce", 0)
        self.contracts: Dict[str, Dict[str, Any]] = state.get("contracts", {})
        self.verified: Dict[str, str] = state.get("verified", {})

    def _maybe_fail(self, key: str) -> None:
        if key in self._fail_on:
            self._fail_on.discard(key)
            raise ExternalCallFailure(f"Transaction '{key}' reverted on {self.network}")

    def _maybe_lose(self, key: str) -> None:
        lost = f"lost:{key}"
        if lost in self._fail_on:
            self._fail_on.discard(lost)
            raise TimeoutError(f"No receipt for '{key}' on {self.network}")

    def _next_hash(self, label: str) -> str:
        self.nonce += 1
        return hashlib.sha256(f"{self.network}:{label}:{self.nonce}".encode()).hexdigest()

    def _save(self) -> None:
        if self.state_path:
            dump_json_document(
                {"nonce": self.nonce, "contracts": self.contracts, "verified": self.verified}, self.state_path
            )

    def contract(self, address: str) -> Dict[str, Any]:
        for stored_address, contract in self.contracts.items():
            if same_address(stored_address, address):
                return contract
        raise ExternalCallFailure(f"No contract deployed at {address} on {self.network}")

    def deploy(self, kind: str, args: Sequence[Any], sender: str) -> Tuple[str, str]:
        """Deploy a contract and return its address and creation transaction hash."""
        self._maybe_fail(f"create:{kind}")
        address = "0x" + self._next_hash("address")[:40]
        transaction_hash = "0x" + self._next_hash("tx")
        contract: Dict[str, Any] = {"kind": kind, "args": list(args), "deployer": sender}
        if kind == ModuleKind.CONTROLLER.value:
            contract["modules_governor"] = args[1][2]
            contract["modules"] = {}
        self.contracts[address] = contract
        self.calls.append(("create", kind))
        self._save()
        self._maybe_lose(f"create:{kind}")
        return address, transaction_hash

    def deploy_token(self, symbol: str, decimals: int, sender: str) -> str:
        self._maybe_fail(f"create_token:{symbol}")
        address = "0x" + self._next_hash("address")[:40]
        self.contracts[address] = {"kind": "token", "args": [symbol, decimals], "deployer": sender}
        self.calls.append(("create_token", symbol))
        self._save()
        return address

    def set_modules(self, controller: str, sender: str, ids: Sequence[str], addresses: Sequence[str]) -> None:
        self._maybe_fail("set_modules")
        contract = self.contract(controller)
        if not same_address(contract["modules_governor"], sender):
            raise ExternalCallFailure("CTR_SENDER_NOT_MODULES_GOVERNOR")
        contract["modules"].update(dict(zip(ids, addresses)))
        self.calls.append(("set_modules",))
        self._save()

    def change_modules_governor(self, controller: str, sender: str, governor: str) -> None:
        self._maybe_fail("change_modules_governor")
        contract = self.contract(controller)
        if not same_address(contract["modules_governor"], sender):
            raise ExternalCallFailure("CTR_SENDER_NOT_MODULES_GOVERNOR")
        contract["modules_governor"] = governor
        self.calls.append(("change_modules_governor", governor))
        self._save()

    def verify(self, address: str, kind: str, url: str) -> str:
        self._maybe_fail(f"verify:{kind}")
        self.contract(address)
        self.verified[address] = url
        self.calls.append(("verify", kind))
        self._save()
        return url

    def count(self, call: str) -> int:
        """Number of calls of the given type made through this instance."""
        return sum(1 for entry in self.calls if entry[0] == call)


class LocalModuleHandle(ModuleHandle):
    pass


class LocalControllerHandle(ControllerHandle):
    def __init__(self, chain: LocalChain, sender: str, address: str, creation_ref: Optional[str] = None):
        super().__init__(ModuleKind.CONTROLLER, address, creation_ref)
        self._chain = chain
        self._sender = sender

    async def get_modules_governor(self) -> str:
        return self._chain.contract(self.address)["modules_governor"]

    async def set_modules(self, ids: Sequence[str], addresses: Sequence[str]) -> None:
        self._chain.set_modules(self.address, self._sender, ids, addresses)

    async def change_modules_governor(self, address: str) -> None:
        self._chain.change_modules_governor(self.address, self._sender, address)


class LocalModuleFactory(ModuleFactory):
    def __init__(self, chain: LocalChain, sender: str):
        self.chain = chain
        self.sender = sender

    def _handle(self, kind: ModuleKind, address: str, creation_ref: Optional[str]) -> ModuleHandle:
        if kind is ModuleKind.CONTROLLER:
            return LocalControllerHandle(self.chain, self.sender, address, creation_ref)
        return LocalModuleHandle(kind, address, creation_ref)

    async def attach(self, kind: ModuleKind, address: str) -> ModuleHandle:
        contract = self.chain.contract(address)
        if contract["kind"] != kind.value:
            raise ExternalCallFailure(f"Contract at {address} is a {contract['kind']}, not a {kind.value}")
        return self._handle(kind, address, None)

    async def create(self, kind: ModuleKind, constructor_args: Tuple[Any, ...]) -> ModuleHandle:
        address, transaction_hash = self.chain.deploy(kind.value, constructor_args, self.sender)
        return self._handle(kind, address, transaction_hash)

    async def create_token(self, token: TokenConfig) -> str:
        return self.chain.deploy_token(token.symbol, token.decimals, self.sender)


class LocalVerifier(ContractVerifier):
    def __init__(self, chain: LocalChain, explorer_url: str):
        self.chain = chain
        self.explorer_url = explorer_url.rstrip("/")

    async def verify(self, handle: ModuleHandle, source: VerificationSource) -> str:
        url = f"{self.explorer_url}/address/{handle.address}#code"
        logger.debug(f"Publishing {source.package} sources for {handle.address} ({len(source.headers)} headers)")
        return self.chain.verify(handle.address, handle.kind.value, url)


@ENVIRONMENTS.register_module()
class LocalEnvironment(DeploymentEnvironment):
    """Dry-run environment backed by a LocalChain."""

    def __init__(
        self,
        network: str = "local",
        sender: str = DEFAULT_SENDER,
        state_path: Optional[str] = None,
        explorer_url: Optional[str] = "https://explorer.local",
        fail_on: Iterable[str] = (),
    ):
        """
        Initialize the local environment.

        Args:
            network: Network name used to namespace the deployment store
            sender: Address sending every transaction
            state_path: Optional JSON file persisting chain state between runs
            explorer_url: Base URL of verification links; None disables verification
            fail_on: One-shot failing calls, see LocalChain
        """
        self.network = network
        self.sender = sender
        self.chain = LocalChain(network=network, state_path=state_path, fail_on=fail_on)
        self._factory = LocalModuleFactory(self.chain, sender)
        self._verifier = LocalVerifier(self.chain, explorer_url) if explorer_url else None

    @property
    def factory(self) -> ModuleFactory:
        return self._factory

    @property
    def verifier(self) -> Optional[ContractVerifier]:
        return self._verifier

    async def get_sender(self) -> str:
        return self.sender
