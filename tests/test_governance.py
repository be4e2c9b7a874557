"""Authority tie-break, module wiring and modules governor handoff."""

import logging

import pytest

from court_deployment.core.config.base_config import GovernorConfig
from court_deployment.core.config.constants import MODULE_IDS, WIRING_ORDER
from court_deployment.core.errors import DependencyNotReadyError
from court_deployment.core.governance import AuthorityAction, decide_authority_action, same_address
from court_deployment.core.interfaces import ControllerHandle, ModuleHandle
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.results import StepOutcome
from court_deployment.runtime.governance_orchestrator import GovernanceOrchestrator

CALLER = "0x00000000000000000000000000000000000000Aa"
TARGET = GovernorConfig(address="0x00000000000000000000000000000000000000Bb", description="DAO")
STRANGER = "0x00000000000000000000000000000000000000Cc"


class RecordingController(ControllerHandle):
    def __init__(self, governor: str):
        super().__init__(ModuleKind.CONTROLLER, "0x00000000000000000000000000000000000000C0", "0xtx")
        self.governor = governor
        self.set_modules_calls = []
        self.change_calls = []

    async def get_modules_governor(self) -> str:
        return self.governor

    async def set_modules(self, ids, addresses) -> None:
        self.set_modules_calls.append((list(ids), list(addresses)))

    async def change_modules_governor(self, address: str) -> None:
        self.change_calls.append(address)
        self.governor = address


def dependent_handles():
    return {
        kind: ModuleHandle(kind, f"0x{index:040x}", "0xtx")
        for index, kind in enumerate(ModuleKind.dependents(), start=1)
    }


@pytest.fixture
def orchestrator():
    return GovernanceOrchestrator(logging.getLogger("court_deployment.tests"))


class TestDecideAuthorityAction:
    def test_caller_holds_role(self):
        assert decide_authority_action(CALLER, CALLER, TARGET.address) is AuthorityAction.TRANSFER

    def test_target_holds_role(self):
        assert decide_authority_action(TARGET.address, CALLER, TARGET.address) is AuthorityAction.ALREADY_SATISFIED

    def test_third_party_holds_role(self):
        assert decide_authority_action(STRANGER, CALLER, TARGET.address) is AuthorityAction.UNAUTHORIZED

    def test_comparison_ignores_case(self):
        assert decide_authority_action(CALLER.lower(), CALLER.upper(), TARGET.address) is AuthorityAction.TRANSFER
        assert (
            decide_authority_action(TARGET.address.upper(), CALLER, TARGET.address.lower())
            is AuthorityAction.ALREADY_SATISFIED
        )

    def test_caller_equal_to_target_still_transfers(self):
        assert decide_authority_action(CALLER, CALLER, CALLER) is AuthorityAction.TRANSFER

    def test_empty_addresses_never_match(self):
        assert not same_address("", "")
        assert not same_address(None, CALLER)
        assert decide_authority_action("", CALLER, TARGET.address) is AuthorityAction.UNAUTHORIZED


class TestWireModules:
    @pytest.mark.asyncio
    async def test_sets_all_modules_in_one_call(self, orchestrator):
        controller = RecordingController(CALLER)
        modules = dependent_handles()

        outcome = await orchestrator.wire_modules(controller, modules, CALLER, TARGET)

        assert outcome is StepOutcome.APPLIED
        assert len(controller.set_modules_calls) == 1
        ids, addresses = controller.set_modules_calls[0]
        assert ids == [MODULE_IDS[kind] for kind in WIRING_ORDER]
        assert addresses == [modules[kind].address for kind in WIRING_ORDER]

    @pytest.mark.asyncio
    async def test_skips_when_role_already_handed_off(self, orchestrator):
        controller = RecordingController(TARGET.address)

        outcome = await orchestrator.wire_modules(controller, dependent_handles(), CALLER, TARGET)

        assert outcome is StepOutcome.ALREADY_SATISFIED
        assert controller.set_modules_calls == []

    @pytest.mark.asyncio
    async def test_skips_without_error_when_third_party_holds_role(self, orchestrator, caplog):
        controller = RecordingController(STRANGER)

        with caplog.at_level(logging.WARNING):
            outcome = await orchestrator.wire_modules(controller, dependent_handles(), CALLER, TARGET)

        assert outcome is StepOutcome.UNAUTHORIZED
        assert controller.set_modules_calls == []
        assert "no longer the modules governor" in caplog.text

    @pytest.mark.asyncio
    async def test_requires_every_dependent_module(self, orchestrator):
        controller = RecordingController(CALLER)
        modules = dependent_handles()
        del modules[ModuleKind.SUBSCRIPTIONS]

        with pytest.raises(DependencyNotReadyError) as exc_info:
            await orchestrator.wire_modules(controller, modules, CALLER, TARGET)

        assert exc_info.value.missing == ("subscriptions",)
        assert controller.set_modules_calls == []


class TestHandoffGovernance:
    @pytest.mark.asyncio
    async def test_transfers_when_caller_holds_role(self, orchestrator):
        controller = RecordingController(CALLER)

        outcome = await orchestrator.handoff_governance(controller, CALLER, TARGET)

        assert outcome is StepOutcome.APPLIED
        assert controller.change_calls == [TARGET.address]

    @pytest.mark.asyncio
    async def test_noop_when_target_holds_role(self, orchestrator):
        controller = RecordingController(TARGET.address.lower())

        outcome = await orchestrator.handoff_governance(controller, CALLER, TARGET)

        assert outcome is StepOutcome.ALREADY_SATISFIED
        assert controller.change_calls == []

    @pytest.mark.asyncio
    async def test_noop_when_third_party_holds_role(self, orchestrator):
        controller = RecordingController(STRANGER)

        outcome = await orchestrator.handoff_governance(controller, CALLER, TARGET)

        assert outcome is StepOutcome.UNAUTHORIZED
        assert controller.change_calls == []
        assert controller.governor == STRANGER
