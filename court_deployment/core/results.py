"""
Typed result classes for deployment runs.

A run reports what it did for every module and every configuration step, so a
partially completed run can be told apart from a finished one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from court_deployment.core.module_kind import ModuleKind


class DeploymentStage(str, Enum):
    """States of a full run, strictly in this order."""

    RESOLVE_CONTROLLER = "resolve_controller"
    RESOLVE_DEPENDENTS = "resolve_dependents"
    WIRE_MODULES = "wire_modules"
    HANDOFF_GOVERNANCE = "handoff_governance"
    VERIFY = "verify"
    DONE = "done"


class ResolutionOutcome(str, Enum):
    """How a module was resolved."""

    LOADED = "loaded"
    DEPLOYED = "deployed"


class StepOutcome(str, Enum):
    """Outcome of an authority-gated configuration step."""

    APPLIED = "applied"
    ALREADY_SATISFIED = "already_satisfied"
    UNAUTHORIZED = "unauthorized"
    NOT_RUN = "not_run"


class VerificationOutcome(str, Enum):
    """Outcome of verifying a single module."""

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"


@dataclass
class DeploymentResult:
    """
    Report of a deployment run.

    Attributes:
        network: Network the run targeted
        stage: Last stage entered; DONE once everything finished
        modules: How each module was resolved
        addresses: Address of every resolved module
        wiring: Outcome of registering modules on the controller
        handoff: Outcome of the modules governor handoff
        verification: Per-module verification outcome, None when the pass was disabled
    """

    network: str
    stage: DeploymentStage = DeploymentStage.RESOLVE_CONTROLLER
    modules: Dict[ModuleKind, ResolutionOutcome] = field(default_factory=dict)
    addresses: Dict[ModuleKind, str] = field(default_factory=dict)
    wiring: StepOutcome = StepOutcome.NOT_RUN
    handoff: StepOutcome = StepOutcome.NOT_RUN
    verification: Optional[Dict[ModuleKind, VerificationOutcome]] = None

    @property
    def completed(self) -> bool:
        return self.stage is DeploymentStage.DONE

    def deployed(self) -> List[ModuleKind]:
        """Modules created during this run."""
        return [kind for kind, outcome in self.modules.items() if outcome is ResolutionOutcome.DEPLOYED]

    def loaded(self) -> List[ModuleKind]:
        """Modules reused from a previous run."""
        return [kind for kind, outcome in self.modules.items() if outcome is ResolutionOutcome.LOADED]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "network": self.network,
            "stage": self.stage.value,
            "modules": {kind.value: outcome.value for kind, outcome in self.modules.items()},
            "addresses": {kind.value: address for kind, address in self.addresses.items()},
            "wiring": self.wiring.value,
            "handoff": self.handoff.value,
            "verification": (
                None
                if self.verification is None
                else {kind.value: outcome.value for kind, outcome in self.verification.items()}
            ),
        }

    def summary(self) -> List[str]:
        """Human readable lines describing the run."""
        lines = [f"Network: {self.network} (stage: {self.stage.value})"]
        for kind, outcome in self.modules.items():
            lines.append(f" - {kind.value:<14} {outcome.value:<9} {self.addresses.get(kind, '')}")
        lines.append(f"Modules wiring:   {self.wiring.value}")
        lines.append(f"Governor handoff: {self.handoff.value}")
        if self.verification is None:
            lines.append("Verification:     disabled")
        else:
            for kind, outcome in self.verification.items():
                lines.append(f"Verification:     {kind.value} {outcome.value}")
        return lines
