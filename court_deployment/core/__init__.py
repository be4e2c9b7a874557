"""Core components for the court deployment framework."""

from court_deployment.core.config.base_config import (
    DeploymentPlan,
    GovernorConfig,
    TokenConfig,
    VerificationConfig,
    load_plan,
    parse_base_args,
    setup_logging,
)
from court_deployment.core.contexts import BuildContext, VerificationSource
from court_deployment.core.errors import (
    DependencyNotReadyError,
    DeploymentError,
    ExternalCallFailure,
    IncompleteDeploymentError,
    InvalidRecordError,
    PendingCreationError,
    PlanConfigError,
)
from court_deployment.core.governance import AuthorityAction, decide_authority_action, same_address
from court_deployment.core.interfaces import (
    ContractVerifier,
    ControllerHandle,
    DeploymentEnvironment,
    ModuleFactory,
    ModuleHandle,
)
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.records import DeploymentRecord
from court_deployment.core.results import (
    DeploymentResult,
    DeploymentStage,
    ResolutionOutcome,
    StepOutcome,
    VerificationOutcome,
)

__all__ = [
    # Modules and records
    "ModuleKind",
    "DeploymentRecord",
    # Plan
    "DeploymentPlan",
    "GovernorConfig",
    "TokenConfig",
    "VerificationConfig",
    "load_plan",
    "parse_base_args",
    "setup_logging",
    # Contexts
    "BuildContext",
    "VerificationSource",
    # Collaborators
    "ModuleHandle",
    "ControllerHandle",
    "ModuleFactory",
    "ContractVerifier",
    "DeploymentEnvironment",
    # Authority
    "AuthorityAction",
    "decide_authority_action",
    "same_address",
    # Results
    "DeploymentResult",
    "DeploymentStage",
    "ResolutionOutcome",
    "StepOutcome",
    "VerificationOutcome",
    # Errors
    "DeploymentError",
    "DependencyNotReadyError",
    "ExternalCallFailure",
    "IncompleteDeploymentError",
    "InvalidRecordError",
    "PendingCreationError",
    "PlanConfigError",
]
