"""Configuration subpackage for deployment core."""

from court_deployment.core.config.base_config import (
    ClockConfig,
    CourtConfig,
    DeploymentPlan,
    GovernorConfig,
    GovernorsConfig,
    JurorsConfig,
    ResumeConfig,
    StoreConfig,
    SubscriptionsConfig,
    TokenConfig,
    VerificationConfig,
    load_plan,
    parse_base_args,
    setup_logging,
)
from court_deployment.core.config.constants import MODULE_IDS, VERSION, WIRING_ORDER

__all__ = [
    "ClockConfig",
    "CourtConfig",
    "DeploymentPlan",
    "GovernorConfig",
    "GovernorsConfig",
    "JurorsConfig",
    "ResumeConfig",
    "StoreConfig",
    "SubscriptionsConfig",
    "TokenConfig",
    "VerificationConfig",
    "load_plan",
    "parse_base_args",
    "setup_logging",
    "MODULE_IDS",
    "VERSION",
    "WIRING_ORDER",
]
