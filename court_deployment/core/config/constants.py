"""
Centralized constants for the court deployment framework.
"""

from dataclasses import dataclass

from court_deployment.core.module_kind import ModuleKind

# Written into every record this deployer produces
VERSION = "v1.0"

MAX_UINT64 = (1 << 64) - 1

# Module identifiers understood by the controller's setModules()
DISPUTE_MANAGER_ID = "0x14a6c70f0f6d449c014c7bbc9e68e31e79e8474fb03b7194df83109a2d888ae6"
TREASURY_ID = "0x06aa03964db1f7257357ef09714a5f0ca3633723df419e97015e0c7a3e83edb7"
VOTING_ID = "0x7cbb12e82a6d63ff16fe43977f43e3e2b247ecd4e62c0e340da8800a48c67346"
JURORS_REGISTRY_ID = "0x3b21d36b36308c830e6c4053fb40a3b6d79dde78947fbf6b0accd30720ab5370"
SUBSCRIPTIONS_ID = "0x2bfa3327fe52344390da94c32a346eeb1b65a8b583e4335a419b9471e88c1365"

MODULE_IDS = {
    ModuleKind.DISPUTES: DISPUTE_MANAGER_ID,
    ModuleKind.TREASURY: TREASURY_ID,
    ModuleKind.VOTING: VOTING_ID,
    ModuleKind.REGISTRY: JURORS_REGISTRY_ID,
    ModuleKind.SUBSCRIPTIONS: SUBSCRIPTIONS_ID,
}

# Order of the batched setModules() call
WIRING_ORDER = (
    ModuleKind.DISPUTES,
    ModuleKind.TREASURY,
    ModuleKind.VOTING,
    ModuleKind.REGISTRY,
    ModuleKind.SUBSCRIPTIONS,
)


@dataclass(frozen=True)
class VerificationDefaults:
    """Default values for the verification pass."""

    SOURCE_PACKAGE: str = "@aragon/court"
    HEADERS: tuple = (
        "Commit sha: c7bf36f004a2b0e11d7e14234cea7853fd3a523a",
        "GitHub repository: https://github.com/aragon/aragon-court",
        "Tool used for the deploy: https://github.com/aragon/aragon-network-deploy",
    )


@dataclass(frozen=True)
class StoreDefaults:
    """Default locations of persisted deployment state."""

    STORE_PATH: str = "deployments.json"
    PENDING_SUFFIX: str = ".pending"


VERIFICATION_DEFAULTS = VerificationDefaults()
STORE_DEFAULTS = StoreDefaults()
