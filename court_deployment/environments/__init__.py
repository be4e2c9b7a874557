"""Deployment environments (network access for the orchestrators)."""

from court_deployment.environments.builder import ENVIRONMENTS, build_environment
from court_deployment.environments.local import (
    LocalChain,
    LocalControllerHandle,
    LocalEnvironment,
    LocalModuleFactory,
    LocalVerifier,
)

__all__ = [
    "ENVIRONMENTS",
    "build_environment",
    "LocalChain",
    "LocalControllerHandle",
    "LocalEnvironment",
    "LocalModuleFactory",
    "LocalVerifier",
]
