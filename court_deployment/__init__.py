"""
Court Deployment Framework

Resumable, dependency-ordered deployment of the court modules (controller,
dispute manager, jurors registry, voting, treasury and subscriptions), their
wiring on the controller, the modules governor handoff and source
verification.
"""

from court_deployment.core import DeploymentPlan, DeploymentRecord, ModuleKind
from court_deployment.environments import LocalEnvironment, build_environment
from court_deployment.runtime import DeploymentRunner, DeploymentStore

__all__ = [
    "DeploymentPlan",
    "DeploymentRecord",
    "DeploymentRunner",
    "DeploymentStore",
    "LocalEnvironment",
    "ModuleKind",
    "build_environment",
]

__version__ = "1.0.0"
