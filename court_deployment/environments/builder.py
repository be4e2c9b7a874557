"""Registry of deployment environments.

Plans select an environment with ``environment = dict(type=..., ...)``.
Environments living outside this package register themselves on import;
list their modules in the plan's ``custom_imports`` so MMEngine imports them
while loading the plan.
"""

from typing import Any, Mapping

from mmengine.registry import Registry

from court_deployment.core.interfaces import DeploymentEnvironment

ENVIRONMENTS = Registry("environment")


def build_environment(cfg: Mapping[str, Any]) -> DeploymentEnvironment:
    """Build a deployment environment from its registry config."""
    if "type" not in cfg:
        raise KeyError(f"Environment config must name a registered type, got {dict(cfg)}")
    environment = ENVIRONMENTS.build(dict(cfg))
    if not isinstance(environment, DeploymentEnvironment):
        raise TypeError(f"'{cfg['type']}' does not build a DeploymentEnvironment, got {type(environment).__name__}")
    return environment
