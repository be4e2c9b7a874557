"""Court module descriptors.

Importing this package registers every module into `module_registry`.
"""

from court_deployment.modules import controlled, controller, disputes, jurors_registry, subscriptions  # noqa: F401
from court_deployment.modules.registry import ModuleDescriptor, ModuleRegistry, module_registry

__all__ = ["ModuleDescriptor", "ModuleRegistry", "module_registry"]
