"""Exceptions raised by the court deployment framework."""

from __future__ import annotations

from typing import Iterable


class DeploymentError(Exception):
    """Base class for deployment failures that abort a run."""


class DependencyNotReadyError(DeploymentError):
    """A module was about to be deployed before one of its prerequisites was resolved.

    This is an ordering bug, never a transient condition: it is not retried.
    """

    def __init__(self, module: str, missing: Iterable[str]):
        self.module = str(module)
        self.missing = tuple(str(item) for item in missing)
        super().__init__(
            f"Cannot deploy '{self.module}': prerequisite module(s) {list(self.missing)} have not been deployed yet"
        )


class ExternalCallFailure(DeploymentError):
    """A creation, wiring, handoff or verification call definitely failed (e.g. the transaction reverted).

    Collaborators raise it only when the call is known to have had no effect. Any
    other exception (timeouts, lost connections) leaves the outcome unknown.
    """


class InvalidRecordError(DeploymentError, ValueError):
    """A deployment record violates its address / creation reference / verification invariants."""


class IncompleteDeploymentError(DeploymentError):
    """The deployment store does not hold every module required by the requested operation."""


class PendingCreationError(DeploymentError):
    """A previous run started creating a module and never observed the result."""


class PlanConfigError(ValueError):
    """The deployment plan file is missing a section or holds an invalid value."""
