"""Module kinds that make up a court deployment."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union


class ModuleKind(str, Enum):
    """Court modules, in the order they are resolved."""

    CONTROLLER = "controller"
    DISPUTES = "disputes"
    REGISTRY = "registry"
    VOTING = "voting"
    TREASURY = "treasury"
    SUBSCRIPTIONS = "subscriptions"

    @classmethod
    def from_value(cls, value: Union[str, "ModuleKind"]) -> "ModuleKind":
        """
        Normalize module identifiers coming from stores, configs or enums.

        Args:
            value: Module kind as string or ModuleKind enum

        Returns:
            ModuleKind enum instance

        Raises:
            ValueError: If value cannot be mapped to a known module kind
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            normalized = value.strip().lower()
            try:
                return cls(normalized)
            except ValueError as exc:
                raise ValueError(f"Unsupported module '{value}'. Expected one of {[k.value for k in cls]}.") from exc

        raise TypeError(f"Module kind must be a string or ModuleKind enum, got {type(value)}")

    @classmethod
    def dependents(cls) -> Tuple["ModuleKind", ...]:
        """Return every module that is constructed against the controller."""
        return tuple(kind for kind in cls if kind is not cls.CONTROLLER)

    def __str__(self) -> str:  # pragma: no cover - convenience for logging
        return self.value
