"""Persisted deployment facts, one record per module."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from court_deployment.core.config.constants import VERSION
from court_deployment.core.errors import InvalidRecordError


@dataclass(frozen=True)
class DeploymentRecord:
    """
    What is known about one deployed module.

    Attributes:
        address: On-chain address of the instance. Never changes once written.
        creation_ref: Hash of the transaction that created the instance.
        schema_version: Deployer version that produced the record.
        verification_ref: Verification URL, present once the module was verified.
    """

    address: str
    creation_ref: str
    schema_version: str = VERSION
    verification_ref: Optional[str] = None

    def __post_init__(self) -> None:
        # address and creation_ref only ever travel together
        if not self.address or not self.creation_ref:
            raise InvalidRecordError(
                f"Deployment record needs both an address and a creation transaction "
                f"(address={self.address!r}, transactionHash={self.creation_ref!r})"
            )

    @property
    def is_verified(self) -> bool:
        return bool(self.verification_ref)

    def with_verification(self, verification_ref: str) -> "DeploymentRecord":
        """Return a copy carrying the given verification reference, leaving every other field untouched."""
        if not verification_ref:
            raise InvalidRecordError(f"Empty verification reference for instance at {self.address}")
        if self.is_verified:
            raise InvalidRecordError(
                f"Instance at {self.address} is already verified ({self.verification_ref}), refusing to overwrite"
            )
        return replace(self, verification_ref=verification_ref)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeploymentRecord":
        """Create a record from its stored representation."""
        return cls(
            address=data.get("address") or "",
            creation_ref=data.get("transactionHash") or "",
            schema_version=data.get("version") or VERSION,
            verification_ref=data.get("verification") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored representation."""
        data = {
            "address": self.address,
            "transactionHash": self.creation_ref,
            "version": self.schema_version,
        }
        if self.verification_ref:
            data["verification"] = self.verification_ref
        return data
