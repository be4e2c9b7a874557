"""
Persisted record of what has been deployed so far.

The store is a JSON document keyed by network, then by module:

    {"<network>": {"controller": {"address": ..., "transactionHash": ..., "version": ...}, ...}}

Every write replaces a single module entry and lands on disk before the call
returns, so a crash between two steps leaves the store describing exactly the
steps that finished.
"""

import logging
import os
import os.path as osp
import tempfile
from typing import Any, Dict, Mapping, Optional

import mmengine

from court_deployment.core.errors import InvalidRecordError
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.records import DeploymentRecord


def load_json_document(path: str) -> Dict[str, Any]:
    """Load a JSON document, returning an empty one when the file does not exist yet."""
    if not osp.exists(path):
        return {}
    data = mmengine.load(path, file_format="json")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRecordError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return data


def dump_json_document(data: Dict[str, Any], path: str) -> None:
    """Write a JSON document atomically (temp file in the same directory, then rename)."""
    directory = osp.dirname(osp.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    os.close(fd)
    try:
        mmengine.dump(data, tmp_path, file_format="json", indent=2, sort_keys=True)
        os.replace(tmp_path, path)
    finally:
        if osp.exists(tmp_path):
            os.remove(tmp_path)


class DeploymentStore:
    """
    Deployment records of one network, backed by a JSON file.

    Only two writes exist: recording a freshly deployed module and adding the
    verification reference to an existing record. Records are never removed.
    """

    def __init__(self, path: str, network: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the deployment store.

        Args:
            path: JSON file holding the records (created on first write)
            network: Network namespace inside the file
            logger: Logger instance
        """
        self.path = path
        self.network = network
        self.logger = logger or logging.getLogger(__name__)
        self._document = load_json_document(path)
        self._revision = 0

    @property
    def revision(self) -> int:
        """Number of writes performed through this store instance."""
        return self._revision

    def _entries(self) -> Dict[str, Any]:
        entries = self._document.get(self.network, {}) or {}
        if not isinstance(entries, Mapping):
            raise InvalidRecordError(f"Corrupt entries for network '{self.network}' in {self.path}: expected an object")
        return entries

    def get(self, kind: ModuleKind) -> Optional[DeploymentRecord]:
        """
        Get the stored record of a module.

        Entries without any deployment data count as absent; entries holding an
        address without a creation transaction (or the reverse) are rejected.

        Args:
            kind: Module to look up

        Returns:
            DeploymentRecord if the module was deployed, None otherwise
        """
        raw = self._entries().get(kind.value)
        if not raw:
            return None
        if not isinstance(raw, Mapping):
            raise InvalidRecordError(
                f"Corrupt '{kind.value}' entry for network '{self.network}' in {self.path}: "
                f"expected an object, got {type(raw).__name__}"
            )
        if not any(raw.get(key) for key in ("address", "transactionHash", "verification")):
            return None
        try:
            return DeploymentRecord.from_dict(raw)
        except InvalidRecordError as exc:
            raise InvalidRecordError(
                f"Corrupt '{kind.value}' entry for network '{self.network}' in {self.path}: {exc}"
            ) from exc

    def has_address(self, kind: ModuleKind) -> bool:
        record = self.get(kind)
        return record is not None and bool(record.address)

    def records(self) -> Dict[ModuleKind, DeploymentRecord]:
        """Return every stored record of this network, in module order."""
        result = {}
        for kind in ModuleKind:
            record = self.get(kind)
            if record is not None:
                result[kind] = record
        return result

    def record_deployment(self, kind: ModuleKind, record: DeploymentRecord) -> None:
        """
        Persist the record of a freshly deployed module.

        Args:
            kind: Module that was deployed
            record: Complete record (address and creation transaction)

        Raises:
            InvalidRecordError: If the module already has a stored address
        """
        existing = self.get(kind)
        if existing is not None:
            raise InvalidRecordError(
                f"'{kind.value}' is already recorded at {existing.address}; deployment records are immutable"
            )
        self._write(kind, record)
        self.logger.debug(f"Recorded {kind.value} deployment at {record.address} in {self.path}")

    def record_verification(self, kind: ModuleKind, verification_ref: str) -> DeploymentRecord:
        """
        Add the verification reference to a stored record, leaving the other fields untouched.

        Args:
            kind: Module that was verified
            verification_ref: Reference returned by the verifier

        Returns:
            The updated record

        Raises:
            InvalidRecordError: If the module has no record or is already verified
        """
        existing = self.get(kind)
        if existing is None:
            raise InvalidRecordError(f"Cannot verify '{kind.value}': no deployment recorded for it")
        updated = existing.with_verification(verification_ref)
        self._write(kind, updated)
        self.logger.debug(f"Recorded {kind.value} verification {verification_ref} in {self.path}")
        return updated

    def _write(self, kind: ModuleKind, record: DeploymentRecord) -> None:
        # Re-read so entries written by other networks since startup are kept.
        document = load_json_document(self.path)
        document.setdefault(self.network, {})[kind.value] = record.to_dict()
        dump_json_document(document, self.path)
        self._document = document
        self._revision += 1
