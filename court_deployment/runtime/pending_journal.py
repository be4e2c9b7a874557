"""
Journal of module creations that were started but not yet recorded.

An entry is written right before a creation transaction is submitted and
removed once the deployment record is stored. An entry still present on the
next run means the process died while waiting for the creation, which may or
may not have landed on-chain.
"""

import logging
import os.path as osp
from datetime import datetime, timezone
from typing import Dict, Optional

from court_deployment.core.config.constants import STORE_DEFAULTS
from court_deployment.core.module_kind import ModuleKind
from court_deployment.runtime.deployment_store import dump_json_document, load_json_document


def journal_path_for(store_path: str) -> str:
    """Return the journal path that sits next to a store file."""
    root, ext = osp.splitext(store_path)
    return f"{root}{STORE_DEFAULTS.PENDING_SUFFIX}{ext or '.json'}"


class PendingCreationJournal:
    """Sidecar file of in-flight module creations for one network."""

    def __init__(self, path: str, network: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.network = network
        self.logger = logger or logging.getLogger(__name__)

    def pending(self) -> Dict[ModuleKind, str]:
        """Return in-flight creations mapped to the time they were started."""
        entries = load_json_document(self.path).get(self.network, {}) or {}
        return {ModuleKind.from_value(kind): started for kind, started in entries.items()}

    def is_pending(self, kind: ModuleKind) -> bool:
        return kind in self.pending()

    def mark(self, kind: ModuleKind) -> None:
        document = load_json_document(self.path)
        document.setdefault(self.network, {})[kind.value] = datetime.now(timezone.utc).isoformat()
        dump_json_document(document, self.path)

    def clear(self, kind: ModuleKind) -> None:
        document = load_json_document(self.path)
        entries = document.get(self.network, {})
        if kind.value not in entries:
            return
        del entries[kind.value]
        if not entries:
            del document[self.network]
        dump_json_document(document, self.path)
