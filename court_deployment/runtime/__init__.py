"""Shared deployment runtime (runner + orchestrators).

This package contains the execution layer:
- DeploymentRunner
- Module/Governance/Verification orchestrators
- DeploymentStore and the pending-creation journal
"""

from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.governance_orchestrator import GovernanceOrchestrator
from court_deployment.runtime.module_orchestrator import ModuleOrchestrator, ResolvedModule
from court_deployment.runtime.pending_journal import PendingCreationJournal, journal_path_for
from court_deployment.runtime.runner import DeploymentRunner
from court_deployment.runtime.verification_orchestrator import VerificationOrchestrator

__all__ = [
    "DeploymentStore",
    "PendingCreationJournal",
    "journal_path_for",
    "ModuleOrchestrator",
    "ResolvedModule",
    "GovernanceOrchestrator",
    "VerificationOrchestrator",
    "DeploymentRunner",
]
