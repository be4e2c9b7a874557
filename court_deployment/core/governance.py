"""
Authority tie-break shared by module wiring and governance handoff.

The decision is a pure function of three identities so it can be exercised
without a chain: only the TRANSFER branch ever leads to a network call.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class AuthorityAction(str, Enum):
    """What to do given who currently holds the modules governor role."""

    TRANSFER = "transfer"
    ALREADY_SATISFIED = "already_satisfied"
    UNAUTHORIZED = "unauthorized"


def same_address(left: Optional[str], right: Optional[str]) -> bool:
    """Compare two hex addresses ignoring checksum casing."""
    if not left or not right:
        return False
    return left.strip().lower() == right.strip().lower()


def decide_authority_action(current: str, caller: str, target: str) -> AuthorityAction:
    """
    Decide how to treat the modules governor role.

    The caller acts only while it is the current holder. A holder equal to the
    target means an earlier run already finished the job; any other holder took
    the role out of band. Neither of those is an error.

    Args:
        current: Address currently holding the role on the controller
        caller: Address sending the transactions
        target: Address the role should end up with

    Returns:
        AuthorityAction for the given identities
    """
    if same_address(current, caller):
        return AuthorityAction.TRANSFER
    if same_address(current, target):
        return AuthorityAction.ALREADY_SATISFIED
    return AuthorityAction.UNAUTHORIZED
