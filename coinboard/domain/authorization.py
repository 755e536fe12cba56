"""Authorization gate: may this identity act on a resource owned by someone?

The gate is a pure decision. Callers resolve the resource owner themselves
(usually inside the same transaction that will perform the mutation).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from coinboard.core.errors import ForbiddenError, UnauthenticatedError

AUTHENTICATION_REQUIRED = "authentication required"
NOT_OWNER = "not the owner"


class Access(str, Enum):
    READ = "read"
    MUTATE = "mutate"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(True)


def authorize(identity: Optional[int], resource_owner: Optional[int], required: Access) -> Decision:
    """Reads are public. Mutations require the identity to be the owner."""
    if required is Access.READ:
        return ALLOW
    if identity is None:
        return Decision(False, AUTHENTICATION_REQUIRED)
    if resource_owner is None or identity != resource_owner:
        return Decision(False, NOT_OWNER)
    return ALLOW


def ensure_allowed(identity: Optional[int], resource_owner: Optional[int], required: Access) -> None:
    """Raise UnauthenticatedError / ForbiddenError when ``authorize`` denies."""
    decision = authorize(identity, resource_owner, required)
    if decision.allowed:
        return
    if decision.reason == AUTHENTICATION_REQUIRED:
        raise UnauthenticatedError()
    raise ForbiddenError()
