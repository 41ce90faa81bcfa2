"""Operator directory port.

Fleet only needs to know which tenant a principal operates and whether
it has been approved; the onboarding context owns the tenant itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class OperatorAccount:
    """The tenant a principal administers, as seen from the fleet context."""

    tenant_id: str
    owner_id: str
    is_approved: bool


@runtime_checkable
class IOperatorDirectory(Protocol):
    """Looks up the tenant owned by a principal."""

    async def get_by_owner(self, owner_id: str) -> OperatorAccount | None:
        """Return the principal's tenant, or None if it has none."""
        ...
