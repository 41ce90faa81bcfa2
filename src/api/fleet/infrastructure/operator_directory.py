"""Operator directory backed by the onboarding context's tenant repository.

This is the translation point between the two contexts: fleet code only
ever sees OperatorAccount, never the onboarding Tenant aggregate.
"""

from __future__ import annotations

from fleet.ports.operators import IOperatorDirectory, OperatorAccount
from onboarding.domain.value_objects import PrincipalId
from onboarding.ports.repositories import ITenantRepository


class TenantOperatorDirectory(IOperatorDirectory):
    """Resolves a principal's tenant through ITenantRepository."""

    def __init__(self, tenant_repository: ITenantRepository):
        self._tenant_repository = tenant_repository

    async def get_by_owner(self, owner_id: str) -> OperatorAccount | None:
        tenant = await self._tenant_repository.get_by_owner(
            PrincipalId.from_string(owner_id)
        )
        if tenant is None:
            return None
        return OperatorAccount(
            tenant_id=tenant.id.value,
            owner_id=tenant.owner_id.value,
            is_approved=tenant.is_approved,
        )
