"""Repository protocols (ports) for the onboarding bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import PrincipalId, TenantId, TenantStatus


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence.

    Tenants are stored in the relational store only. Uniqueness of
    registration number and owner is enforced by unique indexes, which
    are the sole guard against concurrent duplicate applications.
    """

    async def save(self, tenant: Tenant) -> None:
        """Insert a new tenant or update an existing one.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateRegistrationNumberError: If the registration number is taken
            DuplicateTenantOwnerError: If the owner already has a tenant
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID."""
        ...

    async def get_by_owner(self, owner_id: PrincipalId) -> Tenant | None:
        """Retrieve the tenant owned by a principal."""
        ...

    async def get_by_registration_number(
        self, registration_number: str
    ) -> Tenant | None:
        """Retrieve a tenant by its registration number."""
        ...

    async def list_by_status(self, status: TenantStatus) -> list[Tenant]:
        """List tenants in a given status, oldest first."""
        ...
