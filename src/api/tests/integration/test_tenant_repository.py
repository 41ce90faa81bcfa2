"""Integration tests for TenantRepository.

These tests require PostgreSQL to be running.
They verify the complete flow of persisting and retrieving tenants.
"""

import pytest

from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import PrincipalId, TenantStatus
from onboarding.infrastructure.tenant_repository import TenantRepository
from onboarding.ports.exceptions import (
    DuplicateRegistrationNumberError,
    DuplicateTenantOwnerError,
)

pytestmark = pytest.mark.integration


def _tenant(owner: str = "owner-1", registration_number: str = "SACCO/001") -> Tenant:
    return Tenant.create(
        owner_id=PrincipalId.from_string(owner),
        name="Metro Trans Sacco",
        registration_number=registration_number,
        contact_email="admin@metrotrans.example",
        verification_documents=[f"{owner}/1700000000000-cert.pdf"],
    )


class TestTenantRoundTrip:
    """Tests for save and retrieve operations."""

    @pytest.mark.asyncio
    async def test_saves_and_retrieves_tenant(
        self, tenant_repository: TenantRepository, async_session
    ):
        """Should save tenant to PostgreSQL and retrieve it."""
        tenant = _tenant()

        async with async_session.begin():
            await tenant_repository.save(tenant)

        async with async_session.begin():
            retrieved = await tenant_repository.get_by_id(tenant.id)

        assert retrieved is not None
        assert retrieved.id == tenant.id
        assert retrieved.status == TenantStatus.PENDING
        assert retrieved.verification_documents == tenant.verification_documents

    @pytest.mark.asyncio
    async def test_persists_review_outcome(
        self, tenant_repository: TenantRepository, async_session
    ):
        tenant = _tenant()
        async with async_session.begin():
            await tenant_repository.save(tenant)

        async with async_session.begin():
            stored = await tenant_repository.get_by_owner(tenant.owner_id)
            assert stored is not None
            stored.reject("Certificate is illegible.", PrincipalId.from_string("admin-1"))
            await tenant_repository.save(stored)

        async with async_session.begin():
            rejected = await tenant_repository.list_by_status(TenantStatus.REJECTED)

        assert [t.id for t in rejected] == [tenant.id]
        assert rejected[0].rejection_reason == "Certificate is illegible."


class TestTenantUniqueness:
    """Tests for the unique constraints on tenants."""

    @pytest.mark.asyncio
    async def test_duplicate_registration_number_raises_error(
        self, tenant_repository: TenantRepository, async_session
    ):
        async with async_session.begin():
            await tenant_repository.save(_tenant(owner="owner-1"))

        with pytest.raises(DuplicateRegistrationNumberError):
            async with async_session.begin():
                await tenant_repository.save(_tenant(owner="owner-2"))

    @pytest.mark.asyncio
    async def test_second_tenant_for_owner_raises_error(
        self, tenant_repository: TenantRepository, async_session
    ):
        async with async_session.begin():
            await tenant_repository.save(_tenant(registration_number="SACCO/001"))

        with pytest.raises(DuplicateTenantOwnerError):
            async with async_session.begin():
                await tenant_repository.save(_tenant(registration_number="SACCO/002"))
