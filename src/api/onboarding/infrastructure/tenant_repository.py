"""PostgreSQL implementation of ITenantRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import violates
from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import (
    PrincipalId,
    TenantId,
    TenantStatus,
)
from onboarding.infrastructure.models import TenantModel
from onboarding.infrastructure.models.tenant import (
    OWNER_CONSTRAINT,
    REGISTRATION_NUMBER_CONSTRAINT,
)
from onboarding.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from onboarding.ports.exceptions import (
    DuplicateRegistrationNumberError,
    DuplicateTenantOwnerError,
)
from onboarding.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant aggregates.

    Uniqueness is checked up front for a friendly error, and again by the
    unique indexes when a concurrent insert wins the race.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Insert or update tenant metadata.

        Raises:
            DuplicateRegistrationNumberError: If the registration number is taken
            DuplicateTenantOwnerError: If the owner already has a tenant
        """
        existing = await self.get_by_registration_number(tenant.registration_number)
        if existing and existing.id != tenant.id:
            self._probe.duplicate_registration_number(tenant.registration_number)
            raise DuplicateRegistrationNumberError()

        try:
            stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                model = TenantModel(id=tenant.id.value, owner_id=str(tenant.owner_id))
                self._session.add(model)

            model.name = tenant.name
            model.registration_number = tenant.registration_number
            model.contact_email = tenant.contact_email
            model.verification_documents = list(tenant.verification_documents)
            model.status = tenant.status.value
            model.rejection_reason = tenant.rejection_reason
            model.reviewed_by = str(tenant.reviewed_by) if tenant.reviewed_by else None

            await self._session.flush()

        except IntegrityError as e:
            if violates(e, REGISTRATION_NUMBER_CONSTRAINT):
                self._probe.duplicate_registration_number(tenant.registration_number)
                raise DuplicateRegistrationNumberError() from e
            if violates(e, OWNER_CONSTRAINT):
                self._probe.duplicate_owner(str(tenant.owner_id))
                raise DuplicateTenantOwnerError() from e
            raise

        self._probe.tenant_saved(tenant.id.value, tenant.status.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        return await self._fetch_one(stmt)

    async def get_by_owner(self, owner_id: PrincipalId) -> Tenant | None:
        stmt = select(TenantModel).where(TenantModel.owner_id == owner_id.value)
        return await self._fetch_one(stmt)

    async def get_by_registration_number(
        self, registration_number: str
    ) -> Tenant | None:
        stmt = select(TenantModel).where(
            TenantModel.registration_number == registration_number.strip()
        )
        return await self._fetch_one(stmt)

    async def list_by_status(self, status: TenantStatus) -> list[Tenant]:
        stmt = (
            select(TenantModel)
            .where(TenantModel.status == status.value)
            .order_by(TenantModel.created_at)
        )
        result = await self._session.execute(stmt)
        tenants = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.tenants_listed(status.value, len(tenants))
        return tenants

    async def _fetch_one(self, stmt) -> Tenant | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        tenant = self._to_domain(model)
        self._probe.tenant_retrieved(tenant.id.value)
        return tenant

    @staticmethod
    def _to_domain(model: TenantModel) -> Tenant:
        return Tenant(
            id=TenantId(value=model.id),
            owner_id=PrincipalId(value=model.owner_id),
            name=model.name,
            registration_number=model.registration_number,
            contact_email=model.contact_email,
            verification_documents=tuple(model.verification_documents or ()),
            status=TenantStatus(model.status),
            rejection_reason=model.rejection_reason,
            reviewed_by=PrincipalId(value=model.reviewed_by)
            if model.reviewed_by
            else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
