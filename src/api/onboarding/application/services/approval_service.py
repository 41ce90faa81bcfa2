"""Tenant approval application service.

Reviewers move pending tenants to approved or rejected. Approval has two
writes in two systems: the tenant row, then the owner's role in the
identity provider. The role write is not compensated; a failure leaves an
approved tenant whose owner is still a rider, which ``reconcile_roles``
repairs.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.application.observability import (
    ApprovalServiceProbe,
    DefaultApprovalServiceProbe,
)
from onboarding.domain.aggregates import Principal, Tenant
from onboarding.domain.exceptions import InvalidStatusTransitionError
from onboarding.domain.value_objects import Role, TenantId, TenantStatus
from onboarding.ports.exceptions import TenantNotFoundError
from onboarding.ports.identity import IIdentityProvider
from onboarding.ports.repositories import ITenantRepository
from shared_kernel.errors import (
    ConsistencyGapError,
    DependencyError,
    FleetError,
    UnauthorizedError,
    ValidationError,
)
from shared_kernel.results import Failure, OperationResult, Success

ROLE_ESCALATION_GAP_MESSAGE = (
    "The Sacco was approved but its administrator could not be upgraded. "
    "The account has been flagged for follow-up."
)


class ApprovalService:
    """Application service for reviewing tenant applications."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        identity_provider: IIdentityProvider,
        session: AsyncSession,
        probe: ApprovalServiceProbe | None = None,
    ):
        """Initialize ApprovalService with dependencies.

        Args:
            tenant_repository: Repository for tenant persistence
            identity_provider: Identity provider holding owner roles
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._identity_provider = identity_provider
        self._session = session
        self._probe = probe or DefaultApprovalServiceProbe()

    async def approve(
        self, reviewer: Principal, tenant_id: TenantId
    ) -> OperationResult[Tenant]:
        """Approve a pending tenant and promote its owner to operator admin.

        Args:
            reviewer: Acting principal; must hold the reviewer role
            tenant_id: Tenant under review

        Returns:
            Success with the approved tenant, or a Failure. A failed role
            write yields a consistency_gap failure while the tenant stays
            approved.
        """
        try:
            tenant = await self._transition(
                reviewer, tenant_id, TenantStatus.APPROVED, reason=None
            )
        except FleetError as e:
            self._probe.review_failed(
                tenant_id=tenant_id.value, kind=e.kind.value, error=repr(e.__cause__ or e)
            )
            return Failure.from_error(e)

        try:
            await self._identity_provider.set_role(tenant.owner_id, Role.OPERATOR_ADMIN)
        except Exception as e:
            self._probe.role_escalation_gap(
                tenant_id=tenant.id.value, owner_id=str(tenant.owner_id), error=repr(e)
            )
            return Failure.from_error(ConsistencyGapError(ROLE_ESCALATION_GAP_MESSAGE))

        self._probe.tenant_approved(
            tenant_id=tenant.id.value,
            owner_id=str(tenant.owner_id),
            reviewer_id=str(reviewer.id),
        )
        return Success(data=tenant, message="Sacco approved successfully.")

    async def reject(
        self, reviewer: Principal, tenant_id: TenantId, reason: str
    ) -> OperationResult[Tenant]:
        """Reject a pending tenant with a reason. No role changes.

        Args:
            reviewer: Acting principal; must hold the reviewer role
            tenant_id: Tenant under review
            reason: Non-blank explanation shown to the applicant
        """
        try:
            if not reason or not reason.strip():
                raise ValidationError(
                    "A rejection reason is required.", field="reason"
                )
            tenant = await self._transition(
                reviewer, tenant_id, TenantStatus.REJECTED, reason=reason
            )
        except FleetError as e:
            self._probe.review_failed(
                tenant_id=tenant_id.value, kind=e.kind.value, error=repr(e.__cause__ or e)
            )
            return Failure.from_error(e)

        self._probe.tenant_rejected(
            tenant_id=tenant.id.value, reviewer_id=str(reviewer.id)
        )
        return Success(data=tenant, message="Sacco application rejected.")

    async def reconcile_roles(self) -> list[TenantId]:
        """Re-apply the operator admin role for approved tenants missing it.

        Failures for one owner are logged and skipped so a single broken
        account cannot block the rest.

        Returns:
            IDs of tenants whose owner role was repaired

        Raises:
            DependencyError: If the approved tenants could not be listed
        """
        try:
            async with self._session.begin():
                approved = await self._tenant_repository.list_by_status(
                    TenantStatus.APPROVED
                )
        except Exception as e:
            self._probe.role_reconciliation_aborted(error=repr(e))
            raise DependencyError(
                "Failed to load approved Saccos. Please try again."
            ) from e

        repaired: list[TenantId] = []
        for tenant in approved:
            try:
                owner = await self._identity_provider.get_principal(tenant.owner_id)
                if owner is None or owner.role == Role.OPERATOR_ADMIN:
                    continue
                await self._identity_provider.set_role(
                    tenant.owner_id, Role.OPERATOR_ADMIN
                )
            except Exception as e:
                self._probe.role_reconciliation_failed(
                    tenant_id=tenant.id.value,
                    owner_id=str(tenant.owner_id),
                    error=repr(e),
                )
                continue

            self._probe.role_reconciled(
                tenant_id=tenant.id.value, owner_id=str(tenant.owner_id)
            )
            repaired.append(tenant.id)

        return repaired

    def _require_reviewer(self, principal: Principal) -> None:
        if not principal.is_reviewer:
            self._probe.review_denied(
                principal_id=str(principal.id), role=principal.role.value
            )
            raise UnauthorizedError("Insufficient permissions")

    async def _transition(
        self,
        reviewer: Principal,
        tenant_id: TenantId,
        target: TenantStatus,
        reason: str | None,
    ) -> Tenant:
        self._require_reviewer(reviewer)

        try:
            async with self._session.begin():
                tenant = await self._tenant_repository.get_by_id(tenant_id)
                if tenant is None:
                    self._probe.tenant_not_found(tenant_id=tenant_id.value)
                    raise TenantNotFoundError()

                try:
                    if target == TenantStatus.APPROVED:
                        tenant.approve(reviewed_by=reviewer.id)
                    else:
                        tenant.reject(reason or "", reviewed_by=reviewer.id)
                except InvalidStatusTransitionError:
                    self._probe.invalid_transition(
                        tenant_id=tenant_id.value,
                        status=tenant.status.value,
                        target=target.value,
                    )
                    raise

                await self._tenant_repository.save(tenant)
        except FleetError:
            raise
        except Exception as e:
            raise DependencyError("Failed to update Sacco status") from e

        return tenant
