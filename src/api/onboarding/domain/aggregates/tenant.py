"""Tenant aggregate for the onboarding context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from onboarding.domain.exceptions import InvalidStatusTransitionError
from onboarding.domain.value_objects import PrincipalId, TenantId, TenantStatus


@dataclass
class Tenant:
    """Tenant aggregate representing a registered fleet operator ("Sacco").

    Business rules:
    - A tenant references exactly one owning principal (1:1)
    - A new tenant is always pending review
    - Status changes follow the TenantStatus transition table; approved
      and rejected are terminal
    - A rejection reason is present only while the tenant is rejected
    """

    id: TenantId
    owner_id: PrincipalId
    name: str
    registration_number: str
    contact_email: str
    verification_documents: tuple[str, ...] = ()
    status: TenantStatus = TenantStatus.PENDING
    rejection_reason: str | None = None
    reviewed_by: PrincipalId | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        owner_id: PrincipalId,
        name: str,
        registration_number: str,
        contact_email: str,
        verification_documents: list[str] | tuple[str, ...],
    ) -> "Tenant":
        """Factory method for a new pending tenant application.

        Args:
            owner_id: Principal that submitted the application
            name: Legal name of the operator
            registration_number: Externally assigned registration number
            contact_email: Contact address for the operator
            verification_documents: References to the stored documents

        Returns:
            A new Tenant in PENDING status
        """
        return cls(
            id=TenantId.generate(),
            owner_id=owner_id,
            name=name.strip(),
            registration_number=registration_number.strip(),
            contact_email=contact_email.strip().lower(),
            verification_documents=tuple(verification_documents),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == TenantStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self.status == TenantStatus.APPROVED

    def approve(self, reviewed_by: PrincipalId) -> None:
        """Approve the application and clear any rejection reason.

        Raises:
            InvalidStatusTransitionError: If the tenant is not pending
        """
        self._transition_to(TenantStatus.APPROVED)
        self.rejection_reason = None
        self.reviewed_by = reviewed_by

    def reject(self, reason: str, reviewed_by: PrincipalId) -> None:
        """Reject the application with a reason.

        Raises:
            InvalidStatusTransitionError: If the tenant is not pending
        """
        self._transition_to(TenantStatus.REJECTED)
        self.rejection_reason = reason.strip()
        self.reviewed_by = reviewed_by

    def _transition_to(self, target: TenantStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(
                f"Cannot change application status from {self.status.value} "
                f"to {target.value}."
            )
        self.status = target
        self.updated_at = datetime.now(UTC)
