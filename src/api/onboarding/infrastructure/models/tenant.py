"""SQLAlchemy ORM model for the tenants table."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin
from onboarding.domain.value_objects import (
    MAX_EMAIL_LENGTH,
    MAX_REGISTRATION_NUMBER_LENGTH,
    MAX_TENANT_NAME_LENGTH,
)

REGISTRATION_NUMBER_CONSTRAINT = "uq_tenants_registration_number"
OWNER_CONSTRAINT = "uq_tenants_owner_id"


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Registration numbers and owners are globally unique. ``owner_id`` holds
    the identity provider's principal id, which has no local table.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(MAX_TENANT_NAME_LENGTH), nullable=False)
    registration_number: Mapped[str] = mapped_column(
        String(MAX_REGISTRATION_NUMBER_LENGTH), nullable=False, unique=True
    )
    contact_email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH), nullable=False
    )
    verification_documents: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, status={self.status})>"
