"""Pydantic models for onboarding API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from onboarding.application.value_objects import RiderAccount, TenantApplication
from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import Session


class TenantResponse(BaseModel):
    """Response model for a tenant application.

    Verification document paths are private and never returned.
    """

    id: str = Field(..., description="Tenant ID (ULID format)")
    owner_id: str = Field(..., description="Owning principal ID")
    name: str = Field(..., description="Sacco name")
    registration_number: str = Field(..., description="Registration number")
    contact_email: str = Field(..., description="Contact email")
    status: str = Field(..., description="pending, approved or rejected")
    rejection_reason: str | None = Field(None, description="Reason when rejected")
    document_count: int = Field(..., description="Number of stored documents")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            owner_id=tenant.owner_id.value,
            name=tenant.name,
            registration_number=tenant.registration_number,
            contact_email=tenant.contact_email,
            status=tenant.status.value,
            rejection_reason=tenant.rejection_reason,
            document_count=len(tenant.verification_documents),
        )


class SessionResponse(BaseModel):
    """Tokens issued by the automatic sign in after registration."""

    access_token: str
    refresh_token: str
    expires_at: datetime | None = None

    @classmethod
    def from_domain(cls, session: Session) -> SessionResponse:
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
        )


class TenantApplicationResponse(BaseModel):
    """Response model for a completed registration."""

    tenant: TenantResponse
    principal_id: str
    session: SessionResponse | None = None

    @classmethod
    def from_domain(cls, application: TenantApplication) -> TenantApplicationResponse:
        return cls(
            tenant=TenantResponse.from_domain(application.tenant),
            principal_id=application.principal_id.value,
            session=SessionResponse.from_domain(application.session)
            if application.session
            else None,
        )


class RejectTenantRequest(BaseModel):
    """Request model for rejecting an application.

    Blank reasons are refused by the service, not here, so the caller gets
    the standard error envelope.
    """

    reason: str = Field("", description="Explanation shown to the applicant")


class SignUpRequest(BaseModel):
    """Request model for rider self sign up.

    Fields are checked by the service so failures use the standard error
    envelope.
    """

    full_name: str = ""
    email: str = ""
    password: str = Field("", repr=False)
    phone: str = Field("", description="+2547XXXXXXXX or 07XXXXXXXX")


class SignInRequest(BaseModel):
    """Request model for password sign in."""

    email: str = ""
    password: str = Field("", repr=False)


class RiderAccountResponse(BaseModel):
    """Response model for a completed rider sign up."""

    principal_id: str
    session: SessionResponse | None = None

    @classmethod
    def from_domain(cls, account: RiderAccount) -> RiderAccountResponse:
        return cls(
            principal_id=account.principal_id.value,
            session=SessionResponse.from_domain(account.session)
            if account.session
            else None,
        )
