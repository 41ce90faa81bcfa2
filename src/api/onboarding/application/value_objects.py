"""Application-layer value objects for the onboarding bounded context.

These represent workflow inputs and outputs rather than core business
entities: the sign-up and registration forms an applicant submits, and
the view of a completed application returned to them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import (
    MAX_EMAIL_LENGTH,
    MAX_REGISTRATION_NUMBER_LENGTH,
    MAX_TENANT_NAME_LENGTH,
    PrincipalId,
    Session,
)
from shared_kernel.errors import ValidationError
from shared_kernel.uploads import UploadedFile

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^(?:\+254|0)[17]\d{8}$")

MIN_FULL_NAME_LENGTH = 2
MAX_FULL_NAME_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
MIN_TENANT_NAME_LENGTH = 2
MIN_REGISTRATION_NUMBER_LENGTH = 3


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_account_fields(
    full_name: str, email: str, password: str, phone: str
) -> None:
    """Rules shared by rider sign up and operator registration."""
    if len(full_name.strip()) < MIN_FULL_NAME_LENGTH:
        raise ValidationError("Name is too short", field="full_name")
    if len(full_name.strip()) > MAX_FULL_NAME_LENGTH:
        raise ValidationError("Name is too long", field="full_name")
    normalized = _normalize_email(email)
    if not EMAIL_PATTERN.match(normalized) or len(normalized) > MAX_EMAIL_LENGTH:
        raise ValidationError("Invalid email", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "Password must be at least 6 characters", field="password"
        )
    if not PHONE_PATTERN.match(phone.strip()):
        raise ValidationError("Invalid phone number", field="phone")


@dataclass(frozen=True)
class RiderSignup:
    """A rider's self sign-up form."""

    full_name: str
    email: str
    password: str
    phone: str

    def __repr__(self) -> str:
        return f"RiderSignup(email={self.email!r})"

    @property
    def normalized_email(self) -> str:
        return _normalize_email(self.email)

    def validate(self) -> None:
        """Raises ValidationError naming the first offending field."""
        _validate_account_fields(self.full_name, self.email, self.password, self.phone)


@dataclass(frozen=True)
class Credentials:
    """Email and password submitted to sign in."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r})"

    @property
    def normalized_email(self) -> str:
        return _normalize_email(self.email)

    def validate(self) -> None:
        if not EMAIL_PATTERN.match(self.normalized_email):
            raise ValidationError("Invalid email", field="email")
        if not self.password:
            raise ValidationError("Password is required", field="password")


@dataclass(frozen=True)
class TenantRegistration:
    """An applicant's self-registration form.

    Attributes:
        full_name: Applicant's full name
        email: Login email for the new principal
        password: Initial password
        phone: Kenyan mobile number (+2547XXXXXXXX or 07XXXXXXXX)
        tenant_name: Legal name of the operator
        registration_number: Externally assigned registration number
        documents: Verification documents, at least one
    """

    full_name: str
    email: str
    password: str
    phone: str
    tenant_name: str
    registration_number: str
    documents: tuple[UploadedFile, ...] = field(default_factory=tuple)

    def __repr__(self) -> str:
        return (
            f"TenantRegistration(email={self.email!r}, "
            f"tenant_name={self.tenant_name!r}, documents={len(self.documents)})"
        )

    @property
    def normalized_email(self) -> str:
        return _normalize_email(self.email)

    def validate(self) -> None:
        """Check every field, reporting the first one that fails.

        Side-effect free; safe to call any number of times. Length limits
        match the tenants table so no accepted form fails at insert time.

        Raises:
            ValidationError: With ``field`` naming the offending input
        """
        _validate_account_fields(self.full_name, self.email, self.password, self.phone)
        if len(self.tenant_name.strip()) < MIN_TENANT_NAME_LENGTH:
            raise ValidationError("Sacco name is required", field="tenant_name")
        if len(self.tenant_name.strip()) > MAX_TENANT_NAME_LENGTH:
            raise ValidationError(
                f"Sacco name must be at most {MAX_TENANT_NAME_LENGTH} characters",
                field="tenant_name",
            )
        if len(self.registration_number.strip()) < MIN_REGISTRATION_NUMBER_LENGTH:
            raise ValidationError(
                "Registration number is required", field="registration_number"
            )
        if len(self.registration_number.strip()) > MAX_REGISTRATION_NUMBER_LENGTH:
            raise ValidationError(
                "Registration number must be at most "
                f"{MAX_REGISTRATION_NUMBER_LENGTH} characters",
                field="registration_number",
            )
        if not self.documents:
            raise ValidationError(
                "Verification documents are required.",
                field="documents",
            )
        if any(document.is_empty for document in self.documents):
            raise ValidationError(
                "Verification documents must not be empty.", field="documents"
            )


@dataclass(frozen=True)
class TenantApplication:
    """Outcome of a successful onboarding.

    ``session`` is None when the account was created but automatic sign in
    failed; the applicant then logs in manually.
    """

    tenant: Tenant
    principal_id: PrincipalId
    session: Session | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None


@dataclass(frozen=True)
class RiderAccount:
    """Outcome of a rider sign up. ``session`` is None when sign in failed."""

    principal_id: PrincipalId
    session: Session | None = None
