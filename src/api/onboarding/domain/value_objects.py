"""Value objects for the onboarding domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers, roles and the tenant lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ulid import ULID

# Column widths of the tenants table.
MAX_TENANT_NAME_LENGTH = 255
MAX_REGISTRATION_NUMBER_LENGTH = 100
MAX_EMAIL_LENGTH = 320


@dataclass(frozen=True)
class PrincipalId:
    """Identifier for a Principal.

    Assigned by the identity provider (a UUID for Supabase Auth), so no
    format beyond non-emptiness is assumed.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> PrincipalId:
        """Create PrincipalId from string value.

        Raises:
            ValueError: If value is empty
        """
        if not value or not value.strip():
            raise ValueError("Invalid PrincipalId: empty value")
        return cls(value=value.strip())


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=value)


class Role(StrEnum):
    """Closed set of principal roles.

    RIDER is the role every principal starts with, including applicants
    created through tenant onboarding. OPERATOR_ADMIN is only ever granted
    as the side effect of a tenant approval.
    """

    RIDER = "rider"
    OPERATOR_ADMIN = "operator_admin"
    REVIEWER = "reviewer"


class TenantStatus(StrEnum):
    """Lifecycle status of a tenant application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def can_transition_to(self, target: TenantStatus) -> bool:
        """Check the transition table."""
        return target in _TENANT_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _TENANT_TRANSITIONS[self]


# pending -> approved | rejected; approved and rejected are terminal
_TENANT_TRANSITIONS: dict[TenantStatus, frozenset[TenantStatus]] = {
    TenantStatus.PENDING: frozenset({TenantStatus.APPROVED, TenantStatus.REJECTED}),
    TenantStatus.APPROVED: frozenset(),
    TenantStatus.REJECTED: frozenset(),
}


@dataclass(frozen=True)
class Session:
    """Authenticated session issued by the identity provider."""

    access_token: str
    refresh_token: str
    expires_at: datetime | None = None

    def __repr__(self) -> str:
        return f"Session(expires_at={self.expires_at!r})"
