"""Principal aggregate for the onboarding context."""

from __future__ import annotations

from dataclasses import dataclass

from onboarding.domain.value_objects import PrincipalId, Role


@dataclass(frozen=True)
class Principal:
    """A person with login credentials.

    Principals live in the identity provider; this aggregate is the
    read-side view used for authorization decisions. The only mutation
    the system performs is a role change on tenant approval.
    """

    id: PrincipalId
    email: str
    full_name: str = ""
    phone: str = ""
    role: Role = Role.RIDER

    def __str__(self) -> str:
        """Return string representation."""
        return f"Principal({self.email})"

    def __eq__(self, other: object) -> bool:
        """Principals are equal if they have the same ID."""
        if not isinstance(other, Principal):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)

    @property
    def is_reviewer(self) -> bool:
        return self.role == Role.REVIEWER

    @property
    def is_operator_admin(self) -> bool:
        return self.role == Role.OPERATOR_ADMIN
