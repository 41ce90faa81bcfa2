"""Identity provider port for the onboarding bounded context."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from onboarding.domain.aggregates import Principal
from onboarding.domain.value_objects import PrincipalId, Role, Session


@runtime_checkable
class IIdentityProvider(Protocol):
    """Managed authentication service holding principals and their roles.

    Every call is a single remote request and is bounded by the adapter's
    configured timeout. Principals are created with role RIDER.
    """

    async def create_principal(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        pre_confirmed: bool,
    ) -> PrincipalId:
        """Create a principal with elevated (service) privilege.

        Args:
            email: Login email
            password: Initial password
            metadata: Profile data stored with the principal
            pre_confirmed: Skip the email confirmation flow

        Returns:
            Identifier assigned by the provider

        Raises:
            PrincipalAlreadyExistsError: If the email is already registered
            IdentityProviderError: On any other failure or timeout
        """
        ...

    async def delete_principal(self, principal_id: PrincipalId) -> None:
        """Hard-delete a principal.

        Raises:
            IdentityProviderError: If the delete fails or times out
        """
        ...

    async def authenticate(self, email: str, password: str) -> Session:
        """Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the email or password is wrong
            IdentityProviderError: On any other failure or timeout
        """
        ...

    async def set_role(self, principal_id: PrincipalId, role: Role) -> None:
        """Replace the principal's role.

        Raises:
            IdentityProviderError: If the update fails or times out
        """
        ...

    async def get_principal(self, principal_id: PrincipalId) -> Principal | None:
        """Fetch a principal, or None if it does not exist.

        Raises:
            IdentityProviderError: On failure other than not-found
        """
        ...

    async def resolve_session(self, access_token: str) -> Principal | None:
        """Resolve a bearer access token to its principal.

        Returns:
            The principal, or None if the token is invalid or expired
        """
        ...
