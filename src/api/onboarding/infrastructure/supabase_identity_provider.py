"""Supabase Auth implementation of IIdentityProvider.

Admin calls (create, delete, role change) use the service-role client.
Password sign in uses a fresh anonymous client per call, since a
supabase client keeps the signed-in session in memory.

The role lives in ``app_metadata.role``, which only the service role can
write; ``user_metadata`` is user-editable and holds profile fields only.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable

from supabase import AuthApiError

from infrastructure.supabase_client import call_blocking
from onboarding.domain.aggregates import Principal
from onboarding.domain.value_objects import PrincipalId, Role, Session
from onboarding.infrastructure.observability import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from onboarding.ports.exceptions import (
    IdentityProviderError,
    InvalidCredentialsError,
    PrincipalAlreadyExistsError,
)
from onboarding.ports.identity import IIdentityProvider

if TYPE_CHECKING:
    from supabase import Client

ROLE_CLAIM = "role"


def _is_duplicate_email(error: Exception) -> bool:
    code = getattr(error, "code", None)
    if code in ("email_exists", "user_already_exists"):
        return True
    return "already" in str(error).lower()


def _is_invalid_credentials(error: Exception) -> bool:
    if getattr(error, "code", None) == "invalid_credentials":
        return True
    return "invalid login credentials" in str(error).lower()


def _is_not_found(error: Exception) -> bool:
    return getattr(error, "status", None) == 404 or getattr(
        error, "code", None
    ) == "user_not_found"


def _role_from(user: Any) -> Role:
    raw = (getattr(user, "app_metadata", None) or {}).get(ROLE_CLAIM)
    try:
        return Role(raw)
    except ValueError:
        return Role.RIDER


def _principal_from(user: Any) -> Principal:
    metadata = getattr(user, "user_metadata", None) or {}
    return Principal(
        id=PrincipalId(value=str(user.id)),
        email=user.email or "",
        full_name=metadata.get("full_name", ""),
        phone=metadata.get("phone_number", ""),
        role=_role_from(user),
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """Identity provider backed by Supabase Auth."""

    def __init__(
        self,
        service_client: "Client",
        anon_client_factory: Callable[[], "Client"],
        timeout_seconds: float,
        probe: IdentityProviderProbe | None = None,
    ):
        """Initialize the adapter.

        Args:
            service_client: Service-role client for admin operations
            anon_client_factory: Builds an anonymous client for sign in
            timeout_seconds: Bound on each remote call
            probe: Optional domain probe for observability
        """
        self._admin = service_client.auth.admin
        self._auth = service_client.auth
        self._anon_client_factory = anon_client_factory
        self._timeout = timeout_seconds
        self._probe = probe or DefaultIdentityProviderProbe()

    async def create_principal(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        pre_confirmed: bool,
    ) -> PrincipalId:
        attributes = {
            "email": email,
            "password": password,
            "email_confirm": pre_confirmed,
            "user_metadata": metadata,
            "app_metadata": {ROLE_CLAIM: Role.RIDER.value},
        }
        try:
            response = await call_blocking(
                self._admin.create_user, attributes, timeout=self._timeout
            )
        except AuthApiError as e:
            if _is_duplicate_email(e):
                raise PrincipalAlreadyExistsError() from e
            self._probe.identity_call_failed("create_principal", repr(e))
            raise IdentityProviderError() from e
        except Exception as e:
            self._probe.identity_call_failed("create_principal", repr(e))
            raise IdentityProviderError() from e

        if response is None or response.user is None:
            self._probe.identity_call_failed("create_principal", "empty response")
            raise IdentityProviderError("User creation failed.")

        principal_id = PrincipalId(value=str(response.user.id))
        self._probe.principal_created(principal_id.value)
        return principal_id

    async def delete_principal(self, principal_id: PrincipalId) -> None:
        try:
            await call_blocking(
                self._admin.delete_user, principal_id.value, timeout=self._timeout
            )
        except Exception as e:
            self._probe.identity_call_failed("delete_principal", repr(e))
            raise IdentityProviderError() from e

        self._probe.principal_deleted(principal_id.value)

    async def authenticate(self, email: str, password: str) -> Session:
        client = self._anon_client_factory()
        try:
            response = await call_blocking(
                client.auth.sign_in_with_password,
                {"email": email, "password": password},
                timeout=self._timeout,
            )
        except AuthApiError as e:
            if _is_invalid_credentials(e):
                raise InvalidCredentialsError() from e
            self._probe.identity_call_failed("authenticate", repr(e))
            raise IdentityProviderError() from e
        except Exception as e:
            self._probe.identity_call_failed("authenticate", repr(e))
            raise IdentityProviderError() from e

        session = getattr(response, "session", None)
        if session is None:
            raise IdentityProviderError("Sign in returned no session.")

        expires_at = None
        if session.expires_at:
            expires_at = datetime.fromtimestamp(session.expires_at, tz=timezone.utc)
        return Session(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=expires_at,
        )

    async def set_role(self, principal_id: PrincipalId, role: Role) -> None:
        try:
            await call_blocking(
                self._admin.update_user_by_id,
                principal_id.value,
                {"app_metadata": {ROLE_CLAIM: role.value}},
                timeout=self._timeout,
            )
        except Exception as e:
            self._probe.identity_call_failed("set_role", repr(e))
            raise IdentityProviderError() from e

        self._probe.role_changed(principal_id.value, role.value)

    async def get_principal(self, principal_id: PrincipalId) -> Principal | None:
        try:
            response = await call_blocking(
                self._admin.get_user_by_id, principal_id.value, timeout=self._timeout
            )
        except AuthApiError as e:
            if _is_not_found(e):
                return None
            self._probe.identity_call_failed("get_principal", repr(e))
            raise IdentityProviderError() from e
        except Exception as e:
            self._probe.identity_call_failed("get_principal", repr(e))
            raise IdentityProviderError() from e

        if response is None or response.user is None:
            return None
        return _principal_from(response.user)

    async def resolve_session(self, access_token: str) -> Principal | None:
        try:
            response = await call_blocking(
                self._auth.get_user, access_token, timeout=self._timeout
            )
        except AuthApiError:
            self._probe.session_rejected()
            return None
        except Exception as e:
            self._probe.identity_call_failed("resolve_session", repr(e))
            raise IdentityProviderError() from e

        if response is None or response.user is None:
            self._probe.session_rejected()
            return None
        return _principal_from(response.user)
