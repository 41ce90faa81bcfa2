"""Rider account application service.

Riders sign themselves up with the same name, email, password and phone
rules as an operator applicant, but there is no Sacco record and nothing
to compensate: the principal is the only write.
"""

from __future__ import annotations

from onboarding.application.observability import (
    AccountServiceProbe,
    DefaultAccountServiceProbe,
)
from onboarding.application.value_objects import Credentials, RiderAccount, RiderSignup
from onboarding.domain.value_objects import PrincipalId, Session
from onboarding.ports.identity import IIdentityProvider
from shared_kernel.errors import (
    DependencyError,
    ErrorKind,
    FleetError,
    ValidationError,
)
from shared_kernel.results import Failure, OperationResult, Success

SIGNED_UP_MESSAGE = "Account created successfully."
MANUAL_LOGIN_MESSAGE = "Account created! Please log in manually."
SIGNED_IN_MESSAGE = "Signed in successfully."


class AccountService:
    """Application service for rider sign up and password sign in."""

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        probe: AccountServiceProbe | None = None,
    ):
        """Initialize AccountService with dependencies.

        Args:
            identity_provider: Identity provider holding principals
            probe: Optional domain probe for observability
        """
        self._identity_provider = identity_provider
        self._probe = probe or DefaultAccountServiceProbe()

    async def sign_up(self, signup: RiderSignup) -> OperationResult[RiderAccount]:
        """Create a pre-confirmed rider principal, then sign it in.

        Sign in afterwards is best-effort; when it fails the account still
        exists and the rider logs in manually.

        Returns:
            Success with the new principal id and, when sign in worked, a
            session. Duplicate emails fail with a conflict on ``email``.
        """
        try:
            signup.validate()
        except ValidationError as e:
            self._probe.sign_up_rejected(field=e.field, reason=e.message)
            return Failure.from_error(e)

        try:
            principal_id = await self._identity_provider.create_principal(
                email=signup.normalized_email,
                password=signup.password,
                metadata={
                    "full_name": signup.full_name.strip(),
                    "phone_number": signup.phone.strip(),
                },
                pre_confirmed=True,
            )
        except FleetError as e:
            self._probe.sign_up_failed(kind=e.kind.value, error=repr(e.__cause__ or e))
            return Failure.from_error(e)
        except Exception as e:
            self._probe.sign_up_failed(kind=ErrorKind.DEPENDENCY.value, error=repr(e))
            return Failure.from_error(DependencyError())

        self._probe.rider_signed_up(principal_id=str(principal_id))
        session = await self._auto_authenticate(signup, principal_id)
        return Success(
            data=RiderAccount(principal_id=principal_id, session=session),
            message=SIGNED_UP_MESSAGE if session else MANUAL_LOGIN_MESSAGE,
        )

    async def sign_in(self, credentials: Credentials) -> OperationResult[Session]:
        """Exchange an email and password for a session.

        Returns:
            Success with the session; a wrong email or password fails with
            kind ``unauthenticated``
        """
        try:
            credentials.validate()
            session = await self._identity_provider.authenticate(
                credentials.normalized_email, credentials.password
            )
        except FleetError as e:
            self._probe.sign_in_failed(kind=e.kind.value, error=repr(e.__cause__ or e))
            return Failure.from_error(e)
        except Exception as e:
            self._probe.sign_in_failed(kind=ErrorKind.DEPENDENCY.value, error=repr(e))
            return Failure.from_error(DependencyError())

        self._probe.signed_in()
        return Success(data=session, message=SIGNED_IN_MESSAGE)

    async def _auto_authenticate(
        self, signup: RiderSignup, principal_id: PrincipalId
    ) -> Session | None:
        try:
            return await self._identity_provider.authenticate(
                signup.normalized_email, signup.password
            )
        except Exception as e:
            self._probe.auto_authentication_failed(
                principal_id=str(principal_id), error=repr(e)
            )
            return None
