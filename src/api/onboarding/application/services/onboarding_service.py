"""Tenant onboarding application service.

Self-registration of a fleet operator spans three systems that share no
transaction: the identity provider, the documents bucket and the
relational store. The steps run as a saga; when a later step fails the
principal created by the first step is deleted again.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.application.observability import (
    DefaultOnboardingServiceProbe,
    OnboardingServiceProbe,
)
from onboarding.application.value_objects import TenantApplication, TenantRegistration
from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import PrincipalId, Session
from onboarding.ports.exceptions import (
    DocumentUploadError,
    DuplicateRegistrationNumberError,
    TenantCreationError,
)
from onboarding.ports.identity import IIdentityProvider
from onboarding.ports.repositories import ITenantRepository
from shared_kernel.errors import FleetError, ValidationError
from shared_kernel.results import Failure, OperationResult, Success
from shared_kernel.saga import Saga, SagaProbe, SagaStep
from shared_kernel.storage import IBlobStore

SUBMITTED_MESSAGE = "Application submitted successfully."
MANUAL_LOGIN_MESSAGE = "Account created! Please log in manually."


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _random_suffix() -> str:
    return secrets.token_hex(4)


@dataclass
class _OnboardingState:
    """Outputs recorded by each step, read by later steps and compensations."""

    registration: TenantRegistration
    principal_id: PrincipalId | None = None
    document_paths: list[str] = field(default_factory=list)
    tenant: Tenant | None = None


class TenantOnboardingService:
    """Application service for operator self-registration.

    Steps, in order:
    1. provisioning_identity: create a pre-confirmed rider principal
    2. storing_documents: upload verification documents
    3. creating_tenant_record: insert the pending tenant

    A failure of step 2 or 3 deletes the principal. Automatic sign in
    afterwards is best-effort and never undoes the registration.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        document_store: IBlobStore,
        tenant_repository: ITenantRepository,
        session: AsyncSession,
        probe: OnboardingServiceProbe | None = None,
        saga_probe: SagaProbe | None = None,
        clock: Callable[[], int] = _epoch_millis,
        suffix: Callable[[], str] = _random_suffix,
    ):
        """Initialize TenantOnboardingService with dependencies.

        Args:
            identity_provider: Identity provider holding principals
            document_store: Blob store bound to the private documents bucket
            tenant_repository: Repository for tenant persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
            saga_probe: Optional probe for step and compensation events
            clock: Millisecond clock used in document paths
            suffix: Random token keeping document paths unique within one
                millisecond
        """
        self._identity_provider = identity_provider
        self._document_store = document_store
        self._tenant_repository = tenant_repository
        self._session = session
        self._probe = probe or DefaultOnboardingServiceProbe()
        self._clock = clock
        self._suffix = suffix
        self._saga: Saga[_OnboardingState] = Saga(
            name="tenant_onboarding",
            steps=[
                SagaStep(
                    name="provisioning_identity",
                    action=self._provision_identity,
                    compensation=self._delete_principal,
                ),
                SagaStep(name="storing_documents", action=self._store_documents),
                SagaStep(
                    name="creating_tenant_record", action=self._create_tenant_record
                ),
            ],
            probe=saga_probe,
        )

    async def register(
        self, registration: TenantRegistration
    ) -> OperationResult[TenantApplication]:
        """Register a new operator and its owning principal.

        Args:
            registration: The applicant's form

        Returns:
            Success carrying the pending tenant and, when sign in worked, a
            session; otherwise a Failure with any compensation already applied
        """
        try:
            registration.validate()
        except ValidationError as e:
            self._probe.registration_rejected(field=e.field, reason=e.message)
            return Failure.from_error(e)

        state = _OnboardingState(registration=registration)
        try:
            await self._saga.execute(state)
        except FleetError as e:
            self._probe.onboarding_failed(
                kind=e.kind.value,
                field=e.field,
                error=repr(e.__cause__ or e),
                principal_id=str(state.principal_id) if state.principal_id else None,
            )
            return Failure.from_error(e)

        assert state.principal_id is not None and state.tenant is not None
        session = await self._auto_authenticate(registration, state.principal_id)

        return Success(
            data=TenantApplication(
                tenant=state.tenant,
                principal_id=state.principal_id,
                session=session,
            ),
            message=SUBMITTED_MESSAGE if session else MANUAL_LOGIN_MESSAGE,
        )

    async def _provision_identity(self, state: _OnboardingState) -> None:
        registration = state.registration
        state.principal_id = await self._identity_provider.create_principal(
            email=registration.normalized_email,
            password=registration.password,
            metadata={
                "full_name": registration.full_name.strip(),
                "phone_number": registration.phone.strip(),
            },
            pre_confirmed=True,
        )
        self._probe.principal_provisioned(principal_id=str(state.principal_id))

    async def _delete_principal(self, state: _OnboardingState) -> None:
        if state.principal_id is not None:
            await self._identity_provider.delete_principal(state.principal_id)

    async def _store_documents(self, state: _OnboardingState) -> None:
        for document in state.registration.documents:
            path = (
                f"{state.principal_id}/{self._clock()}-{self._suffix()}-"
                f"{document.sanitized_filename}"
            )
            try:
                ref = await self._document_store.put(
                    path, document.content, document.content_type
                )
            except Exception as e:
                raise DocumentUploadError() from e
            state.document_paths.append(ref)

        self._probe.documents_stored(
            principal_id=str(state.principal_id), count=len(state.document_paths)
        )

    async def _create_tenant_record(self, state: _OnboardingState) -> None:
        assert state.principal_id is not None
        registration = state.registration
        tenant = Tenant.create(
            owner_id=state.principal_id,
            name=registration.tenant_name,
            registration_number=registration.registration_number,
            contact_email=registration.normalized_email,
            verification_documents=state.document_paths,
        )
        try:
            async with self._session.begin():
                await self._tenant_repository.save(tenant)
        except DuplicateRegistrationNumberError:
            raise
        except Exception as e:
            raise TenantCreationError() from e

        state.tenant = tenant
        self._probe.tenant_registered(
            tenant_id=tenant.id.value,
            principal_id=str(state.principal_id),
            registration_number=tenant.registration_number,
        )

    async def _auto_authenticate(
        self, registration: TenantRegistration, principal_id: PrincipalId
    ) -> Session | None:
        try:
            return await self._identity_provider.authenticate(
                registration.normalized_email, registration.password
            )
        except Exception as e:
            self._probe.auto_authentication_failed(
                principal_id=str(principal_id), error=repr(e)
            )
            return None
