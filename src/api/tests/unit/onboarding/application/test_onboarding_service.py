"""Unit tests for TenantOnboardingService.

The registration saga spans the identity provider, the documents bucket
and the tenants table; these tests pin down what each failure point
leaves behind.
"""

import asyncio
import itertools
from dataclasses import replace
from unittest.mock import AsyncMock, Mock

import pytest

from onboarding.application.observability import OnboardingServiceProbe
from onboarding.application.services import TenantOnboardingService
from onboarding.application.services.onboarding_service import (
    MANUAL_LOGIN_MESSAGE,
    SUBMITTED_MESSAGE,
)
from onboarding.application.value_objects import TenantRegistration
from onboarding.domain.aggregates import Tenant
from onboarding.domain.value_objects import (
    PrincipalId,
    Session,
    TenantId,
    TenantStatus,
)
from onboarding.ports.exceptions import (
    DuplicateRegistrationNumberError,
    IdentityProviderError,
    PrincipalAlreadyExistsError,
)
from onboarding.ports.identity import IIdentityProvider
from onboarding.ports.repositories import ITenantRepository
from shared_kernel.errors import ErrorKind
from shared_kernel.results import Failure, Success
from shared_kernel.storage import BlobStoreError, IBlobStore
from shared_kernel.uploads import UploadedFile

PRINCIPAL_ID = PrincipalId(value="7c1f0a52-0000-4000-8000-000000000001")


class InMemoryTenantRepository(ITenantRepository):
    """Tenant store with a unique registration number index, like the real table."""

    def __init__(self):
        self.rows: dict[str, Tenant] = {}

    async def save(self, tenant: Tenant) -> None:
        await asyncio.sleep(0)
        for row in self.rows.values():
            if (
                row.registration_number == tenant.registration_number
                and row.id != tenant.id
            ):
                raise DuplicateRegistrationNumberError()
        self.rows[tenant.id.value] = tenant

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        return self.rows.get(tenant_id.value)

    async def get_by_owner(self, owner_id: PrincipalId) -> Tenant | None:
        return next(
            (row for row in self.rows.values() if row.owner_id == owner_id), None
        )

    async def get_by_registration_number(
        self, registration_number: str
    ) -> Tenant | None:
        return next(
            (
                row
                for row in self.rows.values()
                if row.registration_number == registration_number
            ),
            None,
        )

    async def list_by_status(self, status: TenantStatus) -> list[Tenant]:
        return [row for row in self.rows.values() if row.status == status]


@pytest.fixture
def registration() -> TenantRegistration:
    return TenantRegistration(
        full_name="Jane Wanjiku",
        email="Jane@CityShuttle.co.ke",
        password="s3cret-pass",
        phone="+254712345678",
        tenant_name="City Shuttle Sacco",
        registration_number="CS/2024/001",
        documents=(
            UploadedFile("cert of reg.pdf", b"%PDF-1", "application/pdf"),
            UploadedFile("permit.png", b"\x89PNG", "image/png"),
        ),
    )


@pytest.fixture
def mock_identity_provider():
    provider = Mock(spec=IIdentityProvider)
    provider.create_principal = AsyncMock(return_value=PRINCIPAL_ID)
    provider.delete_principal = AsyncMock()
    provider.authenticate = AsyncMock(
        return_value=Session(access_token="access", refresh_token="refresh")
    )
    return provider


@pytest.fixture
def mock_document_store():
    store = Mock(spec=IBlobStore)
    store.put = AsyncMock(side_effect=lambda path, content, content_type: path)
    return store


@pytest.fixture
def mock_tenant_repo():
    repo = Mock(spec=ITenantRepository)
    repo.save = AsyncMock()
    return repo


@pytest.fixture
def mock_probe():
    return Mock(spec=OnboardingServiceProbe)


@pytest.fixture
def service(
    mock_identity_provider,
    mock_document_store,
    mock_tenant_repo,
    mock_session,
    mock_probe,
):
    counter = itertools.count()
    return TenantOnboardingService(
        identity_provider=mock_identity_provider,
        document_store=mock_document_store,
        tenant_repository=mock_tenant_repo,
        session=mock_session,
        probe=mock_probe,
        clock=lambda: 1700000000000,
        suffix=lambda: f"{next(counter):08x}",
    )


class TestRegisterSuccess:
    """Tests for the path where every step succeeds."""

    @pytest.mark.asyncio
    async def test_returns_pending_tenant_with_session(
        self, service, registration, mock_tenant_repo
    ):
        result = await service.register(registration)

        assert isinstance(result, Success)
        assert result.message == SUBMITTED_MESSAGE
        assert result.data.is_authenticated is True
        assert result.data.principal_id == PRINCIPAL_ID

        saved: Tenant = mock_tenant_repo.save.call_args[0][0]
        assert saved is result.data.tenant
        assert saved.status == TenantStatus.PENDING
        assert saved.owner_id == PRINCIPAL_ID
        assert saved.contact_email == "jane@cityshuttle.co.ke"

    @pytest.mark.asyncio
    async def test_creates_pre_confirmed_principal(
        self, service, registration, mock_identity_provider
    ):
        await service.register(registration)

        mock_identity_provider.create_principal.assert_awaited_once_with(
            email="jane@cityshuttle.co.ke",
            password="s3cret-pass",
            metadata={"full_name": "Jane Wanjiku", "phone_number": "+254712345678"},
            pre_confirmed=True,
        )

    @pytest.mark.asyncio
    async def test_stores_documents_under_principal(
        self, service, registration, mock_document_store, mock_tenant_repo
    ):
        await service.register(registration)

        paths = [call.args[0] for call in mock_document_store.put.await_args_list]
        assert paths == [
            f"{PRINCIPAL_ID}/1700000000000-00000000-cert_of_reg.pdf",
            f"{PRINCIPAL_ID}/1700000000000-00000001-permit.png",
        ]
        saved: Tenant = mock_tenant_repo.save.call_args[0][0]
        assert list(saved.verification_documents) == paths

    @pytest.mark.asyncio
    async def test_same_filename_in_same_millisecond_gets_distinct_paths(
        self,
        registration,
        mock_identity_provider,
        mock_document_store,
        mock_tenant_repo,
        mock_session,
    ):
        service = TenantOnboardingService(
            identity_provider=mock_identity_provider,
            document_store=mock_document_store,
            tenant_repository=mock_tenant_repo,
            session=mock_session,
            clock=lambda: 1700000000000,
        )
        scans = replace(
            registration,
            documents=(
                UploadedFile("scan.jpg", b"\xff\xd8first", "image/jpeg"),
                UploadedFile("scan.jpg", b"\xff\xd8second", "image/jpeg"),
            ),
        )

        result = await service.register(scans)

        assert isinstance(result, Success)
        paths = [call.args[0] for call in mock_document_store.put.await_args_list]
        assert len(paths) == 2
        assert len(set(paths)) == 2
        assert all(path.endswith("-scan.jpg") for path in paths)
        assert list(result.data.tenant.verification_documents) == paths

    @pytest.mark.asyncio
    async def test_tenant_is_saved_inside_transaction(
        self, service, registration, mock_session
    ):
        await service.register(registration)

        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_auto_sign_in_keeps_registration(
        self, service, registration, mock_identity_provider, mock_probe
    ):
        mock_identity_provider.authenticate.side_effect = IdentityProviderError()

        result = await service.register(registration)

        assert isinstance(result, Success)
        assert result.message == MANUAL_LOGIN_MESSAGE
        assert result.data.session is None
        mock_identity_provider.delete_principal.assert_not_called()
        mock_probe.auto_authentication_failed.assert_called_once()


class TestRegisterValidation:
    @pytest.mark.asyncio
    async def test_invalid_input_has_no_side_effects(
        self,
        service,
        registration,
        mock_identity_provider,
        mock_document_store,
        mock_tenant_repo,
    ):
        invalid = TenantRegistration(
            full_name=registration.full_name,
            email=registration.email,
            password=registration.password,
            phone="12345",
            tenant_name=registration.tenant_name,
            registration_number=registration.registration_number,
            documents=registration.documents,
        )

        result = await service.register(invalid)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION
        assert result.field == "phone"
        mock_identity_provider.create_principal.assert_not_called()
        mock_document_store.put.assert_not_called()
        mock_tenant_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_overlong_registration_number_has_no_side_effects(
        self,
        service,
        registration,
        mock_identity_provider,
        mock_document_store,
        mock_tenant_repo,
    ):
        invalid = replace(registration, registration_number="R" * 150)

        result = await service.register(invalid)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION
        assert result.field == "registration_number"
        mock_identity_provider.create_principal.assert_not_called()
        mock_identity_provider.delete_principal.assert_not_called()
        mock_document_store.put.assert_not_called()
        mock_tenant_repo.save.assert_not_called()


class TestRegisterCompensation:
    """Tests for failures after the principal was created."""

    @pytest.mark.asyncio
    async def test_duplicate_email_needs_no_compensation(
        self, service, registration, mock_identity_provider, mock_document_store
    ):
        mock_identity_provider.create_principal.side_effect = (
            PrincipalAlreadyExistsError()
        )

        result = await service.register(registration)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONFLICT
        assert result.field == "email"
        mock_identity_provider.delete_principal.assert_not_called()
        mock_document_store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_document_failure_deletes_principal(
        self,
        service,
        registration,
        mock_identity_provider,
        mock_document_store,
        mock_tenant_repo,
    ):
        mock_document_store.put.side_effect = BlobStoreError()

        result = await service.register(registration)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.DEPENDENCY
        assert result.field == "documents"
        assert result.message == "Document upload failed. Please try again."
        mock_identity_provider.delete_principal.assert_awaited_once_with(PRINCIPAL_ID)
        mock_tenant_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_registration_number_deletes_principal(
        self, service, registration, mock_identity_provider, mock_tenant_repo
    ):
        mock_tenant_repo.save.side_effect = DuplicateRegistrationNumberError()

        result = await service.register(registration)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONFLICT
        assert result.field == "registration_number"
        mock_identity_provider.delete_principal.assert_awaited_once_with(PRINCIPAL_ID)
        mock_identity_provider.authenticate.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_database_error_is_masked(
        self, service, registration, mock_identity_provider, mock_tenant_repo
    ):
        mock_tenant_repo.save.side_effect = RuntimeError("connection reset by peer")

        result = await service.register(registration)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.DEPENDENCY
        assert result.message == "Failed to create profile. Please try again."
        assert "connection reset" not in result.message
        mock_identity_provider.delete_principal.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_compensation_reports_consistency_gap(
        self, service, registration, mock_identity_provider, mock_tenant_repo, mock_probe
    ):
        mock_tenant_repo.save.side_effect = DuplicateRegistrationNumberError()
        mock_identity_provider.delete_principal.side_effect = IdentityProviderError()

        result = await service.register(registration)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONSISTENCY_GAP
        mock_probe.onboarding_failed.assert_called_once()
        assert (
            mock_probe.onboarding_failed.call_args.kwargs["principal_id"]
            == PRINCIPAL_ID.value
        )


class TestConcurrentRegistration:
    """The unique index is the only guard between two racing applicants."""

    @pytest.mark.asyncio
    async def test_same_registration_number_admits_exactly_one(
        self, registration, mock_identity_provider, mock_document_store, mock_session
    ):
        repository = InMemoryTenantRepository()
        principal_ids = iter(
            [
                PrincipalId(value="7c1f0a52-0000-4000-8000-00000000000a"),
                PrincipalId(value="7c1f0a52-0000-4000-8000-00000000000b"),
            ]
        )

        async def create_principal(**kwargs):
            await asyncio.sleep(0)
            return next(principal_ids)

        mock_identity_provider.create_principal.side_effect = create_principal
        service = TenantOnboardingService(
            identity_provider=mock_identity_provider,
            document_store=mock_document_store,
            tenant_repository=repository,
            session=mock_session,
        )
        first = replace(
            registration, email="first@example.com", registration_number="TV-001"
        )
        second = replace(
            registration, email="second@example.com", registration_number="TV-001"
        )

        results = await asyncio.gather(
            service.register(first), service.register(second)
        )

        successes = [result for result in results if isinstance(result, Success)]
        failures = [result for result in results if isinstance(result, Failure)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert failures[0].kind == ErrorKind.CONFLICT
        assert failures[0].field == "registration_number"
        assert len(repository.rows) == 1
        assert mock_identity_provider.delete_principal.await_count == 1
        losing_principal = mock_identity_provider.delete_principal.await_args.args[0]
        assert losing_principal != successes[0].data.principal_id
