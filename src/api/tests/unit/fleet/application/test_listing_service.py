"""Unit tests for ListingService."""

import asyncio
from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from fleet.application.observability import ListingServiceProbe
from fleet.application.services import ListingService, MediaIngestionPipeline
from fleet.application.value_objects import Actor, ListingDraft, UploadBatch
from fleet.domain.aggregates import Listing, ListingMediaSet
from fleet.domain.value_objects import ListingId
from fleet.ports.exceptions import DuplicatePlateNumberError
from fleet.ports.operators import IOperatorDirectory, OperatorAccount
from fleet.ports.repositories import IListingRepository
from shared_kernel.errors import ErrorKind, UnsafeContentError
from shared_kernel.results import Failure, Success

OWNER = "owner-1"
TENANT = "01J0000000000000000000TEN1"
MEDIA = ListingMediaSet(primary="https://cdn/cover.jpg")


class InMemoryListingRepository(IListingRepository):
    """Listing store with a unique plate index, like the real table."""

    def __init__(self):
        self.rows: dict[str, Listing] = {}

    async def save(self, listing: Listing) -> None:
        for row in self.rows.values():
            if row.plate_number == listing.plate_number and row.id != listing.id:
                raise DuplicatePlateNumberError()
        self.rows[listing.id.value] = listing

    async def get_by_id(self, listing_id: ListingId) -> Listing | None:
        return self.rows.get(listing_id.value)

    async def get_by_plate_number(self, plate_number: str) -> Listing | None:
        for row in self.rows.values():
            if row.plate_number == plate_number:
                return row
        return None

    async def delete(self, listing: Listing) -> bool:
        return self.rows.pop(listing.id.value, None) is not None


@pytest.fixture
def repository():
    return InMemoryListingRepository()


@pytest.fixture
def mock_directory():
    directory = Mock(spec=IOperatorDirectory)
    directory.get_by_owner = AsyncMock(
        return_value=OperatorAccount(tenant_id=TENANT, owner_id=OWNER, is_approved=True)
    )
    return directory


@pytest.fixture
def mock_pipeline():
    pipeline = Mock(spec=MediaIngestionPipeline)

    async def ingest(owner_id, existing, batch):
        await asyncio.sleep(0)
        return MEDIA

    pipeline.ingest = AsyncMock(side_effect=ingest)
    return pipeline


@pytest.fixture
def mock_probe():
    return Mock(spec=ListingServiceProbe)


@pytest.fixture
def service(repository, mock_directory, mock_pipeline, mock_session, mock_probe):
    return ListingService(
        listing_repository=repository,
        operator_directory=mock_directory,
        media_pipeline=mock_pipeline,
        session=mock_session,
        probe=mock_probe,
    )


@pytest.fixture
def admin() -> Actor:
    return Actor(principal_id=OWNER, is_operator_admin=True)


@pytest.fixture
def draft() -> ListingDraft:
    return ListingDraft(
        name="Shuttle 1",
        plate_number="kdc 123a",
        capacity=14,
        hourly_rate=Decimal("1500.00"),
        features=frozenset({"wifi", "ac"}),
    )


async def _existing(repository, plate="KDC 999Z", tenant_id=TENANT) -> Listing:
    listing = Listing.create(
        tenant_id=tenant_id,
        name="Existing",
        plate_number=plate,
        capacity=7,
        hourly_rate=Decimal("900"),
        media=ListingMediaSet(primary="https://cdn/old.jpg"),
    )
    await repository.save(listing)
    return listing


class TestCreateListing:
    @pytest.mark.asyncio
    async def test_creates_listing_for_approved_operator(
        self, service, admin, draft, repository, mock_pipeline
    ):
        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Success)
        assert result.message == "Vehicle created successfully!"
        listing = result.data
        assert listing.tenant_id == TENANT
        assert listing.plate_number == "KDC 123A"
        assert listing.media == MEDIA
        assert repository.rows == {listing.id.value: listing}
        mock_pipeline.ingest.assert_awaited_once()
        assert mock_pipeline.ingest.await_args[0][:2] == (OWNER, None)

    @pytest.mark.asyncio
    async def test_rider_is_refused(self, service, draft, mock_pipeline):
        rider = Actor(principal_id=OWNER, is_operator_admin=False)

        result = await service.create_listing(rider, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.FORBIDDEN
        mock_pipeline.ingest.assert_not_called()

    @pytest.mark.asyncio
    async def test_operator_without_tenant(
        self, service, admin, draft, mock_directory
    ):
        mock_directory.get_by_owner.return_value = None

        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.message == "You do not have a registered Sacco account."

    @pytest.mark.asyncio
    async def test_unapproved_tenant_is_refused(
        self, service, admin, draft, mock_directory, mock_pipeline
    ):
        mock_directory.get_by_owner.return_value = OperatorAccount(
            tenant_id=TENANT, owner_id=OWNER, is_approved=False
        )

        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.FORBIDDEN
        assert result.message == "Your Sacco has not been approved yet."
        mock_pipeline.ingest.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_draft_makes_no_external_calls(
        self, service, admin, draft, mock_directory, mock_pipeline
    ):
        result = await service.create_listing(
            admin, replace(draft, capacity=0), UploadBatch()
        )

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION
        assert result.field == "capacity"
        mock_directory.get_by_owner.assert_not_called()
        mock_pipeline.ingest.assert_not_called()

    @pytest.mark.asyncio
    async def test_overlong_plate_makes_no_external_calls(
        self, service, admin, draft, repository, mock_directory, mock_pipeline
    ):
        result = await service.create_listing(
            admin, replace(draft, plate_number="K" * 40), UploadBatch()
        )

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION
        assert result.field == "plate_number"
        mock_directory.get_by_owner.assert_not_called()
        mock_pipeline.ingest.assert_not_called()
        assert repository.rows == {}

    @pytest.mark.asyncio
    async def test_taken_plate_is_refused_before_upload(
        self, service, admin, draft, repository, mock_pipeline
    ):
        await _existing(repository, plate="KDC 123A")

        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONFLICT
        assert result.field == "plate_number"
        mock_pipeline.ingest.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsafe_images_leave_no_row(
        self, service, admin, draft, repository, mock_pipeline
    ):
        mock_pipeline.ingest.side_effect = UnsafeContentError(
            category="adult", field="primary_image"
        )

        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.UNSAFE_CONTENT
        assert repository.rows == {}

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_plate(
        self, service, admin, draft, repository
    ):
        first, second = await asyncio.gather(
            service.create_listing(admin, draft, UploadBatch()),
            service.create_listing(
                admin, replace(draft, plate_number=" KDC  123A "), UploadBatch()
            ),
        )

        outcomes = sorted([type(first).__name__, type(second).__name__])
        assert outcomes == ["Failure", "Success"]
        failure = first if isinstance(first, Failure) else second
        assert failure.kind == ErrorKind.CONFLICT
        assert len(repository.rows) == 1

    @pytest.mark.asyncio
    async def test_database_error_is_masked(
        self, service, admin, draft, repository, mock_probe
    ):
        repository.save = AsyncMock(side_effect=RuntimeError("connection refused"))

        result = await service.create_listing(admin, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.DEPENDENCY
        assert result.message == "Database error. Please try again."
        mock_probe.listing_operation_failed.assert_called_once()


class TestUpdateListing:
    @pytest.mark.asyncio
    async def test_updates_owned_listing(
        self, service, admin, draft, repository, mock_pipeline
    ):
        existing = await _existing(repository)

        result = await service.update_listing(admin, existing.id, draft, UploadBatch())

        assert isinstance(result, Success)
        assert result.message == "Vehicle updated successfully!"
        assert repository.rows[existing.id.value].plate_number == "KDC 123A"
        assert mock_pipeline.ingest.await_args[0][1] is existing

    @pytest.mark.asyncio
    async def test_keeping_own_plate_is_not_a_conflict(
        self, service, admin, draft, repository
    ):
        existing = await _existing(repository, plate="KDC 123A")

        result = await service.update_listing(admin, existing.id, draft, UploadBatch())

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_foreign_listing_is_refused(
        self, service, admin, draft, repository, mock_pipeline
    ):
        foreign = await _existing(repository, tenant_id="01J0000000000000000000TEN2")

        result = await service.update_listing(admin, foreign.id, draft, UploadBatch())

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.FORBIDDEN
        assert result.message == "This vehicle belongs to another Sacco."
        mock_pipeline.ingest.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_listing(self, service, admin, draft):
        result = await service.update_listing(
            admin, ListingId.generate(), draft, UploadBatch()
        )

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.NOT_FOUND


class TestDeleteListing:
    @pytest.mark.asyncio
    async def test_deletes_owned_listing(self, service, admin, repository, mock_probe):
        existing = await _existing(repository)

        result = await service.delete_listing(admin, existing.id)

        assert isinstance(result, Success)
        assert result.data == existing.id
        assert repository.rows == {}
        mock_probe.listing_deleted.assert_called_once_with(existing.id.value, TENANT)

    @pytest.mark.asyncio
    async def test_foreign_listing_is_kept(self, service, admin, repository):
        foreign = await _existing(repository, tenant_id="01J0000000000000000000TEN2")

        result = await service.delete_listing(admin, foreign.id)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.FORBIDDEN
        assert foreign.id.value in repository.rows
