"""Listing application service for the fleet bounded context.

Handles listing create, update and delete for operator administrators.
Images pass through the media ingestion pipeline before the listing row
is written; a failed row write leaves the uploaded blobs orphaned.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fleet.application.observability import (
    DefaultListingServiceProbe,
    ListingServiceProbe,
)
from fleet.application.services.media_ingestion import MediaIngestionPipeline
from fleet.application.value_objects import Actor, ListingDraft, UploadBatch
from fleet.domain.aggregates import Listing
from fleet.domain.value_objects import ListingId, normalize_plate_number
from fleet.ports.exceptions import (
    DuplicatePlateNumberError,
    ListingNotFoundError,
    OperatorNotFoundError,
)
from fleet.ports.operators import IOperatorDirectory, OperatorAccount
from fleet.ports.repositories import IListingRepository
from shared_kernel.errors import DependencyError, FleetError, UnauthorizedError
from shared_kernel.results import Failure, OperationResult, Success


class ListingService:
    """Application service for vehicle listings.

    Every operation requires an operator administrator whose tenant has
    been approved; update and delete additionally require the listing to
    belong to that tenant.
    """

    def __init__(
        self,
        listing_repository: IListingRepository,
        operator_directory: IOperatorDirectory,
        media_pipeline: MediaIngestionPipeline,
        session: AsyncSession,
        probe: ListingServiceProbe | None = None,
    ):
        """Initialize ListingService with dependencies.

        Args:
            listing_repository: Repository for listing persistence
            operator_directory: Resolves the acting principal's tenant
            media_pipeline: Validates, screens and stores images
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._listing_repository = listing_repository
        self._operator_directory = operator_directory
        self._media_pipeline = media_pipeline
        self._session = session
        self._probe = probe or DefaultListingServiceProbe()

    async def create_listing(
        self, actor: Actor, draft: ListingDraft, batch: UploadBatch
    ) -> OperationResult[Listing]:
        """Create a listing with screened images.

        Args:
            actor: Acting principal
            draft: Listing fields
            batch: Images; a cover photo is required

        Returns:
            Success with the created listing, or a Failure
        """
        try:
            listing = await self._create(actor, draft, batch)
        except FleetError as e:
            return self._failed("create_listing", e)

        self._probe.listing_created(listing.id.value, listing.tenant_id)
        return Success(data=listing, message="Vehicle created successfully!")

    async def update_listing(
        self,
        actor: Actor,
        listing_id: ListingId,
        draft: ListingDraft,
        batch: UploadBatch,
    ) -> OperationResult[Listing]:
        """Replace a listing's fields and media.

        Existing image references not listed in the batch's retained sets
        are dropped from the listing.
        """
        try:
            listing = await self._update(actor, listing_id, draft, batch)
        except FleetError as e:
            return self._failed("update_listing", e)

        self._probe.listing_updated(listing.id.value, listing.tenant_id)
        return Success(data=listing, message="Vehicle updated successfully!")

    async def delete_listing(
        self, actor: Actor, listing_id: ListingId
    ) -> OperationResult[ListingId]:
        """Delete a listing. Its images stay in the blob store."""
        try:
            operator = await self._delete(actor, listing_id)
        except FleetError as e:
            return self._failed("delete_listing", e)

        self._probe.listing_deleted(listing_id.value, operator.tenant_id)
        return Success(data=listing_id, message="Vehicle deleted successfully.")

    async def _create(
        self, actor: Actor, draft: ListingDraft, batch: UploadBatch
    ) -> Listing:
        draft.validate()

        try:
            async with self._session.begin():
                operator = await self._require_operator(actor)
                await self._ensure_plate_available(draft.plate_number, None)
        except FleetError:
            raise
        except Exception as e:
            raise DependencyError() from e

        media = await self._media_pipeline.ingest(actor.principal_id, None, batch)

        listing = Listing.create(
            tenant_id=operator.tenant_id,
            name=draft.name,
            plate_number=draft.plate_number,
            capacity=draft.capacity,
            hourly_rate=draft.hourly_rate,
            media=media,
            description=draft.description,
            features=draft.features,
            is_available=draft.is_available,
        )
        await self._persist(listing)
        return listing

    async def _update(
        self,
        actor: Actor,
        listing_id: ListingId,
        draft: ListingDraft,
        batch: UploadBatch,
    ) -> Listing:
        draft.validate()

        try:
            async with self._session.begin():
                operator = await self._require_operator(actor)
                listing = await self._require_owned_listing(operator, listing_id)
                await self._ensure_plate_available(draft.plate_number, listing.id)
        except FleetError:
            raise
        except Exception as e:
            raise DependencyError() from e

        media = await self._media_pipeline.ingest(actor.principal_id, listing, batch)

        listing.revise(
            name=draft.name,
            plate_number=draft.plate_number,
            capacity=draft.capacity,
            hourly_rate=draft.hourly_rate,
            media=media,
            description=draft.description,
            features=draft.features,
            is_available=draft.is_available,
        )
        await self._persist(listing)
        return listing

    async def _delete(self, actor: Actor, listing_id: ListingId) -> OperatorAccount:
        try:
            async with self._session.begin():
                operator = await self._require_operator(actor)
                listing = await self._require_owned_listing(operator, listing_id)
                await self._listing_repository.delete(listing)
        except FleetError:
            raise
        except Exception as e:
            raise DependencyError() from e
        return operator

    async def _persist(self, listing: Listing) -> None:
        try:
            async with self._session.begin():
                await self._listing_repository.save(listing)
        except DuplicatePlateNumberError:
            raise
        except Exception as e:
            raise DependencyError("Database error. Please try again.") from e

    async def _require_operator(self, actor: Actor) -> OperatorAccount:
        if not actor.is_operator_admin:
            self._probe.listing_access_denied(actor.principal_id, "not_operator_admin")
            raise UnauthorizedError(
                "Unauthorized. Only Sacco administrators can manage vehicles."
            )

        operator = await self._operator_directory.get_by_owner(actor.principal_id)
        if operator is None:
            self._probe.listing_access_denied(actor.principal_id, "no_tenant")
            raise OperatorNotFoundError()
        if not operator.is_approved:
            self._probe.listing_access_denied(actor.principal_id, "tenant_not_approved")
            raise UnauthorizedError("Your Sacco has not been approved yet.")
        return operator

    async def _require_owned_listing(
        self, operator: OperatorAccount, listing_id: ListingId
    ) -> Listing:
        listing = await self._listing_repository.get_by_id(listing_id)
        if listing is None:
            raise ListingNotFoundError()
        if not listing.belongs_to(operator.tenant_id):
            self._probe.listing_access_denied(operator.owner_id, "foreign_listing")
            raise UnauthorizedError("This vehicle belongs to another Sacco.")
        return listing

    async def _ensure_plate_available(
        self, plate_number: str, listing_id: ListingId | None
    ) -> None:
        other = await self._listing_repository.get_by_plate_number(
            normalize_plate_number(plate_number)
        )
        if other is not None and other.id != listing_id:
            raise DuplicatePlateNumberError()

    def _failed(self, operation: str, error: FleetError) -> Failure:
        self._probe.listing_operation_failed(
            operation=operation,
            kind=error.kind.value,
            field=error.field,
            error=repr(error.__cause__ or error),
        )
        return Failure.from_error(error)
