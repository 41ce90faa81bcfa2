"""Media ingestion pipeline for listing images.

Order of operations for one batch: structural validation, one safety
screening of all new images, then concurrent uploads. Nothing is
uploaded unless the whole batch was accepted.
"""

from __future__ import annotations

import asyncio
import secrets
import time
from typing import Callable, Iterable

from fleet.application.observability import (
    DefaultMediaIngestionProbe,
    MediaIngestionProbe,
)
from fleet.application.services.safety_gate import SafetyGate
from fleet.application.value_objects import UploadBatch
from fleet.domain.aggregates import Listing, ListingMediaSet
from fleet.domain.value_objects import ImageRole, Rejected, SafetyCategory
from shared_kernel.errors import DependencyError, UnsafeContentError, ValidationError
from shared_kernel.storage import IBlobStore
from shared_kernel.uploads import UploadedFile

UNSAFE_MESSAGE = "Creation Rejected: One or more images contain explicit content."
UNVERIFIED_MESSAGE = (
    "Creation Rejected: Images could not be screened for safety. Please try again."
)
UPLOAD_FAILED_MESSAGE = "Failed to upload images to cloud storage."

FIELD_BY_ROLE = {
    ImageRole.PRIMARY: "primary_image",
    ImageRole.EXTERIOR: "exterior_images",
    ImageRole.INTERIOR: "interior_images",
}


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _random_suffix() -> str:
    return secrets.token_hex(4)


def _dedupe(references: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated references, keeping first-seen order."""
    return tuple(dict.fromkeys(references))


class MediaIngestionPipeline:
    """Validates, screens and stores the images of one listing write."""

    def __init__(
        self,
        safety_gate: SafetyGate,
        image_store: IBlobStore,
        max_exterior_images: int = 4,
        max_interior_images: int = 4,
        probe: MediaIngestionProbe | None = None,
        clock: Callable[[], int] = _epoch_millis,
        suffix: Callable[[], str] = _random_suffix,
    ):
        """Initialize the pipeline.

        Args:
            safety_gate: Screens new images before any upload
            image_store: Blob store bound to the public images bucket
            max_exterior_images: Cap on retained plus new exterior photos
            max_interior_images: Cap on retained plus new interior photos
            probe: Optional domain probe for observability
            clock: Millisecond clock used in storage paths
            suffix: Random path suffix generator
        """
        self._safety_gate = safety_gate
        self._image_store = image_store
        self._max_images = {
            ImageRole.EXTERIOR: max_exterior_images,
            ImageRole.INTERIOR: max_interior_images,
        }
        self._probe = probe or DefaultMediaIngestionProbe()
        self._clock = clock
        self._suffix = suffix

    async def ingest(
        self, owner_id: str, existing: Listing | None, batch: UploadBatch
    ) -> ListingMediaSet:
        """Produce the listing's new media set from an upload batch.

        Args:
            owner_id: Principal the images are stored under
            existing: Listing being updated, or None on create
            batch: New images and the references to retain

        Returns:
            primary (new or existing), exterior and interior as retained
            followed by new, without duplicates

        Raises:
            ValidationError: Missing primary, foreign retained reference or
                a cap exceeded; no classifier or blob calls were made
            UnsafeContentError: The batch was rejected; nothing was uploaded
            DependencyError: An upload failed; earlier uploads are orphaned
        """
        try:
            self._validate(existing, batch)
        except ValidationError as e:
            self._probe.media_rejected(owner_id=owner_id, field=e.field, reason=e.message)
            raise

        pending: list[tuple[ImageRole, UploadedFile]] = []
        if batch.primary is not None:
            pending.append((ImageRole.PRIMARY, batch.primary))
        pending.extend((ImageRole.EXTERIOR, image) for image in batch.exterior)
        pending.extend((ImageRole.INTERIOR, image) for image in batch.interior)

        verdict = await self._safety_gate.classify_batch([image for _, image in pending])
        if isinstance(verdict, Rejected):
            role = pending[verdict.image_index or 0][0]
            error = UnsafeContentError(
                category=verdict.category.value,
                message=UNVERIFIED_MESSAGE
                if verdict.category == SafetyCategory.UNVERIFIED
                else UNSAFE_MESSAGE,
                field=FIELD_BY_ROLE[role],
            )
            self._probe.media_rejected(
                owner_id=owner_id, field=error.field, reason=verdict.category.value
            )
            raise error

        urls = await self._upload_all(owner_id, pending)

        new_by_role: dict[ImageRole, list[str]] = {role: [] for role in ImageRole}
        for (role, _), url in zip(pending, urls):
            new_by_role[role].append(url)

        if new_by_role[ImageRole.PRIMARY]:
            primary = new_by_role[ImageRole.PRIMARY][0]
        else:
            assert existing is not None
            primary = existing.media.primary

        media = ListingMediaSet(
            primary=primary,
            exterior=_dedupe([*batch.retained_exterior, *new_by_role[ImageRole.EXTERIOR]]),
            interior=_dedupe([*batch.retained_interior, *new_by_role[ImageRole.INTERIOR]]),
        )
        self._probe.media_ingested(
            owner_id=owner_id,
            uploaded=len(urls),
            retained=len(set(batch.retained_exterior) | set(batch.retained_interior)),
        )
        return media

    def _validate(self, existing: Listing | None, batch: UploadBatch) -> None:
        if batch.primary is None and existing is None:
            raise ValidationError("A cover photo is required.", field="primary_image")

        current = existing.media if existing else ListingMediaSet(primary="")
        checks = (
            (ImageRole.EXTERIOR, batch.retained_exterior, current.exterior, batch.exterior),
            (ImageRole.INTERIOR, batch.retained_interior, current.interior, batch.interior),
        )
        for role, retained, allowed, new in checks:
            if not set(retained) <= set(allowed):
                raise ValidationError(
                    "Retained images must belong to this vehicle.",
                    field=FIELD_BY_ROLE[role],
                )

            limit = self._max_images[role]
            if len(set(retained)) + len(new) > limit:
                raise ValidationError(
                    f"A vehicle can have at most {limit} {role.value} photos.",
                    field=FIELD_BY_ROLE[role],
                )

    async def _upload_all(
        self, owner_id: str, pending: list[tuple[ImageRole, UploadedFile]]
    ) -> list[str]:
        paths = [self._path_for(owner_id, role, image) for role, image in pending]
        results = await asyncio.gather(
            *(
                self._image_store.put(path, image.content, image.content_type)
                for path, (_, image) in zip(paths, pending)
            ),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            written = [r for r in results if not isinstance(r, BaseException)]
            if written:
                self._probe.orphaned_blobs(owner_id=owner_id, paths=written)
            raise DependencyError(UPLOAD_FAILED_MESSAGE) from failures[0]

        return [self._image_store.public_url(ref) for ref in results]

    def _path_for(self, owner_id: str, role: ImageRole, image: UploadedFile) -> str:
        return f"{owner_id}/{role.value}/{self._clock()}-{self._suffix()}.{image.extension}"
