"""Dependency injection for the fleet bounded context.

Composes infrastructure resources (database sessions, the images bucket,
the Vision classifier) with fleet components (repositories, safety gate,
media pipeline, listing service).
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleet.application.observability import (
    DefaultListingServiceProbe,
    ListingServiceProbe,
)
from fleet.application.services import (
    ListingService,
    MediaIngestionPipeline,
    SafetyGate,
)
from fleet.infrastructure.listing_repository import ListingRepository
from fleet.infrastructure.operator_directory import TenantOperatorDirectory
from fleet.infrastructure.vision_classifier import VisionSafeSearchClassifier
from fleet.ports.classifier import IContentClassifier
from fleet.ports.operators import IOperatorDirectory
from fleet.ports.repositories import IListingRepository
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_image_store
from infrastructure.settings import get_media_settings, get_safety_settings
from onboarding.dependencies import get_tenant_repository
from onboarding.ports.repositories import ITenantRepository
from shared_kernel.storage import IBlobStore


@lru_cache
def get_content_classifier() -> IContentClassifier:
    """Get the Cloud Vision SafeSearch classifier (singleton)."""
    settings = get_safety_settings()
    return VisionSafeSearchClassifier(
        api_key=settings.vision_api_key.get_secret_value(),
        endpoint=settings.vision_endpoint,
        timeout_seconds=settings.timeout_seconds,
    )


def get_safety_gate(
    classifier: Annotated[IContentClassifier, Depends(get_content_classifier)],
) -> SafetyGate:
    """Get SafetyGate configured from safety settings."""
    settings = get_safety_settings()
    return SafetyGate(
        classifier=classifier,
        timeout_seconds=settings.timeout_seconds,
        fail_open=settings.fail_open,
    )


def get_media_pipeline(
    safety_gate: Annotated[SafetyGate, Depends(get_safety_gate)],
    image_store: Annotated[IBlobStore, Depends(get_image_store)],
) -> MediaIngestionPipeline:
    """Get MediaIngestionPipeline configured from media settings."""
    settings = get_media_settings()
    return MediaIngestionPipeline(
        safety_gate=safety_gate,
        image_store=image_store,
        max_exterior_images=settings.max_exterior_images,
        max_interior_images=settings.max_interior_images,
    )


def get_listing_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> IListingRepository:
    """Get ListingRepository sharing the request's session."""
    return ListingRepository(session=session)


def get_operator_directory(
    tenant_repository: Annotated[ITenantRepository, Depends(get_tenant_repository)],
) -> IOperatorDirectory:
    """Get the operator directory backed by the tenant repository."""
    return TenantOperatorDirectory(tenant_repository=tenant_repository)


def get_listing_service_probe() -> ListingServiceProbe:
    """Get ListingServiceProbe instance."""
    return DefaultListingServiceProbe()


def get_listing_service(
    listing_repository: Annotated[IListingRepository, Depends(get_listing_repository)],
    operator_directory: Annotated[IOperatorDirectory, Depends(get_operator_directory)],
    media_pipeline: Annotated[MediaIngestionPipeline, Depends(get_media_pipeline)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[ListingServiceProbe, Depends(get_listing_service_probe)],
) -> ListingService:
    """Get ListingService instance."""
    return ListingService(
        listing_repository=listing_repository,
        operator_directory=operator_directory,
        media_pipeline=media_pipeline,
        session=session,
        probe=probe,
    )
