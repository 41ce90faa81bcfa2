"""HTTP routes for vehicle listings."""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from fleet.application.services import ListingService
from fleet.application.value_objects import Actor, ListingDraft, UploadBatch
from fleet.dependencies import get_listing_service
from fleet.domain.value_objects import ListingId
from fleet.ports.exceptions import ListingNotFoundError
from fleet.presentation.models import ListingResponse
from onboarding.dependencies import get_current_principal
from onboarding.domain.aggregates import Principal
from shared_kernel.errors import ValidationError
from shared_kernel.presentation import (
    error_response,
    failure_response,
    read_uploads,
    success_body,
)
from shared_kernel.results import Failure

router = APIRouter(
    prefix="/fleet",
    tags=["fleet"],
)

_TRUE_VALUES = {"true", "1", "on", "yes"}


def actor_from(principal: Principal) -> Actor:
    return Actor(
        principal_id=principal.id.value,
        is_operator_admin=principal.is_operator_admin,
    )


def parse_draft(
    name: str,
    plate_number: str,
    capacity: str,
    rate_per_hour: str,
    description: str,
    features: str,
    is_available: str,
) -> ListingDraft:
    """Parse raw form values into a draft.

    Raises:
        ValidationError: If a numeric or JSON field cannot be parsed
    """
    try:
        parsed_capacity = int(capacity)
    except ValueError as e:
        raise ValidationError("Capacity must be a whole number", field="capacity") from e

    try:
        parsed_rate = Decimal(rate_per_hour)
    except InvalidOperation as e:
        raise ValidationError("Rate per hour must be a number", field="hourly_rate") from e

    try:
        parsed_features = json.loads(features or "[]")
    except json.JSONDecodeError as e:
        raise ValidationError("Features must be a JSON list", field="features") from e
    if not isinstance(parsed_features, list) or not all(
        isinstance(feature, str) for feature in parsed_features
    ):
        raise ValidationError("Features must be a JSON list", field="features")

    return ListingDraft(
        name=name,
        plate_number=plate_number,
        capacity=parsed_capacity,
        hourly_rate=parsed_rate,
        description=description,
        features=frozenset(f.strip() for f in parsed_features if f.strip()),
        is_available=is_available.strip().lower() in _TRUE_VALUES,
    )


def _parse_listing_id(value: str) -> ListingId | None:
    try:
        return ListingId.from_string(value)
    except ValueError:
        return None


async def _build_batch(
    cover_photo: UploadFile | None,
    exterior_photos: list[UploadFile] | None,
    interior_photos: list[UploadFile] | None,
    retained_exterior: list[str] | None,
    retained_interior: list[str] | None,
) -> UploadBatch:
    covers = await read_uploads([cover_photo] if cover_photo else None)
    return UploadBatch(
        primary=covers[0] if covers else None,
        exterior=await read_uploads(exterior_photos),
        interior=await read_uploads(interior_photos),
        retained_exterior=tuple(retained_exterior or ()),
        retained_interior=tuple(retained_interior or ()),
    )


def _listing_body(result, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=success_body(
            ListingResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        ),
    )


@router.post("/listings", status_code=status.HTTP_201_CREATED)
async def create_listing(
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ListingService, Depends(get_listing_service)],
    name: Annotated[str, Form()] = "",
    plate_number: Annotated[str, Form()] = "",
    capacity: Annotated[str, Form()] = "",
    rate_per_hour: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    features: Annotated[str, Form()] = "[]",
    is_available: Annotated[str, Form()] = "true",
    cover_photo: Annotated[UploadFile | None, File()] = None,
    exterior_photos: Annotated[list[UploadFile] | None, File()] = None,
    interior_photos: Annotated[list[UploadFile] | None, File()] = None,
) -> JSONResponse:
    """Create a vehicle listing; every image is screened before upload."""
    try:
        draft = parse_draft(
            name, plate_number, capacity, rate_per_hour, description, features, is_available
        )
    except ValidationError as e:
        return error_response(e)

    batch = await _build_batch(cover_photo, exterior_photos, interior_photos, None, None)
    result = await service.create_listing(actor_from(principal), draft, batch)
    if isinstance(result, Failure):
        return failure_response(result)

    return _listing_body(result, status.HTTP_201_CREATED)


@router.put("/listings/{listing_id}")
async def update_listing(
    listing_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ListingService, Depends(get_listing_service)],
    name: Annotated[str, Form()] = "",
    plate_number: Annotated[str, Form()] = "",
    capacity: Annotated[str, Form()] = "",
    rate_per_hour: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    features: Annotated[str, Form()] = "[]",
    is_available: Annotated[str, Form()] = "true",
    cover_photo: Annotated[UploadFile | None, File()] = None,
    exterior_photos: Annotated[list[UploadFile] | None, File()] = None,
    interior_photos: Annotated[list[UploadFile] | None, File()] = None,
    retained_exterior: Annotated[list[str] | None, Form()] = None,
    retained_interior: Annotated[list[str] | None, Form()] = None,
) -> JSONResponse:
    """Update a listing; existing photos not retained are dropped."""
    parsed_id = _parse_listing_id(listing_id)
    if parsed_id is None:
        return error_response(ListingNotFoundError())

    try:
        draft = parse_draft(
            name, plate_number, capacity, rate_per_hour, description, features, is_available
        )
    except ValidationError as e:
        return error_response(e)

    batch = await _build_batch(
        cover_photo, exterior_photos, interior_photos, retained_exterior, retained_interior
    )
    result = await service.update_listing(actor_from(principal), parsed_id, draft, batch)
    if isinstance(result, Failure):
        return failure_response(result)

    return _listing_body(result)


@router.delete("/listings/{listing_id}")
async def delete_listing(
    listing_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ListingService, Depends(get_listing_service)],
) -> JSONResponse:
    """Delete a listing owned by the caller's Sacco."""
    parsed_id = _parse_listing_id(listing_id)
    if parsed_id is None:
        return error_response(ListingNotFoundError())

    result = await service.delete_listing(actor_from(principal), parsed_id)
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(content=success_body({"id": result.data.value}, result.message))
