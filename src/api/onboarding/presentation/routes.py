"""HTTP routes for rider accounts, operator onboarding and application review."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from onboarding.application.services import (
    AccountService,
    ApprovalService,
    TenantOnboardingService,
)
from onboarding.application.value_objects import (
    Credentials,
    RiderSignup,
    TenantRegistration,
)
from onboarding.dependencies import (
    get_account_service,
    get_approval_service,
    get_current_principal,
    get_onboarding_service,
)
from onboarding.domain.aggregates import Principal
from onboarding.domain.value_objects import TenantId
from onboarding.presentation.models import (
    RejectTenantRequest,
    RiderAccountResponse,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    TenantApplicationResponse,
    TenantResponse,
)
from shared_kernel.errors import FleetError, NotFoundError, UnauthorizedError
from shared_kernel.presentation import (
    error_response,
    failure_response,
    read_uploads,
    success_body,
)
from shared_kernel.results import Failure

router = APIRouter(
    prefix="/onboarding",
    tags=["onboarding"],
)


def _parse_tenant_id(value: str) -> TenantId | None:
    try:
        return TenantId.from_string(value)
    except ValueError:
        return None


@router.post("/principals", status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: SignUpRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Create a rider account.

    Returns:
        201 with the principal id and, when automatic sign in worked, a
        session. A taken email is a 409 on ``email``.
    """
    result = await service.sign_up(
        RiderSignup(
            full_name=request.full_name,
            email=request.email,
            password=request.password,
            phone=request.phone,
        )
    )
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success_body(
            RiderAccountResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        ),
    )


@router.post("/sessions")
async def sign_in(
    request: SignInRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Sign in with email and password. Wrong credentials are a 401."""
    result = await service.sign_in(
        Credentials(email=request.email, password=request.password)
    )
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(
        content=success_body(
            SessionResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        )
    )


@router.post("/tenants", status_code=status.HTTP_201_CREATED)
async def register_tenant(
    service: Annotated[TenantOnboardingService, Depends(get_onboarding_service)],
    full_name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    sacco_name: Annotated[str, Form()] = "",
    registration_number: Annotated[str, Form()] = "",
    documents: Annotated[list[UploadFile] | None, File()] = None,
) -> JSONResponse:
    """Register a Sacco and its administrator account.

    Returns:
        201 with the pending application and, when automatic sign in
        worked, a session. Failures use the standard error envelope.
    """
    registration = TenantRegistration(
        full_name=full_name,
        email=email,
        password=password,
        phone=phone,
        tenant_name=sacco_name,
        registration_number=registration_number,
        documents=await read_uploads(documents),
    )

    result = await service.register(registration)
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success_body(
            TenantApplicationResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        ),
    )


@router.post("/tenants/{tenant_id}/approve")
async def approve_tenant(
    tenant_id: str,
    reviewer: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ApprovalService, Depends(get_approval_service)],
) -> JSONResponse:
    """Approve a pending application and promote its administrator."""
    parsed = _parse_tenant_id(tenant_id)
    if parsed is None:
        return error_response(NotFoundError("Sacco not found"))

    result = await service.approve(reviewer, parsed)
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(
        content=success_body(
            TenantResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        )
    )


@router.post("/tenants/{tenant_id}/reject")
async def reject_tenant(
    tenant_id: str,
    request: RejectTenantRequest,
    reviewer: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ApprovalService, Depends(get_approval_service)],
) -> JSONResponse:
    """Reject a pending application with a reason."""
    parsed = _parse_tenant_id(tenant_id)
    if parsed is None:
        return error_response(NotFoundError("Sacco not found"))

    result = await service.reject(reviewer, parsed, request.reason)
    if isinstance(result, Failure):
        return failure_response(result)

    return JSONResponse(
        content=success_body(
            TenantResponse.from_domain(result.data).model_dump(mode="json"),
            result.message,
        )
    )


@router.post("/roles/reconcile")
async def reconcile_roles(
    reviewer: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ApprovalService, Depends(get_approval_service)],
) -> JSONResponse:
    """Re-apply the operator admin role for approved Saccos missing it."""
    if not reviewer.is_reviewer:
        return error_response(UnauthorizedError("Insufficient permissions"))

    try:
        repaired = await service.reconcile_roles()
    except FleetError as e:
        return error_response(e)

    return JSONResponse(
        content=success_body(
            {"repaired_tenant_ids": [tenant_id.value for tenant_id in repaired]},
            f"{len(repaired)} operator role(s) restored.",
        )
    )
