"""Dependency injection for the onboarding bounded context.

Composes infrastructure resources (database sessions, Supabase clients,
blob stores) with onboarding components (repositories, services), and
resolves the acting principal from the bearer token.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_document_store
from infrastructure.settings import get_supabase_settings
from infrastructure.supabase_client import get_anon_client, get_service_client
from onboarding.application.observability import (
    AccountServiceProbe,
    ApprovalServiceProbe,
    DefaultAccountServiceProbe,
    DefaultApprovalServiceProbe,
    DefaultOnboardingServiceProbe,
    OnboardingServiceProbe,
)
from onboarding.application.services import (
    AccountService,
    ApprovalService,
    TenantOnboardingService,
)
from onboarding.domain.aggregates import Principal
from onboarding.infrastructure.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from onboarding.infrastructure.tenant_repository import TenantRepository
from onboarding.ports.identity import IIdentityProvider
from onboarding.ports.repositories import ITenantRepository
from shared_kernel.storage import IBlobStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_provider() -> IIdentityProvider:
    """Get the Supabase-backed identity provider.

    Sign in uses a fresh anonymous client per call; ``get_anon_client`` is
    cached, so the uncached factory is passed instead.
    """
    settings = get_supabase_settings()
    return SupabaseIdentityProvider(
        service_client=get_service_client(),
        anon_client_factory=get_anon_client.__wrapped__,
        timeout_seconds=settings.timeout_seconds,
    )


def get_onboarding_service_probe() -> OnboardingServiceProbe:
    """Get OnboardingServiceProbe instance."""
    return DefaultOnboardingServiceProbe()


def get_approval_service_probe() -> ApprovalServiceProbe:
    """Get ApprovalServiceProbe instance."""
    return DefaultApprovalServiceProbe()


def get_account_service_probe() -> AccountServiceProbe:
    """Get AccountServiceProbe instance."""
    return DefaultAccountServiceProbe()


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ITenantRepository:
    """Get TenantRepository instance.

    Args:
        session: Async database session

    Returns:
        TenantRepository sharing the request's session
    """
    return TenantRepository(session=session)


def get_onboarding_service(
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    document_store: Annotated[IBlobStore, Depends(get_document_store)],
    tenant_repository: Annotated[ITenantRepository, Depends(get_tenant_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[OnboardingServiceProbe, Depends(get_onboarding_service_probe)],
) -> TenantOnboardingService:
    """Get TenantOnboardingService instance."""
    return TenantOnboardingService(
        identity_provider=identity_provider,
        document_store=document_store,
        tenant_repository=tenant_repository,
        session=session,
        probe=probe,
    )


def get_approval_service(
    tenant_repository: Annotated[ITenantRepository, Depends(get_tenant_repository)],
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[ApprovalServiceProbe, Depends(get_approval_service_probe)],
) -> ApprovalService:
    """Get ApprovalService instance."""
    return ApprovalService(
        tenant_repository=tenant_repository,
        identity_provider=identity_provider,
        session=session,
        probe=probe,
    )


def get_account_service(
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    probe: Annotated[AccountServiceProbe, Depends(get_account_service_probe)],
) -> AccountService:
    """Get AccountService instance. Needs no database session."""
    return AccountService(identity_provider=identity_provider, probe=probe)


async def get_current_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
) -> Principal:
    """Resolve the acting principal from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    principal = await identity_provider.resolve_session(credentials.credentials)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
