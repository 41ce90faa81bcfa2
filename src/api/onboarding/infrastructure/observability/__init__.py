"""Domain-Oriented Observability for onboarding infrastructure."""

from onboarding.infrastructure.observability.identity_provider_probe import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from onboarding.infrastructure.observability.repository_probe import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "IdentityProviderProbe",
    "DefaultIdentityProviderProbe",
    "TenantRepositoryProbe",
    "DefaultTenantRepositoryProbe",
]
