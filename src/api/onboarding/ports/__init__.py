"""Ports for the onboarding bounded context."""

from onboarding.ports.identity import IIdentityProvider
from onboarding.ports.repositories import ITenantRepository

__all__ = ["IIdentityProvider", "ITenantRepository"]
