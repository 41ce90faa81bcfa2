"""SQLAlchemy ORM models for the onboarding bounded context."""

from onboarding.infrastructure.models.tenant import TenantModel

__all__ = ["TenantModel"]
