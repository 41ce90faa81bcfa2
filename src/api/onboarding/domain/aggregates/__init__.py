"""Domain aggregates for the onboarding context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from onboarding.domain.aggregates.principal import Principal
from onboarding.domain.aggregates.tenant import Tenant

__all__ = [
    "Principal",
    "Tenant",
]
