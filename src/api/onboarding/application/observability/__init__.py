"""Domain-Oriented Observability for the onboarding application layer."""

from onboarding.application.observability.account_service_probe import (
    AccountServiceProbe,
    DefaultAccountServiceProbe,
)
from onboarding.application.observability.approval_service_probe import (
    ApprovalServiceProbe,
    DefaultApprovalServiceProbe,
)
from onboarding.application.observability.onboarding_service_probe import (
    DefaultOnboardingServiceProbe,
    OnboardingServiceProbe,
)

__all__ = [
    "AccountServiceProbe",
    "DefaultAccountServiceProbe",
    "ApprovalServiceProbe",
    "DefaultApprovalServiceProbe",
    "OnboardingServiceProbe",
    "DefaultOnboardingServiceProbe",
]
