"""Application services for the onboarding bounded context."""

from onboarding.application.services.account_service import AccountService
from onboarding.application.services.approval_service import ApprovalService
from onboarding.application.services.onboarding_service import (
    TenantOnboardingService,
)

__all__ = ["AccountService", "ApprovalService", "TenantOnboardingService"]
