"""Port-level exceptions for the onboarding bounded context.

These exceptions are raised by adapters (identity provider, repositories)
and by the onboarding workflow steps. Each one is a FleetError subclass so
it carries its caller-facing kind and message.
"""

from shared_kernel.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    UnauthenticatedError,
)


class PrincipalAlreadyExistsError(ConflictError):
    """Raised when the identity provider already has a principal with the email."""

    default_message = "An account with this email already exists."

    def __init__(self, message: str | None = None, field: str | None = "email"):
        super().__init__(message, field)


class IdentityProviderError(DependencyError):
    """Raised when the identity provider fails or times out."""

    pass


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when sign in is refused for a wrong email or password."""

    default_message = "Invalid login credentials."


class DuplicateRegistrationNumberError(ConflictError):
    """Raised when a tenant with the same registration number already exists.

    Registration numbers are externally assigned and globally unique. The
    unique index is the only guard against two applicants racing with the
    same number.
    """

    default_message = "Registration number already in use"

    def __init__(
        self, message: str | None = None, field: str | None = "registration_number"
    ):
        super().__init__(message, field)


class DuplicateTenantOwnerError(ConflictError):
    """Raised when a principal already owns a tenant."""

    default_message = "This account already has a registered Sacco."


class DocumentUploadError(DependencyError):
    """Raised when a verification document could not be stored."""

    default_message = "Document upload failed. Please try again."

    def __init__(self, message: str | None = None, field: str | None = "documents"):
        super().__init__(message, field)


class TenantCreationError(DependencyError):
    """Raised when the tenant record could not be written."""

    default_message = "Failed to create profile. Please try again."


class TenantNotFoundError(NotFoundError):
    """Raised when a tenant cannot be found."""

    default_message = "Sacco application not found."
