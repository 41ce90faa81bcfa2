"""Domain exceptions for the onboarding context."""

from shared_kernel.errors import ConflictError


class InvalidStatusTransitionError(ConflictError):
    """Raised when a tenant status change is not in the transition table.

    Only pending tenants can be approved or rejected; approved and
    rejected are terminal.
    """

    default_message = "This application has already been reviewed."
