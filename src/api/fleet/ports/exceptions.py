"""Port-level exceptions for the fleet bounded context."""

from shared_kernel.errors import ConflictError, DependencyError, NotFoundError


class ClassifierError(DependencyError):
    """Raised when the content classifier fails, times out or returns no verdict."""

    pass


class DuplicatePlateNumberError(ConflictError):
    """Raised when a listing with the same plate number already exists."""

    default_message = "Database error. Plate number might be duplicate."

    def __init__(self, message: str | None = None, field: str | None = "plate_number"):
        super().__init__(message, field)


class ListingNotFoundError(NotFoundError):
    """Raised when a listing cannot be found."""

    default_message = "Vehicle not found."


class OperatorNotFoundError(NotFoundError):
    """Raised when the acting principal has no registered tenant."""

    default_message = "You do not have a registered Sacco account."
