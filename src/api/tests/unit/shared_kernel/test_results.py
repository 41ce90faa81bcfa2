"""Unit tests for the error taxonomy and operation results."""

from shared_kernel.errors import (
    ConflictError,
    ErrorKind,
    UnsafeContentError,
    ValidationError,
)
from shared_kernel.results import Failure, Success


class TestFleetErrors:
    """Tests for typed workflow errors."""

    def test_uses_default_message(self):
        error = ConflictError()

        assert error.message == ConflictError.default_message
        assert error.kind == ErrorKind.CONFLICT
        assert error.field is None

    def test_custom_message_and_field(self):
        error = ValidationError("Invalid email", field="email")

        assert str(error) == "Invalid email"
        assert error.field == "email"
        assert error.kind == ErrorKind.VALIDATION

    def test_unsafe_content_carries_category(self):
        error = UnsafeContentError(category="adult", field="primary_image")

        assert error.category == "adult"
        assert error.kind == ErrorKind.UNSAFE_CONTENT


class TestFailure:
    """Tests for Failure."""

    def test_from_error_copies_message_kind_and_field(self):
        failure = Failure.from_error(ValidationError("Invalid phone", field="phone"))

        assert failure.message == "Invalid phone"
        assert failure.kind == ErrorKind.VALIDATION
        assert failure.field == "phone"
        assert failure.is_success is False

    def test_as_dict_omits_missing_field(self):
        body = Failure.from_error(ConflictError("taken")).as_dict()

        assert body == {"status": "error", "message": "taken", "kind": "conflict"}

    def test_as_dict_includes_field(self):
        body = Failure.from_error(ValidationError("bad", field="name")).as_dict()

        assert body["field"] == "name"


class TestSuccess:
    def test_is_success(self):
        result = Success(data=1, message="done")

        assert result.is_success is True
        assert result.status == "success"
