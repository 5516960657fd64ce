"""
Custom exception classes for the application.

Each exception carries the HTTP status and the error ``kind`` it maps to,
so commands can raise them without knowing anything about HTTP responses
and the error classifier can pass them straight through.
"""

from novels_api.constants import (
    BAD_REQUEST_MESSAGE,
    CONFLICT_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    NOT_FOUND_MESSAGE,
    VALIDATION_MESSAGE,
)


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        fields: Names of the request fields implicated in the error.
        http_status: HTTP status code for REST API responses.
        kind: Machine-readable error category.
    """

    http_status: int = 500
    kind: str = "internal"
    default_message: str = INTERNAL_ERROR_MESSAGE

    def __init__(
        self, message: str | None = None, fields: list[str] | None = None
    ):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description. Falls back to the
                class default when omitted.
            fields: Optional list of implicated field names.
        """
        self.message = message or self.default_message
        self.fields = fields
        super().__init__(self.message)


class BadRequestError(AppException):
    """
    Request payload is incomplete.

    Raised when a full replace (PUT) does not carry every updatable field.

    HTTP Status: 400 Bad Request
    """

    http_status = 400
    kind = "bad_request"
    default_message = BAD_REQUEST_MESSAGE


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a lookup by id returns no record.

    HTTP Status: 404 Not Found
    """

    http_status = 404
    kind = "not_found"
    default_message = NOT_FOUND_MESSAGE


class ConflictError(AppException):
    """
    Resource conflict.

    Raised when a write collides with a uniqueness constraint.

    HTTP Status: 409 Conflict
    """

    http_status = 409
    kind = "conflict"
    default_message = CONFLICT_MESSAGE


class ValidationError(AppException):
    """
    Data validation failed.

    Raised when required fields are missing or malformed.

    HTTP Status: 422 Unprocessable Entity
    """

    http_status = 422
    kind = "validation_error"
    default_message = VALIDATION_MESSAGE


class DatabaseError(AppException):
    """
    Database operation failed.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
    kind = "internal"
