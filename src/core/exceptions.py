"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_NAME = "MISSING_NAME"
    MISSING_EMAIL = "MISSING_EMAIL"
    INVALID_EMAIL_FORMAT = "INVALID_EMAIL_FORMAT"
    NAME_LENGTH_OUT_OF_RANGE = "NAME_LENGTH_OUT_OF_RANGE"
    EMAIL_TOO_LONG = "EMAIL_TOO_LONG"
    EMPTY_ID = "EMPTY_ID"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    PROFILE_ID_MISMATCH = "PROFILE_ID_MISMATCH"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Conflict errors (409)
    EMAIL_IN_USE = "EMAIL_IN_USE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


VALIDATION_CODES = frozenset(
    {
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.MISSING_NAME,
        ErrorCode.MISSING_EMAIL,
        ErrorCode.INVALID_EMAIL_FORMAT,
        ErrorCode.NAME_LENGTH_OUT_OF_RANGE,
        ErrorCode.EMAIL_TOO_LONG,
        ErrorCode.EMPTY_ID,
        ErrorCode.INVALID_PAGINATION,
        ErrorCode.PROFILE_ID_MISMATCH,
    }
)


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ProfileValidationError(AppException):
    """Caller input failed a profile rule. Carries exactly one reason."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        field: str | None = None,
    ) -> None:
        if error_code not in VALIDATION_CODES:
            raise ValueError(f"{error_code} is not a validation error code")
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )
        self.field = field


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class EmailInUseError(AppException):
    """Another profile already owns the email address."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_IN_USE,
            message="Email is already in use by another profile",
            status_code=409,
            details={"email": email},
        )


class StorageError(AppException):
    """The storage collaborator failed unexpectedly.

    The message is fixed; the underlying cause travels only as
    ``__cause__`` so it can be logged but never rendered to a client.
    """

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message="An internal storage error occurred",
            status_code=500,
        )
