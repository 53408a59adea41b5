"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Custom exceptions for PayrollHub. Each carries an error
             code and the HTTP status the API layer answers with.
-------------------------------------------------------------------------
"""
from typing import Optional


class PayrollHubException(Exception):
    """Base exception for all PayrollHub specific errors."""

    error_code: str = "ERR_GENERIC"
    default_message: str = "An error occurred while processing the request."
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, details: Optional[dict] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Custom error message. If None, uses default_message.
            details: Additional context merged into the API response body.
        """
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        payload = {
            "success": False,
            "message": self.message,
            "error": self.error_code,
        }
        payload.update(self.details)
        return payload


# Request-level Exceptions
class ValidationFailed(PayrollHubException):
    """Raised when request data is missing or malformed."""

    error_code = "ERR_VALIDATION"
    default_message = "The submitted data is invalid."
    status_code = 400


class DuplicateRecordException(ValidationFailed):
    """Raised when a record violates a uniqueness rule."""

    error_code = "ERR_DUPLICATE"
    default_message = "A record with the same details already exists."


class AuthenticationFailed(PayrollHubException):
    """Raised when the caller is not authenticated."""

    error_code = "ERR_AUTHENTICATION"
    default_message = "Access denied, token missing"
    status_code = 401


class UnauthorizedRoleException(PayrollHubException):
    """Raised when a user lacks the required role for an action."""

    error_code = "ERR_UNAUTHORIZED_ROLE"
    default_message = "Forbidden: Access denied"
    status_code = 403


class ResourceNotFound(PayrollHubException):
    """Raised when a record does not exist inside the caller's company."""

    error_code = "ERR_NOT_FOUND"
    default_message = "The requested record was not found."
    status_code = 404


# Workflow-related Exceptions
class WorkflowTransitionException(PayrollHubException):
    """Raised when an invalid state transition is attempted."""

    error_code = "ERR_INVALID_TRANSITION"
    default_message = "Invalid workflow transition attempted."
    status_code = 400


class ImmutableRecordException(PayrollHubException):
    """Raised when a locked record is modified."""

    error_code = "ERR_IMMUTABLE_RECORD"
    default_message = "This record can no longer be modified."
    status_code = 403


# Attendance window exceptions
class AttendanceDateLocked(PayrollHubException):
    """Raised when attendance is edited after the grace period."""

    error_code = "DATE_LOCKED"
    default_message = "Attendance for this date is locked."
    status_code = 403


class FutureAttendanceDate(PayrollHubException):
    """Raised when attendance is marked too far ahead."""

    error_code = "FUTURE_DATE"
    default_message = "Cannot mark attendance for a future date."
    status_code = 403
