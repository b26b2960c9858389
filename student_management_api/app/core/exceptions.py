"""
Error taxonomy shared by the service and both presentation adapters.

The service layer only ever raises subclasses of
``StudentServiceError``.  Adapters translate them once, at their
boundary: the HTTP layer through ``ERROR_STATUS`` and
``build_error_body``, the tool layer into tool errors.
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Optional, Type


class StudentServiceError(Exception):
    """Base class for expected failures of a student operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(StudentServiceError):
    """A required field is missing or blank, or a value cannot be parsed."""


class DuplicateEmailError(StudentServiceError):
    """Another student already uses the email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already exists: {email}")
        self.email = email


class StudentNotFoundError(StudentServiceError):
    """No student has the requested id."""

    def __init__(self, student_id: int) -> None:
        super().__init__(f"Student not found with id: {student_id}")
        self.student_id = student_id


ERROR_STATUS: Dict[Type[StudentServiceError], HTTPStatus] = {
    InvalidArgumentError: HTTPStatus.BAD_REQUEST,
    DuplicateEmailError: HTTPStatus.CONFLICT,
    StudentNotFoundError: HTTPStatus.NOT_FOUND,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def status_for(exc: BaseException) -> HTTPStatus:
    """Return the HTTP status for an exception, 500 for anything unexpected."""
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_label(status: HTTPStatus) -> str:
    """Reason phrase used as the ``error`` field, e.g. ``"Not Found"``."""
    return status.phrase


def build_error_body(
    status: HTTPStatus,
    message: str,
    path: str,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the uniform error payload returned for every failed request."""
    when = timestamp or datetime.now(timezone.utc)
    return {
        "status": int(status),
        "error": error_label(status),
        "message": message,
        "path": path,
        "timestamp": when.isoformat(),
    }
