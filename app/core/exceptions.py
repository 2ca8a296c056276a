# app/core/exceptions.py
from http import HTTPStatus


class AppError(Exception):
    """Base class for all application exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidRangeError(AppError):
    """Raised at the API boundary when a date window or time interval is empty or inverted."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, details=details)
