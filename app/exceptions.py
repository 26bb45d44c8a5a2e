from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors raised by services and rendered by the API handlers.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Application error"
    default_code = "APP_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(AppError):
    """Raised when authentication fails or a session is missing or expired."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(AppError):
    """Raised when a resource conflict occurs (e.g., duplicate account email)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class StorageError(AppError):
    """Raised by document stores when a read or write cannot be completed.

    The message is meant for operational logs; API handlers show users a
    generic message instead.
    """

    http_status = 503
    default_message = "Storage unavailable"
    default_code = "STORAGE_ERROR"
