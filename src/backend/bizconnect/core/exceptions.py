"""
Custom exception classes for the application.

Each exception carries a machine-readable error code and the HTTP status
the route boundary converts it to.
"""

from typing import Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        status_code: HTTP status code to return
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str = "APP_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# Database Exceptions
class DatabaseException(AppException):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str = "Database operation failed",
        error_code: str = "DB_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, 500, details)


class DatabaseUnavailableException(AppException):
    """Raised when the database cannot be reached at all."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            "Database connection is not available",
            "DB_UNAVAILABLE",
            503,
            {"detail": detail},
        )


class EntityNotFoundException(AppException):
    """Raised when a requested entity is not found."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str | int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"{entity_type} not found"
        if entity_id is not None:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message, "ENTITY_NOT_FOUND", 404, details)


class DuplicateEntityException(AppException):
    """Raised when attempting to create a duplicate entity."""

    def __init__(
        self,
        entity_type: str,
        field: str,
        value: str,
        message: str | None = None,
    ) -> None:
        message = message or f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY", 409, {"field": field, "value": value})


# Validation Exceptions
class ValidationException(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR", 400, {"field_errors": field_errors or {}})


class PayloadTooLargeException(AppException):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int) -> None:
        super().__init__(
            f"File exceeds the {limit_bytes // (1024 * 1024)}MB limit",
            "PAYLOAD_TOO_LARGE",
            413,
            {"limit_bytes": limit_bytes},
        )


# Access Exceptions
class AuthenticationException(AppException):
    """Raised when credentials or tokens cannot be verified."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message, "AUTHENTICATION_FAILED", 401)


class AuthorizationException(AppException):
    """Raised when an authenticated caller lacks the required capability."""

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message, "FORBIDDEN", 403)
