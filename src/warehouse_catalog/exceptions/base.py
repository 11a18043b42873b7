"""
Application error taxonomy.

Every outcome the catalog can fail with is one of the classes below. Each class
carries a stable machine-readable `error_code` (rendered in the response envelope)
and an HTTP status used by the boundary layer. Server-side kinds render a generic
`public_message` so storage/schema details never reach callers; the full detail
stays in `message` for logs.
"""

from typing import Iterable


class AppError(Exception):
    """
    Base exception for catalog errors.

    - message: detailed message (always logged, shown to clients only for client-side kinds)
    - fields: optional list of field names related to the error (e.g., ['warehouse_code'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical code, e.g. 'ALREADY_EXISTS'
    """

    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500

    # Generic text rendered instead of `message` for server-side kinds.
    # None means `message` itself is safe to show.
    default_public_message: str | None = "Internal server error"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        parts.append(f"code: {self.error_code}")
        return f"{base} ({'; '.join(parts)})"

    @property
    def public_message(self) -> str:
        """Message that is safe to render to callers."""
        return self.default_public_message or self.message

    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def http_status(self) -> int:
        return self.status_code

    def to_payload(self) -> dict:
        """
        Return the JSON-serializable error body:
            {"code": "ALREADY_EXISTS", "message": "...", "fields": [...]}
        `constraint` is intentionally left out of the payload.
        """
        payload = {"code": self.error_code, "message": self.public_message}
        if self.fields and not self.is_server_error():
            payload["fields"] = list(self.fields)
        return payload


# ------------------------
# Client-side kinds
# ------------------------

class ValidationError(AppError):
    """Payload or query failed validation before reaching storage."""

    error_code = "VALIDATION_ERROR"
    status_code = 400
    default_public_message = None


class NotFoundError(AppError):
    error_code = "NOT_FOUND"
    status_code = 404
    default_public_message = None

    def __init__(self, resource: str = "Resource", *, fields: Iterable[str] | None = None):
        self.resource = resource
        super().__init__(f"{resource} not found", fields=fields)


class AlreadyExistsError(AppError):
    error_code = "ALREADY_EXISTS"
    status_code = 409
    default_public_message = None

    def __init__(self, resource: str = "Resource", *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        self.resource = resource
        super().__init__(f"{resource} already exists", fields=fields, constraint=constraint)


class UnauthorizedError(AppError):
    error_code = "UNAUTHORIZED"
    status_code = 401
    default_public_message = "Unauthorized access"

    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message)


class ForbiddenError(AppError):
    error_code = "FORBIDDEN"
    status_code = 403
    default_public_message = None

    def __init__(self, reason: str = "Forbidden"):
        self.reason = reason
        super().__init__(reason)


# ------------------------
# Server-side kinds
# ------------------------

class DatabaseError(AppError):
    error_code = "DATABASE_ERROR"
    status_code = 500
    default_public_message = "Database error occurred"


class ConfigError(AppError):
    error_code = "CONFIG_ERROR"
    status_code = 500
    default_public_message = "Configuration error"


class ExternalServiceError(AppError):
    error_code = "EXTERNAL_SERVICE_ERROR"
    status_code = 502
    default_public_message = "External service error"

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


class InternalError(AppError):
    error_code = "INTERNAL_ERROR"
    status_code = 500
    default_public_message = "Internal server error"


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AlreadyExistsError",
    "UnauthorizedError",
    "ForbiddenError",
    "DatabaseError",
    "ConfigError",
    "ExternalServiceError",
    "InternalError",
]
