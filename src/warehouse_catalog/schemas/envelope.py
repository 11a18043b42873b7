"""
Uniform response envelope.

Success:
    {"success": true, "data": {...}, "message": "Warehouse created successfully",
     "timestamp": "...", "error": null}

Failure:
    {"success": false, "data": null, "message": "Warehouse not found", "timestamp": "...",
     "error": {"code": "NOT_FOUND", "message": "Warehouse not found", "timestamp": "..."}}
"""
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from ..exceptions.base import AppError

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    code: str
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    fields: list[str] | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Standard response envelope."""

    success: bool
    data: T | None = None
    message: str | None = None
    timestamp: datetime = Field(default_factory=_utc_now)
    error: ErrorDetail | None = None


def success_response(data: Any = None, message: str | None = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message)


def error_response(exc: AppError) -> ApiResponse:
    """Build the failure envelope from a taxonomy error; only public text is rendered."""
    payload = exc.to_payload()
    detail = ErrorDetail(
        code=payload["code"],
        message=payload["message"],
        fields=payload.get("fields"),
    )
    return ApiResponse(success=False, data=None, message=detail.message, error=detail)
