"""
FastAPI exception handlers rendering every failure into the response envelope.

Mapping lives on the exception classes (`http_status()`, `to_payload()`); the
handlers only log and serialize. Client-side kinds log at INFO without a stack,
server-side kinds at ERROR, and nothing but `public_message` reaches the body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions.base import AppError, InternalError, ValidationError
from ..schemas.envelope import ApiResponse, ErrorDetail, error_response

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _envelope(status_code: int, body: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    extra = {
        "method": request.method,
        "path": request.url.path,
        "code": exc.error_code,
        "fields": exc.fields,
    }
    if exc.is_server_error():
        # full internal detail stays in the logs
        logger.error("http.app_error", extra={**extra, "detail": str(exc)})
    else:
        logger.info("http.client_error", extra=extra)
    return _envelope(exc.http_status(), error_response(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body/path/query -> 400 VALIDATION_ERROR, same envelope as service-level validation."""
    fields: list[str] = []
    messages: list[str] = []
    for err in exc.errors():
        # drop the "body"/"query"/"path" prefix from the location
        loc = [str(p) for p in err.get("loc", ())]
        name = ".".join(loc[1:] if len(loc) > 1 else loc) or "body"
        if name not in fields:
            fields.append(name)
        messages.append(f"{name}: {err.get('msg')}")

    app_exc = ValidationError("; ".join(messages) or "Invalid request", fields=fields)
    logger.info(
        "http.request_validation_failed",
        extra={"method": request.method, "path": request.url.path, "fields": fields},
    )
    return _envelope(app_exc.http_status(), error_response(app_exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-level HTTP errors (unknown route, wrong method) in envelope form."""
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    detail = ErrorDetail(code=_HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR"), message=message)
    body = ApiResponse(success=False, message=message, error=detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.unhandled_exception",
        extra={"method": request.method, "path": request.url.path},
    )
    return _envelope(500, error_response(InternalError("Unhandled exception")))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
