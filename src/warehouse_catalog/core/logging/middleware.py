"""
Request ID middleware.

Each request gets a correlation id: the incoming `X-Request-ID` header when it
is a valid UUID, a fresh UUID4 otherwise. The id is stored in the request-id
contextvar for the duration of the request (so RequestIdFilter stamps it on
every log record) and echoed back in the `X-Request-ID` response header.
Arbitrary header values are never logged verbatim, which keeps newlines and
oversized strings out of the logs.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(incoming: str | None) -> str:
    """Return `incoming` when it parses as a UUID, else a new UUID4 string."""
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
