"""
Logging filters.

- RequestIdFilter: stamps `record.request_id` from a contextvar set by
  RequestIDMiddleware. A contextvar (not threading.local) keeps the id correct
  across awaits, with many requests interleaved on one event loop. Records
  outside a request get the sentinel "-", so `%(request_id)s` never KeyErrors.

- RedactFilter: masks sensitive `extra` values (credentials, connection strings)
  before any handler formats the record.

Both filters always return True; they annotate, they never drop records.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: pass it to reset_request_id() to restore the previous value.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee every LogRecord has a `request_id` attribute.

    Priority: an explicit `extra={"request_id": ...}`, then the contextvar,
    then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = frozenset({
        "password",
        "postgres_password",
        "database_url",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
    })
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
