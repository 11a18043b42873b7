"""
Classify SQLAlchemy IntegrityErrors into constraint kinds.

These classes are internal labels only. `mapper.py` turns them into the public
taxonomy (`AlreadyExistsError`, `ValidationError`, `DatabaseError`), so nothing
outside the exceptions package should raise or catch them.

| Constraint kind (internal)  | Public error          |
| --------------------------- | --------------------- |
| `UniqueConstraintError`     | `AlreadyExistsError`  |
| `NotNullConstraintError`    | `ValidationError`     |
| `ForeignKeyConstraintError` | `ValidationError`     |
| `CheckConstraintError`      | `ValidationError`     |
| `UnknownIntegrityError`     | `DatabaseError`       |
"""
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintViolation(Exception):
    """Base label for integrity/constraint violations."""


class UniqueConstraintError(ConstraintViolation):
    """Unique constraint / unique index violation."""


class NotNullConstraintError(ConstraintViolation):
    """NOT NULL violation."""


class ForeignKeyConstraintError(ConstraintViolation):
    """Foreign key violation."""


class CheckConstraintError(ConstraintViolation):
    """CHECK constraint violation."""


class UnknownIntegrityError(ConstraintViolation):
    """Unrecognized integrity error."""


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}

# Message fragments used when no SQLSTATE is available (SQLite, MySQL, ...).
_MESSAGE_KEYWORDS: list[tuple[Type[ConstraintViolation], tuple[str, ...]]] = [
    (UniqueConstraintError, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (NotNullConstraintError, ("not null constraint", "not null", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint", "foreign key", "is not present in table")),
    (CheckConstraintError, ("check constraint", "check failed")),
]


def _get_pgcode(orig) -> str | None:
    # psycopg exposes `pgcode`, asyncpg (through SQLAlchemy's adapter) exposes `sqlstate`
    # on the wrapped driver exception.
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return str(code)
    cause = getattr(orig, "__cause__", None)
    if cause is not None:
        code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
        return str(code) if code else None
    return None


def _get_constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "constraint_name", None) if cause is not None else None


def _classify_from_postgres(orig) -> tuple[Type[ConstraintViolation] | None, str | None]:
    pgcode = _get_pgcode(orig)
    if not pgcode:
        return None, None

    constraint_name = _get_constraint_name(orig)
    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)

    if exception_class:
        logger.debug(
            "integrity.postgres_diagnostic",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return exception_class, constraint_name

    logger.warning(
        "integrity.unknown_pgcode",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_message(msg: str) -> tuple[Type[ConstraintViolation], None]:
    normalized = (msg or "").lower()
    for exception_class, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return exception_class, None

    logger.warning("integrity.unknown_message", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolation], str | None]:
    """
    Classify an IntegrityError into a ConstraintViolation subclass.

    Returns:
        (ConstraintViolation subclass, constraint name if the driver reported one)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_message(str(orig) if orig is not None else str(exc))
