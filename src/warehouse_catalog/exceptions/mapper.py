import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import AppError, AlreadyExistsError, DatabaseError, InternalError, ValidationError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

# Postgres: 'null value in column "warehouse_name" ...' / 'DETAIL:  Key (warehouse_code)=(WH-01) already exists.'
_PG_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_PG_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
# SQLite: 'UNIQUE constraint failed: warehouses.warehouse_code'
_SQLITE_FAILED = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the column names involved in an integrity error.
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    m = _PG_NOT_NULL.search(msg)
    if m:
        return [m.group("col")]

    m = _PG_KEY.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    for line in msg.splitlines():
        m = _SQLITE_FAILED.search(line.strip())
        if m:
            return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(exc: IntegrityError, resource: str | None = None) -> AppError:
    """
    Map a SQLAlchemy IntegrityError to a public AppError.

    A unique violation here is the losing side of the check-then-act race on the
    natural key, so it becomes AlreadyExistsError rather than a generic storage error.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    resource_name = resource or "Record"

    if exc_cls is UniqueConstraintError:
        # expected client-level conflict -> INFO, no stack
        logger.info(
            "mapper.duplicate_detected",
            extra={"resource": resource_name, "fields": columns, "constraint": constraint_name},
        )
        return AlreadyExistsError(resource_name, fields=columns, constraint=constraint_name)

    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"resource": resource_name, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            return ValidationError(
                f"Missing required field(s): {', '.join(columns)} for {resource_name}",
                fields=columns, constraint=constraint_name,
            )
        return ValidationError(f"Missing required field for {resource_name}", constraint=constraint_name)

    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"resource": resource_name, "fields": columns, "constraint": constraint_name},
        )
        return ValidationError(
            f"{resource_name} references a record that does not exist",
            fields=columns, constraint=constraint_name,
        )

    if exc_cls is CheckConstraintError:
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"resource": resource_name, "raw": str(exc.orig), "constraint": constraint_name},
        )
        return ValidationError(
            f"{resource_name} violates a business rule", constraint=constraint_name,
        )

    logger.error(
        "mapper.unknown_integrity_error",
        extra={"resource": resource_name, "constraint": constraint_name, "raw": str(exc.orig)},
    )
    return DatabaseError(f"{resource_name} integrity error: {exc.orig}", constraint=constraint_name)


# -----------------------
# Async context manager used around every repository storage call
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, resource: str | None = None, operation: str | None = None):
    """
    Usage:
        async with db_error_handler(session, "Warehouse", "create"):
            ... DB ops ...

    - IntegrityError      -> rollback, mapped via map_integrity_error()
    - other SQLAlchemyError -> rollback, DatabaseError (detail logged, generic public message)
    - AppError            -> rollback, re-raised unchanged
    - anything else       -> rollback, InternalError
    """
    try:
        yield
    except AppError:
        await _safe_rollback(db, resource)
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, resource)
        raise map_integrity_error(exc, resource) from exc
    except SQLAlchemyError as exc:
        await _safe_rollback(db, resource)
        logger.exception(
            "repo.database_error",
            extra={"resource": resource, "operation": operation},
        )
        raise DatabaseError(f"Failed to {operation or 'operate on'} {resource or 'record'}: {exc}") from exc
    except Exception as exc:
        await _safe_rollback(db, resource)
        logger.exception(
            "repo.unexpected_error",
            extra={"resource": resource, "operation": operation},
        )
        raise InternalError(f"Unexpected error during {operation or 'operation'} on {resource or 'record'}") from exc


async def _safe_rollback(db: AsyncSession, resource: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        # The original error is re-raised by the caller; a failed rollback is only logged.
        logger.exception("repo.rollback_failed", extra={"resource": resource})
