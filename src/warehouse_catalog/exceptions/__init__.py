# warehouse_catalog/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # public taxonomy (ValidationError, NotFoundError, AlreadyExistsError, ...)
# │   ├── integrity_classifier.py    # SQL-level constraint classification
# │   └── mapper.py                  # IntegrityError / SQLAlchemyError -> public taxonomy

from .base import (
    AppError,
    ValidationError,
    NotFoundError,
    AlreadyExistsError,
    UnauthorizedError,
    ForbiddenError,
    DatabaseError,
    ConfigError,
    ExternalServiceError,
    InternalError,
)

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
