from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, true
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    """
    Lifecycle and audit columns shared by every catalog entity.

    `is_active` is the soft-deletion toggle: rows are never physically deleted,
    a deleted row is simply inactive and invisible to reads.
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
        nullable=False,
    )

    # Timestamps are set in Python so every backend stores the same UTC instant;
    # the server default covers rows inserted outside the ORM.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    # Principal ids of the acting user
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
