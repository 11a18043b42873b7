from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base
from .mixins import AuditMixin


class Warehouse(AuditMixin, Base):
    """
    SQLAlchemy model for Warehouse.

    A physical storage site. `warehouse_code` is the natural key: unique among
    active warehouses only, so a soft-deleted warehouse frees its code.
    """
    __tablename__ = "warehouses"
    __table_args__ = (
        # Partial unique index: uniqueness applies to active rows only.
        Index(
            "uq_warehouses_warehouse_code_active",
            "warehouse_code",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    warehouse_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    warehouse_code: Mapped[str] = mapped_column(String(50), nullable=False)
    warehouse_name: Mapped[str] = mapped_column(String(255), nullable=False)
    warehouse_type: Mapped[str] = mapped_column(
        String(50), default="STANDARD", server_default="STANDARD", nullable=False
    )

    # --- Location ---
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str] = mapped_column(
        String(100), default="Indonesia", server_default="Indonesia", nullable=False
    )

    # --- Contact ---
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    manager_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    timezone: Mapped[str] = mapped_column(
        String(50), default="Asia/Jakarta", server_default="Asia/Jakarta", nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<Warehouse(warehouse_id={self.warehouse_id!r}, "
            f"warehouse_code={self.warehouse_code!r}, is_active={self.is_active!r})>"
        )
