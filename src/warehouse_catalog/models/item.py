from decimal import Decimal

from sqlalchemy import Boolean, Index, Integer, Numeric, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base
from .mixins import AuditMixin


class Item(AuditMixin, Base):
    """
    SQLAlchemy model for Item.

    A catalog entry for a stock article, consumable or loanable tool.
    `item_code` is the natural key, unique among active items.
    """
    __tablename__ = "items"
    __table_args__ = (
        Index(
            "uq_items_item_code_active",
            "item_code",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index("ix_items_category", "category"),
    )

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item_code: Mapped[str] = mapped_column(String(100), nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    item_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Classification ---
    item_type: Mapped[str] = mapped_column(
        String(50), default="STOCK", server_default="STOCK", nullable=False
    )
    item_usage_type: Mapped[str] = mapped_column(
        String(50), default="CONSUMABLE", server_default="CONSUMABLE", nullable=False
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    unit: Mapped[str] = mapped_column(String(50), default="PCS", server_default="PCS", nullable=False)

    # --- Physical properties ---
    weight_kg: Mapped[Decimal | None] = mapped_column(Numeric(10, 4), nullable=True)
    length_cm: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    width_cm: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    height_cm: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    volume_cbm: Mapped[Decimal | None] = mapped_column(Numeric(10, 4), nullable=True)

    # --- Tool / asset specific ---
    is_loanable: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)
    requires_return: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)
    max_loan_duration_days: Mapped[int] = mapped_column(Integer, default=30, server_default="30", nullable=False)
    replacement_cost: Mapped[Decimal | None] = mapped_column(Numeric(15, 4), nullable=True)
    maintenance_required: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    calibration_required: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    # --- Financial ---
    standard_cost: Mapped[Decimal | None] = mapped_column(Numeric(15, 4), nullable=True)
    last_cost: Mapped[Decimal | None] = mapped_column(Numeric(15, 4), nullable=True)
    average_cost: Mapped[Decimal | None] = mapped_column(Numeric(15, 4), nullable=True)

    def __repr__(self) -> str:
        return f"<Item(item_id={self.item_id!r}, item_code={self.item_code!r}, is_active={self.is_active!r})>"
