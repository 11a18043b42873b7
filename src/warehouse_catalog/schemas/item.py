"""Item schemas for request/response validation."""
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]


class ItemCreate(BaseModel):
    """Payload for creating an item. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    item_code: str = Field(min_length=1, max_length=100)
    item_name: str = Field(min_length=1, max_length=255)
    item_description: str | None = None
    item_type: str = Field(default="STOCK", max_length=50)
    item_usage_type: str = Field(default="CONSUMABLE", max_length=50)
    category: str | None = Field(default=None, max_length=100)
    subcategory: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    unit: str = Field(default="PCS", max_length=50)

    weight_kg: NonNegativeDecimal | None = None
    length_cm: NonNegativeDecimal | None = None
    width_cm: NonNegativeDecimal | None = None
    height_cm: NonNegativeDecimal | None = None
    volume_cbm: NonNegativeDecimal | None = None

    is_loanable: bool = False
    requires_return: bool = False
    max_loan_duration_days: int = Field(default=30, ge=0)
    replacement_cost: NonNegativeDecimal | None = None
    maintenance_required: bool = False
    calibration_required: bool = False

    standard_cost: NonNegativeDecimal | None = None
    last_cost: NonNegativeDecimal | None = None
    average_cost: NonNegativeDecimal | None = None


class ItemUpdate(BaseModel):
    """
    Partial update. `item_code` is not part of it: an item keeps its code for
    life, sending one is rejected as an unknown field.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    item_name: str | None = Field(default=None, min_length=1, max_length=255)
    item_description: str | None = None
    item_type: str | None = Field(default=None, max_length=50)
    item_usage_type: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=100)
    subcategory: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    unit: str | None = Field(default=None, max_length=50)

    weight_kg: NonNegativeDecimal | None = None
    length_cm: NonNegativeDecimal | None = None
    width_cm: NonNegativeDecimal | None = None
    height_cm: NonNegativeDecimal | None = None
    volume_cbm: NonNegativeDecimal | None = None

    is_loanable: bool | None = None
    requires_return: bool | None = None
    max_loan_duration_days: int | None = Field(default=None, ge=0)
    replacement_cost: NonNegativeDecimal | None = None
    maintenance_required: bool | None = None
    calibration_required: bool | None = None

    standard_cost: NonNegativeDecimal | None = None
    last_cost: NonNegativeDecimal | None = None
    average_cost: NonNegativeDecimal | None = None


class ItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: int
    item_code: str
    item_name: str
    item_description: str | None
    item_type: str
    item_usage_type: str
    category: str | None
    subcategory: str | None
    brand: str | None
    model: str | None
    unit: str
    weight_kg: Decimal | None
    length_cm: Decimal | None
    width_cm: Decimal | None
    height_cm: Decimal | None
    volume_cbm: Decimal | None
    is_loanable: bool
    requires_return: bool
    max_loan_duration_days: int
    replacement_cost: Decimal | None
    maintenance_required: bool
    calibration_required: bool
    standard_cost: Decimal | None
    last_cost: Decimal | None
    average_cost: Decimal | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    created_by: int | None
    updated_by: int | None
