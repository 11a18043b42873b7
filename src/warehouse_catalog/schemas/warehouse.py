"""Warehouse schemas for request/response validation."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field

WarehouseCode = Annotated[str, Field(min_length=1, max_length=50)]
Email = Annotated[EmailStr, Field(max_length=100)]


class WarehouseCreate(BaseModel):
    """Payload for creating a warehouse. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    warehouse_code: WarehouseCode
    warehouse_name: str = Field(min_length=1, max_length=255)
    warehouse_type: str = Field(default="STANDARD", max_length=50)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str = Field(default="Indonesia", max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    email: Email | None = None
    manager_user_id: int | None = None
    timezone: str = Field(default="Asia/Jakarta", max_length=50)


class WarehouseUpdate(BaseModel):
    """
    Partial update. A field left out means "keep the stored value";
    an explicit null clears a nullable field.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    warehouse_code: WarehouseCode | None = None
    warehouse_name: str | None = Field(default=None, min_length=1, max_length=255)
    warehouse_type: str | None = Field(default=None, max_length=50)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    email: Email | None = None
    manager_user_id: int | None = None
    timezone: str | None = Field(default=None, max_length=50)


class WarehouseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    warehouse_id: int
    warehouse_code: str
    warehouse_name: str
    warehouse_type: str
    address: str | None
    city: str | None
    state: str | None
    postal_code: str | None
    country: str
    phone: str | None
    email: str | None
    manager_user_id: int | None
    timezone: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    created_by: int | None
    updated_by: int | None
