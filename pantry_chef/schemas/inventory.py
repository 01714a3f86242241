from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class InventoryItemCreate(BaseModel):
    name: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    unit: str
    category: str
    expiry_date: datetime


class InventoryItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=0)
    unit: str | None = None
    category: str | None = None
    expiry_date: datetime | None = None


class InventoryItemResponse(BaseModel):
    id: UUID
    name: str
    quantity: int
    unit: str
    category: str
    expiry_date: datetime
    added_date: datetime

    model_config = {"from_attributes": True}


class AdjustQuantityRequest(BaseModel):
    amount: int


class BulkDeleteRequest(BaseModel):
    ids: list[UUID]
