from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class ShoppingListItemCreate(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(default=1, gt=0)
    unit: str = "pcs"
    category: str = "Vegetables"


class ShoppingListItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    quantity: float | None = Field(default=None, gt=0)
    unit: str | None = None
    category: str | None = None
    purchased: bool | None = None
    expiry_date: datetime | None = None


class ShoppingListItemResponse(BaseModel):
    id: UUID
    name: str
    quantity: float
    unit: str
    category: str
    purchased: bool
    expiry_date: datetime | None

    model_config = {"from_attributes": True}


class ShoppingListResponse(BaseModel):
    items: list[ShoppingListItemResponse]
    purchased_count: int
    total_items: int
    progress: float


class ReconcileResponse(BaseModel):
    success: bool
    message: str | None = None
    added_count: int = 0
    updated_count: int = 0
