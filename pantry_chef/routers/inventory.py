import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pantry_chef.database import get_db
from pantry_chef.exceptions import NotFoundError
from pantry_chef.models.inventory import InventoryItem
from pantry_chef.schemas.inventory import (
    InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse,
    AdjustQuantityRequest, BulkDeleteRequest,
)
from pantry_chef.services.filters import filter_inventory

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_item(db: Session, item_id: UUID) -> InventoryItem:
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not item:
        raise NotFoundError("Inventory item not found")
    return item


@router.get("/", response_model=list[InventoryItemResponse])
def list_items(
    filter: str = Query("all", pattern="^(all|expiring|lowstock|outofstock)$"),
    search: str | None = None,
    sort_by: str | None = Query(None, pattern="^(name|quantity|unit|category|expiry_date|added_date)$"),
    sort_dir: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    items = db.query(InventoryItem).order_by(InventoryItem.added_date.desc()).all()
    return filter_inventory(items, active_filter=filter, search=search, sort_by=sort_by, sort_dir=sort_dir)


@router.post("/", response_model=InventoryItemResponse, status_code=201)
def create_item(body: InventoryItemCreate, db: Session = Depends(get_db)):
    item = InventoryItem(**body.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Created inventory item {item.name} ({item.id})")
    return item


@router.post("/bulk-delete", response_model=dict)
def bulk_delete(body: BulkDeleteRequest, db: Session = Depends(get_db)):
    # One statement per id, committed individually
    deleted = 0
    for item_id in body.ids:
        deleted += db.query(InventoryItem).filter(InventoryItem.id == item_id).delete()
        db.commit()
    logger.info(f"Bulk deleted {deleted} of {len(body.ids)} inventory items")
    return {"success": True, "deleted": deleted}


@router.get("/{item_id}", response_model=InventoryItemResponse)
def get_item(item_id: UUID, db: Session = Depends(get_db)):
    return _get_item(db, item_id)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
def update_item(item_id: UUID, body: InventoryItemUpdate, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    # Explicit nulls leave the field unchanged; every column is NOT NULL
    data = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    for k, v in data.items():
        setattr(item, k, v)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=204)
def delete_item(item_id: UUID, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()


@router.post("/{item_id}/adjust", response_model=InventoryItemResponse)
def adjust_quantity(item_id: UUID, body: AdjustQuantityRequest, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    current = item.quantity or 0
    item.quantity = max(0, current + body.amount)
    db.commit()
    db.refresh(item)
    return item
