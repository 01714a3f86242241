import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pantry_chef.database import get_db
from pantry_chef.exceptions import NotFoundError
from pantry_chef.models.shopping import ShoppingListItem
from pantry_chef.schemas.shopping import (
    ShoppingListItemCreate, ShoppingListItemUpdate, ShoppingListItemResponse,
    ShoppingListResponse, ReconcileResponse,
)
from pantry_chef.services.shopping import restock_low_stock

logger = logging.getLogger(__name__)

router = APIRouter()

NULLABLE_FIELDS = {"expiry_date"}


def _get_item(db: Session, item_id: UUID) -> ShoppingListItem:
    item = db.query(ShoppingListItem).filter(ShoppingListItem.id == item_id).first()
    if not item:
        raise NotFoundError("Shopping list item not found")
    return item


@router.get("/", response_model=ShoppingListResponse)
def get_shopping_list(db: Session = Depends(get_db)):
    items = db.query(ShoppingListItem).order_by(
        ShoppingListItem.purchased.asc(), ShoppingListItem.name.asc()
    ).all()
    purchased_count = sum(1 for i in items if i.purchased)
    total_items = len(items)
    return {
        "items": [ShoppingListItemResponse.model_validate(i) for i in items],
        "purchased_count": purchased_count,
        "total_items": total_items,
        "progress": (purchased_count / total_items) * 100 if total_items else 0,
    }


@router.post("/", response_model=ShoppingListItemResponse, status_code=201)
def add_item(body: ShoppingListItemCreate, db: Session = Depends(get_db)):
    item = ShoppingListItem(**body.model_dump(), purchased=False)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/", response_model=dict)
def clear_list(db: Session = Depends(get_db)):
    """Start a new cart."""
    deleted = db.query(ShoppingListItem).delete()
    db.commit()
    logger.info(f"Cleared shopping list ({deleted} items)")
    return {"success": True, "deleted": deleted}


@router.post("/restock", response_model=ReconcileResponse)
def restock(db: Session = Depends(get_db)):
    result = restock_low_stock(db)
    return {
        "success": True,
        "message": result.message,
        "added_count": result.added_count,
        "updated_count": result.updated_count,
    }


@router.patch("/{item_id}", response_model=ShoppingListItemResponse)
def update_item(item_id: UUID, body: ShoppingListItemUpdate, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    data = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    for k, v in data.items():
        setattr(item, k, v)
    db.commit()
    db.refresh(item)
    return item


@router.post("/{item_id}/toggle", response_model=ShoppingListItemResponse)
def toggle_purchased(item_id: UUID, db: Session = Depends(get_db)):
    # Read-modify-write, last write wins
    item = _get_item(db, item_id)
    item.purchased = not item.purchased
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=204)
def delete_item(item_id: UUID, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()
