from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pantry_chef.database import get_db
from pantry_chef.models.inventory import InventoryItem
from pantry_chef.models.recipe import Recipe
from pantry_chef.schemas.inventory import InventoryItemResponse
from pantry_chef.services.filters import filter_inventory
from pantry_chef.services.recipe_codec import recipe_to_dict

router = APIRouter()

PREVIEW_ITEMS = 5
RECENT_RECIPES = 3


@router.get("/", response_model=dict)
def dashboard(db: Session = Depends(get_db)):
    inventory = db.query(InventoryItem).all()
    expiring = filter_inventory(inventory, "expiring", sort_by="expiry_date")
    low_stock = filter_inventory(inventory, "lowstock", sort_by="quantity")
    saved_recipes = db.query(Recipe).filter(Recipe.is_saved.is_(True)).count()
    recent = db.query(Recipe).order_by(Recipe.created_at.desc()).limit(RECENT_RECIPES).all()
    return {
        "total_items": len(inventory),
        "expiring_count": len(expiring),
        "low_stock_count": len(low_stock),
        "saved_recipes": saved_recipes,
        "expiring_items": [InventoryItemResponse.model_validate(i) for i in expiring[:PREVIEW_ITEMS]],
        "low_stock_items": [InventoryItemResponse.model_validate(i) for i in low_stock[:PREVIEW_ITEMS]],
        "recent_recipes": [recipe_to_dict(r) for r in recent],
    }
