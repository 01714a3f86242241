"""
Shopping list reconciliation.

Ingredient demands are merged into the persisted shopping list by exact,
case-sensitive name match: a match adds to the existing quantity, anything
else becomes a new unpurchased row. Each ingredient is committed on its own,
so a failure part-way leaves the earlier ones in place.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from pantry_chef.models.inventory import InventoryItem
from pantry_chef.models.shopping import ShoppingListItem
from pantry_chef.services.filters import is_low_stock, is_out_of_stock
from pantry_chef.services.ingredient_parser import ParsedIngredient, parse_ingredient

logger = logging.getLogger(__name__)

RESTOCK_QUANTITY = 1


@dataclass
class ReconcileResult:
    added_count: int = 0
    updated_count: int = 0

    @property
    def message(self) -> str:
        parts = []
        if self.added_count:
            parts.append(f"Added {self.added_count} new item{'s' if self.added_count != 1 else ''}")
        if self.updated_count:
            parts.append(f"updated {self.updated_count} existing item{'s' if self.updated_count != 1 else ''}")
        if not parts:
            return "No ingredients to add"
        return " and ".join(parts).capitalize() + " in shopping list"


def reconcile_item(db: Session, parsed: ParsedIngredient) -> bool:
    """Merge one parsed demand into the list. Returns True when a row was updated."""
    existing = db.query(ShoppingListItem).filter(
        ShoppingListItem.name == parsed.name,
    ).first()

    if existing:
        if existing.unit != parsed.unit:
            # Quantities are summed regardless; no unit normalization exists.
            logger.warning(
                f"Merging '{parsed.name}' across units: {existing.quantity} {existing.unit} "
                f"+ {parsed.quantity} {parsed.unit}"
            )
        existing.quantity = (existing.quantity or 0) + parsed.quantity
        db.commit()
        return True

    db.add(ShoppingListItem(
        name=parsed.name,
        quantity=parsed.quantity,
        unit=parsed.unit,
        category=parsed.category,
        purchased=False,
    ))
    db.commit()
    return False


def add_recipe_to_shopping_list(
    db: Session, recipe_id, recipe_name: str, ingredients: list[str]
) -> ReconcileResult:
    """Parse and merge each ingredient of a recipe into the shopping list."""
    logger.info(f"Adding {len(ingredients)} ingredients from recipe '{recipe_name}' ({recipe_id})")
    result = ReconcileResult()
    for raw in ingredients:
        if not raw or not raw.strip():
            continue
        if reconcile_item(db, parse_ingredient(raw)):
            result.updated_count += 1
        else:
            result.added_count += 1
    return result


def restock_low_stock(db: Session) -> ReconcileResult:
    """Put every low or out-of-stock inventory item on the shopping list."""
    result = ReconcileResult()
    items = db.query(InventoryItem).order_by(InventoryItem.name.asc()).all()
    for item in items:
        if not (is_low_stock(item.quantity) or is_out_of_stock(item.quantity)):
            continue
        demand = ParsedIngredient(
            quantity=RESTOCK_QUANTITY,
            unit=item.unit,
            name=item.name,
            category=item.category,
        )
        if reconcile_item(db, demand):
            result.updated_count += 1
        else:
            result.added_count += 1
    logger.info(f"Restock: {result.added_count} added, {result.updated_count} updated")
    return result
