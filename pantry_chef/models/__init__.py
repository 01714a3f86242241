from pantry_chef.models.inventory import InventoryItem
from pantry_chef.models.recipe import Recipe
from pantry_chef.models.shopping import ShoppingListItem
from pantry_chef.models.preferences import UserPreferences

__all__ = [
    "InventoryItem", "Recipe", "ShoppingListItem", "UserPreferences",
]
