from uuid import UUID
from pydantic import BaseModel, Field

DIETARY_OPTIONS = [
    "Vegetarian", "Vegan", "Pescatarian", "Keto", "Paleo",
    "Gluten-Free", "Dairy-Free", "Low-Carb", "Halal", "Kosher",
]

CUISINE_OPTIONS = [
    "Italian", "Mexican", "Chinese", "Japanese", "Indian", "Thai", "Korean",
    "French", "Mediterranean", "American", "Greek", "Spanish", "Vietnamese",
    "Middle Eastern",
]

SHOPPING_DAYS = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]


class PreferencesUpdate(BaseModel):
    dietary_restrictions: list[str] = []
    allergies: list[str] = []
    favorite_cuisines: list[str] = []
    disliked_ingredients: list[str] = []
    servings_default: int = Field(default=4, ge=1)
    shopping_day: str = "Sunday"
    low_stock_threshold: float = Field(default=0.2, ge=0, le=1)
    expiry_warning_days: int = Field(default=3, ge=0)
    expiry_alerts: bool = True
    low_stock_alerts: bool = True
    shopping_reminders: bool = True
    recipe_suggestions: bool = True


class PreferencesResponse(PreferencesUpdate):
    id: UUID | None = None
    user_id: str


class PreferenceOptionsResponse(BaseModel):
    dietary_options: list[str] = DIETARY_OPTIONS
    cuisine_options: list[str] = CUISINE_OPTIONS
    shopping_days: list[str] = SHOPPING_DAYS
