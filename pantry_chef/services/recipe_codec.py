"""
Serialization boundary between stored rows and API shapes.

Recipes keep ingredients and instructions as newline-delimited text; the API
works with lists. Preferences keep string lists as JSON text and the low-stock
threshold as an integer percentage.
"""

import json
import logging

from pantry_chef.models.preferences import UserPreferences
from pantry_chef.models.recipe import Recipe

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"

PREFERENCE_LIST_FIELDS = (
    "dietary_restrictions", "allergies", "favorite_cuisines", "disliked_ingredients",
)
PREFERENCE_SCALAR_FIELDS = (
    "servings_default", "shopping_day", "expiry_warning_days",
    "expiry_alerts", "low_stock_alerts", "shopping_reminders", "recipe_suggestions",
)


def join_lines(lines: list[str]) -> str:
    return LINE_SEPARATOR.join(lines)


def split_lines(text: str | None) -> list[str]:
    """Split stored text into lines, dropping blank ones."""
    if not text:
        return []
    return [line for line in text.split(LINE_SEPARATOR) if line.strip()]


def recipe_to_dict(recipe: Recipe) -> dict:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "ingredients": split_lines(recipe.ingredients),
        "instructions": split_lines(recipe.instructions),
        "prep_time": recipe.prep_time,
        "cook_time": recipe.cook_time,
        "servings": recipe.servings,
        "calories": recipe.calories,
        "category": recipe.category,
        "cuisine": recipe.cuisine,
        "source": recipe.source,
        "is_saved": recipe.is_saved,
        "created_at": recipe.created_at,
        "updated_at": recipe.updated_at,
    }


def recipe_fields(data: dict) -> dict:
    """Encode list-valued recipe fields for storage, leaving the rest as-is."""
    fields = dict(data)
    for key in ("ingredients", "instructions"):
        if key in fields and fields[key] is not None:
            fields[key] = join_lines(fields[key])
    return fields


def encode_list(values: list[str]) -> str:
    return json.dumps(list(values))


def decode_list(raw: str | None) -> list[str]:
    """Decode a stored string list. Legacy comma-separated values are accepted."""
    if not raw:
        return []
    try:
        values = json.loads(raw)
    except ValueError:
        logger.warning(f"Preference list is not JSON, falling back to comma split: {raw!r}")
        return [v.strip() for v in raw.split(",") if v.strip()]
    if not isinstance(values, list):
        return []
    return [str(v) for v in values]


def threshold_to_percent(fraction: float) -> int:
    return int(round(fraction * 100))


def percent_to_threshold(percent: int | None) -> float:
    return (percent or 0) / 100


def preferences_to_dict(prefs: UserPreferences) -> dict:
    data = {
        "id": prefs.id,
        "user_id": prefs.user_id,
        "low_stock_threshold": percent_to_threshold(prefs.low_stock_threshold),
    }
    for key in PREFERENCE_LIST_FIELDS:
        data[key] = decode_list(getattr(prefs, key))
    for key in PREFERENCE_SCALAR_FIELDS:
        data[key] = getattr(prefs, key)
    return data


def preferences_fields(data: dict) -> dict:
    """Encode an API preferences payload into column values."""
    fields = {}
    for key in PREFERENCE_LIST_FIELDS:
        if key in data:
            fields[key] = encode_list(data[key])
    for key in PREFERENCE_SCALAR_FIELDS:
        if key in data:
            fields[key] = data[key]
    if "low_stock_threshold" in data:
        fields["low_stock_threshold"] = threshold_to_percent(data["low_stock_threshold"])
    return fields
