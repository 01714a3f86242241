"""
In-memory filtering and sorting for inventory and recipe lists.
"""

import math
from datetime import datetime, timezone
from typing import Any, Iterable

SECONDS_PER_DAY = 60 * 60 * 24

EXPIRING_WITHIN_DAYS = 7
URGENT_WITHIN_DAYS = 3
LOW_STOCK_MAX_QUANTITY = 5

INVENTORY_FILTERS = ("all", "expiring", "lowstock", "outofstock")
RECIPE_SORTS = ("newest", "oldest", "name", "quickest", "calories")
AI_SOURCE = "AI Generated"


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def days_until_expiry(expiry: datetime, now: datetime | None = None) -> int:
    now = _aware(now or datetime.now(timezone.utc))
    seconds = (_aware(expiry) - now).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def expiry_status(expiry: datetime, now: datetime | None = None) -> str:
    days = days_until_expiry(expiry, now)
    if days < 0:
        return "expired"
    if days <= URGENT_WITHIN_DAYS:
        return "urgent"
    if days <= EXPIRING_WITHIN_DAYS:
        return "soon"
    return "fresh"


def is_expiring(expiry: datetime, now: datetime | None = None) -> bool:
    days = days_until_expiry(expiry, now)
    return 0 <= days <= EXPIRING_WITHIN_DAYS


def is_low_stock(quantity) -> bool:
    return quantity is not None and 0 < quantity <= LOW_STOCK_MAX_QUANTITY


def is_out_of_stock(quantity) -> bool:
    return quantity == 0


def _field(item: Any, key: str):
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


def _sort_value(value):
    # None sorts first; datetimes compare as aware values
    if value is None:
        return (0, 0)
    if isinstance(value, datetime):
        return (1, _aware(value))
    return (1, value)


def filter_inventory(
    items: Iterable,
    active_filter: str = "all",
    search: str | None = None,
    sort_by: str | None = None,
    sort_dir: str = "asc",
    now: datetime | None = None,
) -> list:
    """Apply the inventory filter, then the name search, then the sort."""
    filtered = list(items)

    if active_filter == "expiring":
        filtered = [i for i in filtered if is_expiring(_field(i, "expiry_date"), now)]
    elif active_filter == "lowstock":
        filtered = [i for i in filtered if is_low_stock(_field(i, "quantity"))]
    elif active_filter == "outofstock":
        filtered = [i for i in filtered if is_out_of_stock(_field(i, "quantity"))]

    if search and search.strip():
        query = search.lower()
        filtered = [i for i in filtered if query in (_field(i, "name") or "").lower()]

    if sort_by:
        filtered.sort(key=lambda i: _sort_value(_field(i, sort_by)), reverse=sort_dir == "desc")

    return filtered


def next_sort(current: tuple[str, str] | None, key: str) -> tuple[str, str]:
    """Sorting the same key twice flips the direction; a new key starts ascending."""
    if current and current[0] == key:
        return key, "desc" if current[1] == "asc" else "asc"
    return key, "asc"


def filter_recipes(
    recipes: Iterable[dict],
    search: str | None = None,
    active_filter: str = "all",
    sort_by: str = "newest",
) -> list[dict]:
    """Filter decoded recipes (lists for ingredients) by search text and category."""
    query = (search or "").lower()

    def matches(recipe: dict) -> bool:
        matches_search = (
            query in recipe["name"].lower()
            or query in " ".join(recipe["ingredients"]).lower()
        )
        matches_category = (
            active_filter == "all"
            or (active_filter == "saved" and recipe["is_saved"])
            or (active_filter == "ai" and recipe["source"] == AI_SOURCE)
            or recipe["category"] == active_filter
        )
        return matches_search and matches_category

    result = [r for r in recipes if matches(r)]

    if sort_by == "newest":
        result.sort(key=lambda r: _aware(r["created_at"]), reverse=True)
    elif sort_by == "oldest":
        result.sort(key=lambda r: _aware(r["created_at"]))
    elif sort_by == "name":
        result.sort(key=lambda r: r["name"].lower())
    elif sort_by == "quickest":
        result.sort(key=lambda r: r["prep_time"] or 0)
    elif sort_by == "calories":
        result.sort(key=lambda r: r["calories"] or 0)

    return result
