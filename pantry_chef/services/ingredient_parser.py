"""
Ingredient Parser

Turns a free-text ingredient line such as "2 cups flour" into a structured
quantity / unit / name / category tuple. Single pass, no unit conversion.
"""

import re
from dataclasses import dataclass, asdict

DEFAULT_QUANTITY = 1.0
DEFAULT_UNIT = "whole"
DEFAULT_CATEGORY = "Other"

# Tested in order, first match wins. Plurals precede singulars so "cups"
# is not cut down to "cup".
UNITS = [
    "cups", "cup",
    "tablespoons", "tablespoon", "tbsp",
    "teaspoons", "teaspoon", "tsp",
    "pounds", "pound", "lbs", "lb",
    "ounces", "ounce", "oz",
    "kilograms", "kilogram", "kg",
    "grams", "gram", "g",
    "milliliters", "milliliter", "ml",
    "liters", "liter", "l",
    "pieces", "piece",
    "cloves", "clove",
    "cans", "can",
    "slices", "slice",
    "pinch", "dash", "bunch",
]

_QUANTITY_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*")
_UNIT_RES = [re.compile(rf"^{re.escape(unit)}\b\.?", re.IGNORECASE) for unit in UNITS]

# Category keyword groups, tested in this order.
CATEGORY_PATTERNS = [
    ("Meat & Seafood", re.compile(
        r"\b(chicken|beef|pork|lamb|turkey|bacon|ham|sausage|steak|veal|duck|mince"
        r"|fish|salmon|tuna|cod|tilapia|shrimp|prawn|crab|lobster|scallop|mussel|clam|anchov)",
        re.IGNORECASE,
    )),
    ("Dairy & Eggs", re.compile(
        r"\b(milk|cheese|butter\b|cream|yogh?urt|eggs?\b|parmesan|mozzarella|cheddar|ricotta|feta|ghee)",
        re.IGNORECASE,
    )),
    ("Vegetables", re.compile(
        r"\b(tomato|onion|garlic|carrot|potato|celery|lettuce|spinach|kale|broccoli|cauliflower"
        r"|cabbage|cucumber|zucchini|eggplant|mushroom|bell pepper|jalape|peas?\b|beans?\b|corn\b"
        r"|squash|pumpkin|asparagus|leek|shallot|scallion|radish|beet)",
        re.IGNORECASE,
    )),
    ("Fruits", re.compile(
        r"\b(apple|banana|orange|lemon|lime|\w*berr(y|ies)|grape|mango|pineapple|peach|pear"
        r"|cherr(y|ies)|avocado|melon|watermelon|kiwi|coconut|plum|apricot)",
        re.IGNORECASE,
    )),
    ("Grains & Bakery", re.compile(
        r"\b(flour|bread|rice|pasta|spaghetti|macaroni|noodle|oats?\b|oatmeal|quinoa|barley|tortilla"
        r"|buns?\b|rolls?\b|cracker|cereal|couscous|bagel|croissant|cornmeal)",
        re.IGNORECASE,
    )),
    ("Condiments & Spices", re.compile(
        r"\b(salt|pepper|sugar|honey|vinegar|oil|sauce|ketchup|mustard|mayo|soy|spice|cumin|paprika"
        r"|cinnamon|oregano|basil|thyme|rosemary|parsley|cilantro|chili|nutmeg|vanilla|syrup"
        r"|baking powder|baking soda|yeast|stock|broth)",
        re.IGNORECASE,
    )),
]


@dataclass
class ParsedIngredient:
    quantity: float
    unit: str
    name: str
    category: str

    def to_dict(self) -> dict:
        return asdict(self)


def guess_category(name: str) -> str:
    """Return the first keyword group matching ``name``, or "Other"."""
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(name):
            return category
    return DEFAULT_CATEGORY


def _split_unit(rest: str) -> tuple[str, str]:
    # Unit is kept as written ("Cups" stays "Cups"), minus a trailing period
    for pattern in _UNIT_RES:
        m = pattern.match(rest)
        if m:
            return m.group(0).rstrip("."), rest[m.end():].strip()
    return DEFAULT_UNIT, rest


def parse_ingredient(text: str) -> ParsedIngredient:
    """Parse an ingredient line like '2 cups flour'.

    A missing leading number means quantity 1 and unit "whole"; a number
    followed by an unknown word keeps the number and uses unit "whole".
    """
    text = (text or "").strip()

    m = _QUANTITY_RE.match(text)
    if not m:
        return ParsedIngredient(DEFAULT_QUANTITY, DEFAULT_UNIT, text, guess_category(text))

    quantity = float(m.group(1))
    unit, name = _split_unit(text[m.end():])
    return ParsedIngredient(quantity, unit, name, guess_category(name))
