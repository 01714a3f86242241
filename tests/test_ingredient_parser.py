"""Tests for ingredient line parsing and category guessing."""

import pytest

from pantry_chef.services.ingredient_parser import (
    ParsedIngredient,
    guess_category,
    parse_ingredient,
)


class TestParseIngredient:
    def test_quantity_unit_name(self):
        assert parse_ingredient("2 cups flour") == ParsedIngredient(
            quantity=2, unit="cups", name="flour", category="Grains & Bakery",
        )

    def test_no_leading_number(self):
        assert parse_ingredient("salt to taste") == ParsedIngredient(
            quantity=1, unit="whole", name="salt to taste", category="Condiments & Spices",
        )

    def test_decimal_quantity(self):
        parsed = parse_ingredient("1.5 tbsp olive oil")
        assert parsed.quantity == 1.5
        assert parsed.unit == "tbsp"
        assert parsed.name == "olive oil"

    def test_number_without_unit_defaults_to_whole(self):
        parsed = parse_ingredient("2 tomatoes")
        assert parsed.quantity == 2
        assert parsed.unit == "whole"
        assert parsed.name == "tomatoes"
        assert parsed.category == "Vegetables"

    def test_unit_matched_case_insensitively_and_kept_as_written(self):
        parsed = parse_ingredient("2 CUPS milk")
        assert parsed.unit == "CUPS"
        assert parse_ingredient("2 Cups flour").unit == "Cups"
        assert parsed.name == "milk"
        assert parsed.category == "Dairy & Eggs"

    def test_unit_needs_word_boundary(self):
        # "L" must not swallow the start of "Lemon"
        parsed = parse_ingredient("1 Lemon")
        assert parsed.unit == "whole"
        assert parsed.name == "Lemon"
        assert parsed.category == "Fruits"

    def test_plural_unit_wins_over_singular(self):
        assert parse_ingredient("3 cloves garlic").unit == "cloves"
        assert parse_ingredient("1 clove garlic").unit == "clove"

    def test_unit_with_trailing_period(self):
        parsed = parse_ingredient("1 tbsp. sugar")
        assert parsed.unit == "tbsp"
        assert parsed.name == "sugar"

    def test_metric_units(self):
        assert parse_ingredient("500 g ground beef").unit == "g"
        assert parse_ingredient("250 ml cream").unit == "ml"
        assert parse_ingredient("1 L stock").unit == "L"
        assert parse_ingredient("1 kg potatoes").unit == "kg"

    def test_surrounding_whitespace_is_trimmed(self):
        parsed = parse_ingredient("   2 cans chickpeas  ")
        assert parsed.quantity == 2
        assert parsed.unit == "cans"
        assert parsed.name == "chickpeas"

    def test_empty_input(self):
        assert parse_ingredient("") == ParsedIngredient(1, "whole", "", "Other")
        assert parse_ingredient(None) == ParsedIngredient(1, "whole", "", "Other")

    def test_to_dict(self):
        assert parse_ingredient("2 cups flour").to_dict() == {
            "quantity": 2.0, "unit": "cups", "name": "flour", "category": "Grains & Bakery",
        }


class TestGuessCategory:
    @pytest.mark.parametrize("name,expected", [
        ("chicken breast", "Meat & Seafood"),
        ("salmon fillet", "Meat & Seafood"),
        ("cheddar cheese", "Dairy & Eggs"),
        ("large eggs", "Dairy & Eggs"),
        ("red onion", "Vegetables"),
        ("eggplant", "Vegetables"),
        ("butternut squash", "Vegetables"),
        ("blueberries", "Fruits"),
        ("basmati rice", "Grains & Bakery"),
        ("black pepper", "Condiments & Spices"),
    ])
    def test_keyword_groups(self, name, expected):
        assert guess_category(name) == expected

    def test_unmatched_is_other(self):
        assert guess_category("unicorn tears") == "Other"

    def test_first_group_wins(self):
        # Matches both meat and condiments; meat is tested first
        assert guess_category("chicken stock") == "Meat & Seafood"
