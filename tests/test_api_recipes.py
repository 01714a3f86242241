"""Recipe endpoint tests, including AI generation with a mocked Claude client."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

BASE = "/api/v1/recipes/"


@pytest.fixture
def make_recipe(client):
    def _make(name="Tomato Soup", ingredients=("2 tomatoes", "1 onion"), **overrides):
        body = {
            "name": name,
            "ingredients": list(ingredients),
            "instructions": ["Chop", "Simmer"],
            "prep_time": 10,
            "cook_time": 30,
            "servings": 4,
            "calories": 200,
            "category": "Lunch",
        }
        body.update(overrides)
        resp = client.post(BASE, json=body)
        assert resp.status_code == 201
        return resp.json()
    return _make


def test_create_round_trips_lists(client, make_recipe):
    recipe = make_recipe()
    assert recipe["ingredients"] == ["2 tomatoes", "1 onion"]
    assert recipe["instructions"] == ["Chop", "Simmer"]
    assert recipe["source"] == "Manual"
    assert recipe["cuisine"] == "Unknown"
    assert recipe["is_saved"] is False


def test_get_missing(client):
    resp = client.get(f"{BASE}{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Recipe not found"}


def test_update_and_delete(client, make_recipe):
    recipe = make_recipe()
    resp = client.patch(f"{BASE}{recipe['id']}", json={"ingredients": ["3 carrots"]})
    assert resp.json()["ingredients"] == ["3 carrots"]
    assert resp.json()["instructions"] == ["Chop", "Simmer"]

    assert client.delete(f"{BASE}{recipe['id']}").status_code == 204
    assert client.get(f"{BASE}{recipe['id']}").status_code == 404


def test_toggle_save(client, make_recipe):
    recipe = make_recipe()
    assert client.post(f"{BASE}{recipe['id']}/toggle-save").json()["is_saved"] is True
    assert client.post(f"{BASE}{recipe['id']}/toggle-save").json()["is_saved"] is False


class TestList:
    @pytest.fixture(autouse=True)
    def seed(self, client, make_recipe):
        make_recipe("Pancakes", ["2 eggs", "1 cup flour"], category="Breakfast", prep_time=5, calories=350)
        make_recipe("Salad", ["1 cucumber"], category="Lunch", prep_time=15, calories=120)
        saved = make_recipe("Curry", ["1 onion"], category="Dinner", prep_time=25, calories=600, source="AI Generated")
        client.post(f"{BASE}{saved['id']}/toggle-save")

    def _names(self, client, **params):
        return [r["name"] for r in client.get(BASE, params=params).json()]

    def test_search_matches_ingredients(self, client):
        assert self._names(client, search="EGGS") == ["Pancakes"]

    def test_saved_and_ai_filters(self, client):
        assert self._names(client, filter="saved") == ["Curry"]
        assert self._names(client, filter="ai") == ["Curry"]

    def test_category_filter(self, client):
        assert self._names(client, filter="Lunch") == ["Salad"]

    def test_sorts(self, client):
        assert self._names(client, sort_by="name") == ["Curry", "Pancakes", "Salad"]
        assert self._names(client, sort_by="quickest") == ["Pancakes", "Salad", "Curry"]
        assert self._names(client, sort_by="calories") == ["Salad", "Pancakes", "Curry"]


def test_add_to_shopping_list_twice(client, make_recipe):
    recipe = make_recipe()
    url = f"{BASE}{recipe['id']}/shopping-list"

    first = client.post(url).json()
    assert first["success"] is True
    assert (first["added_count"], first["updated_count"]) == (2, 0)

    second = client.post(url).json()
    assert (second["added_count"], second["updated_count"]) == (0, 2)

    items = {i["name"]: i for i in client.get("/api/v1/shopping-list/").json()["items"]}
    assert items["tomatoes"]["quantity"] == 4
    assert items["onion"]["quantity"] == 2


def test_add_missing_recipe_to_shopping_list(client):
    resp = client.post(f"{BASE}{uuid.uuid4()}/shopping-list")
    assert resp.status_code == 404


class TestGenerate:
    @pytest.fixture
    def stocked(self, client):
        resp = client.post("/api/v1/inventory/", json={
            "name": "pasta", "quantity": 1, "unit": "kg", "category": "Grains",
            "expiry_date": (datetime.now(timezone.utc) + timedelta(days=60)).isoformat(),
        })
        assert resp.status_code == 201

    def test_empty_inventory(self, client):
        resp = client.post(f"{BASE}generate", json={})
        assert resp.json()["success"] is False
        assert "No inventory items" in resp.json()["error"]

    def test_generates_and_saves(self, client, recipe_ai, claude_reply, generated_recipe_json, stocked):
        recipe_ai._client = claude_reply(generated_recipe_json)
        resp = client.post(f"{BASE}generate", json={"cuisine": "Italian"})
        body = resp.json()
        assert body["success"] is True
        assert body["recipe"]["name"] == "Tomato Pasta"

        saved = client.get(f"{BASE}{body['recipe']['id']}").json()
        assert saved["source"] == "AI Generated"
        assert saved["category"] == "Dinner"
        assert saved["is_saved"] is False
        assert saved["ingredients"][0] == "200 g pasta"

    def test_malformed_reply(self, client, recipe_ai, claude_reply, stocked):
        recipe_ai._client = claude_reply("Sorry, I can't do that")
        body = client.post(f"{BASE}generate", json={}).json()
        assert body == {"success": False, "recipe": None, "error": "Invalid recipe format from AI. Please try again."}
        assert client.get(BASE).json() == []

    def test_missing_api_key(self, client, stocked):
        body = client.post(f"{BASE}generate", json={}).json()
        assert body["success"] is False
        assert "ANTHROPIC_API_KEY" in body["error"]


def test_extract_uses_url_as_source(client, recipe_ai, claude_reply, generated_recipe_json):
    recipe_ai._client = claude_reply(generated_recipe_json)
    body = client.post(f"{BASE}extract", json={"url": "https://example.com/pasta"}).json()
    assert body["success"] is True
    saved = client.get(f"{BASE}{body['recipe']['id']}").json()
    assert saved["source"] == "https://example.com/pasta"


def test_get_malformed_id_is_not_found(client):
    resp = client.get(f"{BASE}not-a-uuid")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Recipe not found"}


def test_update_ignores_explicit_nulls(client, make_recipe):
    recipe = make_recipe()
    resp = client.patch(f"{BASE}{recipe['id']}", json={"name": None, "ingredients": None, "servings": 6})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Tomato Soup"
    assert resp.json()["ingredients"] == ["2 tomatoes", "1 onion"]
    assert resp.json()["servings"] == 6
