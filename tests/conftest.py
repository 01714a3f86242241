"""Shared fixtures: a throwaway SQLite database and an app wired to it."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from pantry_chef.config import Settings
from pantry_chef.database import Database
from pantry_chef.main import create_app
from pantry_chef.services.recipe_ai import RecipeAI


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'pantry.db'}",
        ANTHROPIC_API_KEY="",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as s:
        yield s


@pytest.fixture
def recipe_ai(settings):
    return RecipeAI(settings)


@pytest.fixture
def client(settings, database, recipe_ai):
    app = create_app(settings, database=database, recipe_ai=recipe_ai)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def claude_reply():
    """Build a fake Anthropic client whose messages.create returns the given text."""
    def _reply(text: str) -> MagicMock:
        fake = MagicMock()
        fake.messages.create.return_value = MagicMock(content=[MagicMock(text=text)])
        return fake
    return _reply


@pytest.fixture
def generated_recipe():
    return {
        "name": "Tomato Pasta",
        "description": "Quick weeknight pasta",
        "prepTime": 10,
        "cookTime": 20,
        "servings": 2,
        "difficulty": "Easy",
        "cuisine": "Italian",
        "category": "Dinner",
        "ingredients": ["200 g pasta", "2 tomatoes", "1 tbsp olive oil"],
        "instructions": ["Boil pasta", "Make sauce", "Combine"],
        "calories": 450,
    }


@pytest.fixture
def generated_recipe_json(generated_recipe):
    return json.dumps(generated_recipe)
