"""
RecipeAI: Claude API integration for recipe generation and extraction.

Both operations ask for one strict JSON object and persist nothing; the
routers store the result.
"""

import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pantry_chef.config import Settings, get_settings
from pantry_chef.exceptions import AIServiceError, InvalidRecipeFormatError

logger = logging.getLogger(__name__)

RECIPE_JSON_SCHEMA = """\
Respond ONLY with valid JSON in this exact format (no markdown, no code blocks):
{
  "name": "Recipe Name",
  "description": "Brief description",
  "prepTime": 15,
  "cookTime": 30,
  "servings": 4,
  "difficulty": "Medium",
  "cuisine": "Italian",
  "category": "Dinner",
  "ingredients": ["2 cups flour", "1 tsp salt"],
  "instructions": ["Step 1", "Step 2"],
  "calories": 350
}"""


class GeneratedRecipe(BaseModel):
    """Recipe shape the model must answer with."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    prep_time: int = Field(alias="prepTime")
    cook_time: int = Field(alias="cookTime")
    servings: int
    difficulty: str | None = None
    cuisine: str | None = None
    category: str | None = None
    ingredients: list[str]
    instructions: list[str]
    calories: int


def _extract_json(text: str) -> dict:
    """Extract JSON from a Claude response, handling markdown fences."""
    text = text.strip()
    m = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if m:
        text = m.group(1).strip()
    return json.loads(text)


def parse_recipe_response(text: str | None) -> GeneratedRecipe:
    if not text or not text.strip():
        raise AIServiceError("No response from AI")
    try:
        return GeneratedRecipe.model_validate(_extract_json(text))
    except (ValueError, ValidationError) as e:
        logger.error(f"Failed to parse AI recipe response: {e}")
        raise InvalidRecipeFormatError() from e


def build_inventory_prompt(inventory: list[dict], preferences: dict | None = None) -> str:
    preferences = preferences or {}
    inventory_list = "\n".join(
        f"- {i.get('quantity', '')} {i.get('unit', '')} {i.get('name', '?')}"
        for i in inventory
    )

    constraint_lines = []
    if preferences.get("cuisine"):
        constraint_lines.append(f"Cuisine preference: {preferences['cuisine']}")
    if preferences.get("difficulty"):
        constraint_lines.append(f"Difficulty level: {preferences['difficulty']}")
    if preferences.get("dietary"):
        constraint_lines.append(f"Dietary restriction: {preferences['dietary']}")
    if preferences.get("max_prep_time"):
        constraint_lines.append(f"Maximum prep time: {preferences['max_prep_time']} minutes")

    return (
        "Generate a delicious recipe using these available ingredients:\n\n"
        f"{inventory_list}\n\n"
        f"{chr(10).join(constraint_lines)}\n\n"
        "Requirements:\n"
        "1. Use as many of the available ingredients as possible\n"
        "2. Be creative but practical\n"
        "3. Provide clear step-by-step instructions\n"
        "4. Include prep time, cook time, and servings\n"
        "5. Estimate calories per serving\n"
        "6. Specify difficulty level (Easy, Medium, or Hard)\n"
        "7. Assign an appropriate category (Breakfast, Lunch, Dinner, or Snack)"
    )


def build_extraction_prompt(url: str, content_text: str | None = None) -> str:
    return (
        f"Extract the recipe from this {'content' if content_text else 'URL'}:\n\n"
        f"{content_text or url}\n\n"
        "Extract and structure the recipe information:\n"
        "- Recipe name and description\n"
        "- Prep time and cook time (in minutes)\n"
        "- Number of servings\n"
        "- Difficulty level (Easy, Medium, or Hard)\n"
        "- Cuisine type\n"
        "- Category (Breakfast, Lunch, Dinner, or Snack)\n"
        "- Complete list of ingredients with quantities\n"
        "- Step-by-step instructions\n"
        "- Estimated calories per serving\n\n"
        "If information is missing, make reasonable estimates based on similar recipes."
    )


class RecipeAI:
    """Recipe generation and extraction powered by the Anthropic Claude API."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.model = settings.CLAUDE_MODEL
        self.api_key = settings.ANTHROPIC_API_KEY
        self.max_tokens = settings.AI_MAX_TOKENS
        self._client = None

    @property
    def client(self):
        if self._client is None and self.api_key:
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    async def _call_claude(self, system: str, user_message: str) -> str:
        """Make a call to the Claude API. Returns the text response."""
        if not self.client:
            raise AIServiceError("ANTHROPIC_API_KEY is not configured. Please add it to your .env file.")
        import anthropic
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIError as e:
            logger.error(f"Claude API call failed: {e}")
            raise AIServiceError("AI service request failed. Please try again.") from e
        if not response.content:
            return ""
        return response.content[0].text

    async def generate_recipe_from_inventory(
        self, inventory: list[dict], preferences: dict | None = None
    ) -> GeneratedRecipe:
        logger.info(f"Generating recipe from {len(inventory)} inventory items, preferences={preferences}")
        system = "You are a professional chef assistant. " + RECIPE_JSON_SCHEMA
        text = await self._call_claude(system, build_inventory_prompt(inventory, preferences))
        logger.debug(f"Raw AI response: {text}")
        recipe = parse_recipe_response(text)
        logger.info(f"Recipe generated: {recipe.name}")
        return recipe

    async def extract_recipe(self, url: str, content_text: str | None = None) -> GeneratedRecipe:
        logger.info(f"Extracting recipe from {url} (content supplied: {bool(content_text)})")
        system = "You are a recipe extraction expert. " + RECIPE_JSON_SCHEMA
        text = await self._call_claude(system, build_extraction_prompt(url, content_text))
        logger.debug(f"Raw AI response: {text}")
        recipe = parse_recipe_response(text)
        logger.info(f"Recipe extracted: {recipe.name}")
        return recipe
