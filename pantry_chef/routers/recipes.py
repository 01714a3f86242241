import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pantry_chef.database import get_db
from pantry_chef.exceptions import NotFoundError, PantryChefError
from pantry_chef.models.inventory import InventoryItem
from pantry_chef.models.recipe import Recipe
from pantry_chef.schemas.recipe import (
    RecipeCreate, RecipeUpdate, RecipeResponse,
    GenerateRecipeRequest, ExtractRecipeRequest, AIRecipeResult,
)
from pantry_chef.schemas.shopping import ReconcileResponse
from pantry_chef.services.filters import AI_SOURCE, filter_recipes
from pantry_chef.services.recipe_ai import GeneratedRecipe, RecipeAI
from pantry_chef.services.recipe_codec import recipe_fields, recipe_to_dict, split_lines
from pantry_chef.services.shopping import add_recipe_to_shopping_list

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_CATEGORY = "Main Course"
NO_INVENTORY_ERROR = "No inventory items available. Please add items to your inventory first."


def get_recipe_ai(request: Request) -> RecipeAI:
    return request.app.state.recipe_ai


def _get_recipe(db: Session, recipe_id: UUID) -> Recipe:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


def _save_generated(db: Session, generated: GeneratedRecipe, source: str) -> Recipe:
    recipe = Recipe(**recipe_fields({
        "name": generated.name,
        "ingredients": generated.ingredients,
        "instructions": generated.instructions,
        "prep_time": generated.prep_time,
        "cook_time": generated.cook_time,
        "servings": generated.servings,
        "calories": generated.calories,
        "category": generated.category or DEFAULT_CATEGORY,
        "cuisine": generated.cuisine or "",
        "source": source,
        "is_saved": False,
    }))
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    logger.info(f"Saved recipe '{recipe.name}' ({recipe.id}) from {source}")
    return recipe


@router.get("/", response_model=list[RecipeResponse])
def list_recipes(
    search: str | None = None,
    filter: str = "all",
    sort_by: str = Query("newest", pattern="^(newest|oldest|name|quickest|calories)$"),
    db: Session = Depends(get_db),
):
    recipes = [recipe_to_dict(r) for r in db.query(Recipe).all()]
    return filter_recipes(recipes, search=search, active_filter=filter, sort_by=sort_by)


@router.post("/", response_model=RecipeResponse, status_code=201)
def create_recipe(body: RecipeCreate, db: Session = Depends(get_db)):
    recipe = Recipe(**recipe_fields(body.model_dump()), is_saved=False)
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe_to_dict(recipe)


@router.post("/generate", response_model=AIRecipeResult)
async def generate_recipe(
    body: GenerateRecipeRequest,
    db: Session = Depends(get_db),
    ai: RecipeAI = Depends(get_recipe_ai),
):
    try:
        inventory = db.query(InventoryItem).all()
        if not inventory:
            return {"success": False, "error": NO_INVENTORY_ERROR}
        inventory_list = [
            {"name": i.name, "quantity": i.quantity, "unit": i.unit}
            for i in inventory
        ]
        generated = await ai.generate_recipe_from_inventory(
            inventory_list, body.model_dump(exclude_none=True)
        )
        recipe = _save_generated(db, generated, AI_SOURCE)
    except PantryChefError as e:
        logger.error(f"Failed to generate recipe: {e}")
        return {"success": False, "error": str(e)}
    except SQLAlchemyError as e:
        logger.error(f"Failed to save generated recipe: {e}")
        return {"success": False, "error": "Failed to generate recipe. Please try again."}
    return {"success": True, "recipe": {"id": str(recipe.id), "name": recipe.name}}


@router.post("/extract", response_model=AIRecipeResult)
async def extract_recipe(
    body: ExtractRecipeRequest,
    db: Session = Depends(get_db),
    ai: RecipeAI = Depends(get_recipe_ai),
):
    try:
        extracted = await ai.extract_recipe(body.url, body.content_text)
        recipe = _save_generated(db, extracted, body.url)
    except PantryChefError as e:
        logger.error(f"Failed to extract recipe: {e}")
        return {"success": False, "error": str(e)}
    except SQLAlchemyError as e:
        logger.error(f"Failed to save extracted recipe: {e}")
        return {"success": False, "error": "Failed to extract recipe. Please try again."}
    return {"success": True, "recipe": {"id": str(recipe.id), "name": recipe.name}}


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    try:
        parsed_id = UUID(recipe_id)
    except ValueError:
        return JSONResponse(status_code=404, content={"error": "Recipe not found"})
    try:
        recipe = db.query(Recipe).filter(Recipe.id == parsed_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching recipe {recipe_id}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch recipe"})
    if not recipe:
        return JSONResponse(status_code=404, content={"error": "Recipe not found"})
    return recipe_to_dict(recipe)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(recipe_id: UUID, body: RecipeUpdate, db: Session = Depends(get_db)):
    recipe = _get_recipe(db, recipe_id)
    data = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    for k, v in recipe_fields(data).items():
        setattr(recipe, k, v)
    db.commit()
    return recipe_to_dict(_get_recipe(db, recipe_id))


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: UUID, db: Session = Depends(get_db)):
    recipe = _get_recipe(db, recipe_id)
    db.delete(recipe)
    db.commit()


@router.post("/{recipe_id}/toggle-save", response_model=RecipeResponse)
def toggle_save(recipe_id: UUID, db: Session = Depends(get_db)):
    # Read-modify-write, last write wins
    recipe = _get_recipe(db, recipe_id)
    recipe.is_saved = not recipe.is_saved
    db.commit()
    db.refresh(recipe)
    return recipe_to_dict(recipe)


@router.post("/{recipe_id}/shopping-list", response_model=ReconcileResponse)
def add_to_shopping_list(recipe_id: UUID, db: Session = Depends(get_db)):
    recipe = _get_recipe(db, recipe_id)
    try:
        result = add_recipe_to_shopping_list(
            db, recipe.id, recipe.name, split_lines(recipe.ingredients)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to add recipe {recipe_id} to shopping list: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to add ingredients to shopping list"},
        )
    return {
        "success": True,
        "message": result.message,
        "added_count": result.added_count,
        "updated_count": result.updated_count,
    }
