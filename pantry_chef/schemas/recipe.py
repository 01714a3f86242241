from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class RecipeCreate(BaseModel):
    name: str = Field(min_length=1)
    ingredients: list[str]
    instructions: list[str]
    prep_time: int = Field(ge=0)
    cook_time: int = Field(ge=0)
    servings: int = Field(ge=1)
    calories: int = Field(ge=0)
    category: str
    cuisine: str = "Unknown"
    source: str = "Manual"


class RecipeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    ingredients: list[str] | None = None
    instructions: list[str] | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    calories: int | None = Field(default=None, ge=0)
    category: str | None = None
    cuisine: str | None = None
    source: str | None = None


class RecipeResponse(BaseModel):
    id: UUID
    name: str
    ingredients: list[str]
    instructions: list[str]
    prep_time: int
    cook_time: int
    servings: int
    calories: int
    category: str
    cuisine: str
    source: str
    is_saved: bool
    created_at: datetime
    updated_at: datetime


class GenerateRecipeRequest(BaseModel):
    cuisine: str | None = None
    difficulty: str | None = None
    dietary: str | None = None
    max_prep_time: int | None = None


class ExtractRecipeRequest(BaseModel):
    url: str = Field(min_length=1)
    content_text: str | None = None


class AIRecipeResult(BaseModel):
    success: bool
    recipe: dict | None = None
    error: str | None = None
