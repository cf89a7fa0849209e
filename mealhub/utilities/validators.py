"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional, Union

from mealhub.utilities.constants import DAYS, MEAL_TYPES


class MealSlotInput(BaseModel):
    """Schema for assigning a recipe to a meal slot.

    Presence of every field is checked by the slot store itself, so that a
    missing field yields "All fields are required" rather than a schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    day: Optional[str] = None
    meal_type: Optional[str] = Field(None, alias='mealType')
    recipe_id: Optional[str] = Field(None, alias='recipeId')
    planned_for: Optional[str] = Field(None, alias='plannedFor')

    @field_validator('day')
    @classmethod
    def validate_day(cls, v):
        if v and v not in DAYS:
            raise ValueError(f"day must be one of {', '.join(DAYS)}")
        return v

    @field_validator('meal_type')
    @classmethod
    def validate_meal_type(cls, v):
        if v and v not in MEAL_TYPES:
            raise ValueError(f"mealType must be one of {', '.join(MEAL_TYPES)}")
        return v


class Nutrition(BaseModel):
    calories: Union[int, float] = 0
    protein: Union[str, int, float] = ""
    carbs: Union[str, int, float] = ""
    fat: Union[str, int, float] = ""


class GeneratedRecipe(BaseModel):
    """Shape every AI-generated recipe must match before it is returned or saved."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    servings: int = Field(1, ge=1, le=100)
    prep_time: Union[int, str] = Field(0, alias='prepTime')
    cook_time: Union[int, str] = Field(0, alias='cookTime')
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    difficulty: Literal['easy', 'medium', 'hard'] = 'medium'
    nutrition: Optional[Nutrition] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('ingredients', 'instructions')
    @classmethod
    def drop_blank_lines(cls, v):
        """Filter out empty lines."""
        lines = [line.strip() for line in v if line and line.strip()]
        if not lines:
            raise ValueError('must contain at least one non-empty line')
        return lines

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return [tag.strip() for tag in v if tag and tag.strip()]

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class RecipeUpdateInput(BaseModel):
    """Schema for partial recipe updates (PUT /api/recipes/{id})."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    ingredients: Optional[Union[str, List[str]]] = None
    instructions: Optional[Union[str, List[str]]] = None
    image_url: Optional[str] = Field(None, alias='imageUrl')
    tags: Optional[List[str]] = None
    difficulty: Optional[Literal['easy', 'medium', 'hard']] = None
    servings: Optional[int] = Field(None, ge=1, le=100)
    prep_time: Optional[Union[int, str]] = Field(None, alias='prepTime')
    cook_time: Optional[Union[int, str]] = Field(None, alias='cookTime')
    nutrition: Optional[Nutrition] = None

    def changes(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ProfileUpdateInput(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None

    @field_validator('name', 'email')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class BookmarkInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recipe_id: Optional[str] = Field(None, alias='recipeId')
