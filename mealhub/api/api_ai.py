import re
import json
import logging
from json import JSONDecodeError
from typing import Any, Optional

from fastapi import APIRouter, Depends
from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ConfigDict, Field, ValidationError as SchemaError, field_validator

from mealhub.api.dependencies import current_user, get_ai_client
from mealhub.domain.User import User
from mealhub.domain.errors import AIGenerationError
from mealhub.utilities.config import AI_MODEL, OPENAI_API_KEY
from mealhub.utilities.constants import PROMPT_TEMPLATE, RECIPE_JSON_FORMAT
from mealhub.utilities.validators import GeneratedRecipe

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client() -> Optional[OpenAI]:
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not OPENAI_API_KEY:
        return None
    return OpenAI(api_key=OPENAI_API_KEY)


class GenerationRequest(BaseModel):
    """What the user has on hand plus optional constraints."""
    model_config = ConfigDict(populate_by_name=True)

    ingredients: str = Field(..., min_length=1)
    cuisine: Optional[str] = None
    dietary_restrictions: Optional[str] = Field(None, alias='dietaryRestrictions')
    cooking_time: Optional[str] = Field(None, alias='cookingTime')
    difficulty: Optional[str] = None

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        if not v.strip():
            raise ValueError('Ingredients are required')
        return v.strip()


def build_prompt(request: GenerationRequest) -> str:
    cuisine = request.cuisine or 'any'
    restrictions = request.dietary_restrictions or 'none'
    cooking_time = request.cooking_time or '30-60 minutes'
    difficulty = request.difficulty or 'medium'
    return (
        f"Generate a detailed recipe using these ingredients: {request.ingredients}"
        f" in {cuisine} cuisine style"
        f" with dietary restrictions: {restrictions}"
        f" that takes about {cooking_time} to prepare"
        f" with {difficulty} difficulty level."
        + PROMPT_TEMPLATE + RECIPE_JSON_FORMAT
    )


# === Recipe Generation ===
def generate_recipe(request: GenerationRequest, client: Optional[Any] = None) -> GeneratedRecipe:
    """Ask the model for a recipe and validate it against GeneratedRecipe."""
    client = _get_openai_client() if client is None else client
    if client is None:
        raise AIGenerationError("AI service is not configured")

    try:
        response = client.responses.create(model=AI_MODEL, input=build_prompt(request))
    except OpenAIError as e:
        logger.error("AI call failed: %s", e)
        raise AIGenerationError(f"Failed to generate recipe: {e}") from e

    text = (response.output_text or "").strip()
    if not text:
        logger.warning("AI returned empty recipe data")
        raise AIGenerationError("Failed to parse AI response")
    return parse_recipe(text)


def parse_recipe(text: str) -> GeneratedRecipe:
    """Extract the first JSON object from model output and validate its shape."""
    parsed = None
    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        candidate = _first_json_object(_drop_trailing_commas(_unfence(text)))
        if candidate:
            try:
                parsed = json.loads(candidate)
            except JSONDecodeError:
                logger.exception("Failed to decode extracted JSON from AI output")
    if not isinstance(parsed, dict):
        raise AIGenerationError("Failed to parse AI response")

    try:
        return GeneratedRecipe.model_validate(parsed)
    except SchemaError as e:
        logger.warning("AI recipe did not match the expected shape: %s", e)
        raise AIGenerationError("AI response did not match the recipe format") from e


# === Text Cleaning Helpers ===
_FENCED_BLOCK = re.compile(r"```[a-zA-Z]*\s*(.*?)```", re.S)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _unfence(text: str) -> str:
    """Body of the first markdown code block, or the text itself when there is none."""
    block = _FENCED_BLOCK.search(text)
    return (block.group(1) if block else text).strip()


def _drop_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def _first_json_object(text: str) -> Optional[str]:
    """Slice out the first top-level ``{...}`` block, ignoring braces inside strings."""
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = escaped = False
    for pos in range(start, len(text)):
        ch = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:pos + 1]
    return None


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/api/ai/generate-recipe")
def generate_recipe_ai(payload: GenerationRequest,
                       user: User = Depends(current_user),
                       client: Any = Depends(get_ai_client)):
    logger.info("Generating recipe for %s with ingredients=%r", user.id, payload.ingredients)
    recipe = generate_recipe(payload, client=client)
    return {"success": True, "recipe": recipe.to_document()}
