import logging

from fastapi import APIRouter, Depends, Form, Query

from mealhub.api.dependencies import (
    current_user, get_bookmarks, get_likes, get_recipes, get_users,
)
from mealhub.domain.Recipe import Recipe
from mealhub.domain.User import User
from mealhub.domain.errors import ValidationError
from mealhub.infra.Bookmark_Repository import BookmarkRepository
from mealhub.infra.Like_Repository import LikeRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository
from mealhub.utilities.validators import GeneratedRecipe, RecipeUpdateInput

router = APIRouter(prefix="/api/recipes")
logger = logging.getLogger(__name__)


def _positive_int(value: str, field: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number")
    if number <= 0:
        raise ValidationError(f"{field} must be positive")
    return number


def with_author_name(recipe: Recipe, users: UserRepository) -> dict:
    """Recipe dict with the author's current display name."""
    data = recipe.to_dict()
    author = users.get(recipe.author_id) if recipe.author_id else None
    data['authorName'] = (author.name if author else None) or recipe.author_name or 'Unknown User'
    return data


# === Listings (declared before /{recipe_id}) ===
@router.get("/list")
def list_recipes(limit: int = Query(20, ge=1, le=100), offset: int = Query(0, ge=0),
                 recipes: RecipeRepository = Depends(get_recipes)):
    found = recipes.list_recent(limit=limit, offset=offset)
    return {"success": True, "recipes": [r.to_dict() for r in found], "total": len(found)}


@router.get("/popular")
def popular_recipes(limit: int = Query(10, ge=1, le=100), recipes: RecipeRepository = Depends(get_recipes)):
    return {"success": True, "recipes": [r.to_dict() for r in recipes.list_popular(limit)]}


@router.get("/recommendations")
def recommended_recipes(limit: int = Query(10, ge=1, le=100), recipes: RecipeRepository = Depends(get_recipes)):
    # Same ranking as /popular until there is per-user signal to personalise on
    return {"success": True, "recipes": [r.to_dict() for r in recipes.list_popular(limit)]}


# === Create ===
@router.post("/upload", status_code=201)
def upload_recipe(
    title: str = Form(""),
    description: str = Form(""),
    ingredients: str = Form(""),  # one ingredient per line
    instructions: str = Form(""),  # one step per line
    prepTime: str = Form(""),
    cookTime: str = Form(""),
    servings: str = Form(""),
    imageUrl: str = Form(""),
    user: User = Depends(current_user),
    recipes: RecipeRepository = Depends(get_recipes),
):
    if not all(v.strip() for v in (title, description, ingredients, instructions, prepTime, cookTime, servings)):
        raise ValidationError("All fields are required")
    recipe = recipes.create({
        'title': title.strip(),
        'description': description.strip(),
        'ingredients': ingredients,
        'instructions': instructions,
        'prepTime': _positive_int(prepTime, 'prepTime'),
        'cookTime': _positive_int(cookTime, 'cookTime'),
        'servings': _positive_int(servings, 'servings'),
        'imageUrl': imageUrl.strip() or None,
        'tags': [],
    }, user)
    return {"success": True, "recipeId": recipe.id, "message": "Recipe uploaded successfully"}


@router.post("/save-generated", status_code=201)
def save_generated(payload: GeneratedRecipe,
                   user: User = Depends(current_user),
                   recipes: RecipeRepository = Depends(get_recipes)):
    recipe = recipes.create(payload.to_document(), user, ai_generated=True)
    return {"success": True, "recipeId": recipe.id, "message": "Recipe saved successfully"}


# === Single recipe ===
@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, recipes: RecipeRepository = Depends(get_recipes),
               users: UserRepository = Depends(get_users)):
    return {"success": True, "recipe": with_author_name(recipes.get_by_id(recipe_id), users)}


@router.put("/{recipe_id}")
def update_recipe(recipe_id: str, payload: RecipeUpdateInput,
                  user: User = Depends(current_user),
                  recipes: RecipeRepository = Depends(get_recipes)):
    recipe = recipes.update(recipe_id, payload.changes(), user.id)
    return {"success": True, "message": "Recipe updated successfully", "recipe": recipe.to_dict()}


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: str, user: User = Depends(current_user),
                  recipes: RecipeRepository = Depends(get_recipes)):
    recipes.delete(recipe_id, user.id)
    return {"success": True, "message": "Recipe deleted successfully"}


# === Engagement ===
@router.post("/{recipe_id}/like", status_code=201)
def like_recipe(recipe_id: str, user: User = Depends(current_user),
                likes: LikeRepository = Depends(get_likes)):
    count = likes.like(user, recipe_id)
    return {"success": True, "likes": count, "message": "Recipe liked successfully"}


@router.post("/{recipe_id}/bookmark", status_code=201)
def bookmark_recipe(recipe_id: str, user: User = Depends(current_user),
                    bookmarks: BookmarkRepository = Depends(get_bookmarks)):
    bookmark = bookmarks.add(user, recipe_id)
    return {"success": True, "bookmarkId": bookmark.id, "message": "Recipe bookmarked successfully"}
