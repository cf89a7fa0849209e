from typing import Final

# Storage boundary format for calendar dates. Zero-padded, so string order is date order.
STORE_DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d.%m.%Y"

DAYS: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")
DIFFICULTIES: Final[tuple[str, ...]] = ("easy", "medium", "hard")

SHOPPING_CATEGORIES: Final[tuple[str, ...]] = (
    "Produce", "Dairy", "Meat", "Pantry", "Frozen", "Other",
)
DEFAULT_CATEGORY: Final[str] = "Other"
DEFAULT_QUANTITY: Final[str] = "1"

# Collections in the document store
RECIPES: Final[str] = "recipes"
MEAL_PLANS: Final[str] = "mealPlans"
BOOKMARKS: Final[str] = "bookmarks"
LIKES: Final[str] = "likes"
USERS: Final[str] = "users"
SESSIONS: Final[str] = "sessions"

PROMPT_TEMPLATE: Final[str] = (
    """
    Please format the response as a JSON object with the following structure:

    """
)
RECIPE_JSON_FORMAT: Final[str] = (
    """
{
    "title": "Recipe Name",
    "description": "Brief description",
    "servings": 4,
    "prepTime": 15,
    "cookTime": 30,
    "ingredients": [
      "1 cup ingredient 1",
      "2 tbsp ingredient 2"
    ],
    "instructions": [
      "Step 1...",
      "Step 2..."
    ],
    "tags": ["tag1", "tag2"],
    "difficulty": "easy",
    "nutrition": {
      "calories": 350,
      "protein": "20g",
      "carbs": "45g",
      "fat": "12g"
    }
}
    """
)
