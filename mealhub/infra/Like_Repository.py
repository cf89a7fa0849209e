import logging

from mealhub.domain.User import User
from mealhub.domain.errors import ValidationError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.utilities.constants import LIKES
from mealhub.utilities.timestamps import now_iso

logger = logging.getLogger(__name__)


class LikeRepository:
    def __init__(self, store: DocumentStore, recipes: RecipeRepository):
        self.store = store
        self.recipes = recipes

    def has_liked(self, user_id: str, recipe_id: str) -> bool:
        return bool(self.store.query(LIKES, [('userId', '==', user_id), ('recipeId', '==', recipe_id)], limit=1))

    def like(self, user: User, recipe_id: str) -> int:
        """Record a like and return the recipe's new like count."""
        self.recipes.get_by_id(recipe_id)
        if self.has_liked(user.id, recipe_id):
            raise ValidationError("Recipe already liked")
        self.store.add(LIKES, {'userId': user.id, 'recipeId': recipe_id, 'createdAt': now_iso()})
        return self.recipes.adjust_counter(recipe_id, 'likes', 1)

    def count_for_user(self, user_id: str) -> int:
        return len(self.store.query(LIKES, [('userId', '==', user_id)]))
