import logging
from typing import Any, Dict, List

from mealhub.domain.Recipe import Recipe
from mealhub.domain.User import User
from mealhub.domain.errors import AuthorizationError, NotFoundError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.utilities.constants import RECIPES
from mealhub.utilities.timestamps import now_iso

logger = logging.getLogger(__name__)

# Fields a PUT may change; ownership and counters stay server-controlled
EDITABLE_FIELDS = {
    'title', 'description', 'ingredients', 'instructions', 'imageUrl', 'tags',
    'difficulty', 'servings', 'prepTime', 'cookTime', 'nutrition',
}


class RecipeRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get_by_id(self, recipe_id: str) -> Recipe:
        data = self.store.get(RECIPES, recipe_id) if recipe_id else None
        if data is None:
            raise NotFoundError("Recipe not found")
        return Recipe.from_dict(data, id=recipe_id)

    def exists(self, recipe_id: str) -> bool:
        return bool(recipe_id) and self.store.get(RECIPES, recipe_id) is not None

    def list_recent(self, limit: int = 20, offset: int = 0) -> List[Recipe]:
        rows = self.store.query(RECIPES, order_by='createdAt', descending=True, limit=limit, offset=offset)
        return [Recipe.from_dict(doc, id=doc_id) for doc_id, doc in rows]

    def list_popular(self, limit: int = 10) -> List[Recipe]:
        rows = self.store.query(RECIPES, order_by='likes', descending=True, limit=limit)
        return [Recipe.from_dict(doc, id=doc_id) for doc_id, doc in rows]

    def list_by_author(self, author_id: str) -> List[Recipe]:
        rows = self.store.query(RECIPES, [('authorId', '==', author_id)], order_by='createdAt', descending=True)
        return [Recipe.from_dict(doc, id=doc_id) for doc_id, doc in rows]

    def create(self, data: Dict[str, Any], author: User, *, ai_generated: bool = False) -> Recipe:
        ts = now_iso()
        recipe = Recipe.from_dict({
            **data,
            'authorId': author.id,
            'authorName': author.name,
            'createdAt': ts,
            'updatedAt': ts,
            'likes': 0,
            'bookmarks': 0,
            'isAIGenerated': ai_generated,
        })
        doc = recipe.to_dict()
        doc.pop('id')
        recipe.id = self.store.add(RECIPES, doc)
        logger.info("Recipe %s saved by %s (ai=%s)", recipe.id, author.id, ai_generated)
        return recipe

    def _owned(self, recipe_id: str, requesting_user_id: str, action: str) -> Recipe:
        recipe = self.get_by_id(recipe_id)
        if recipe.author_id != requesting_user_id:
            raise AuthorizationError(f"Not authorized to {action} this recipe")
        return recipe

    def update(self, recipe_id: str, changes: Dict[str, Any], requesting_user_id: str) -> Recipe:
        self._owned(recipe_id, requesting_user_id, "edit")
        clean = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        clean['updatedAt'] = now_iso()
        self.store.update(RECIPES, recipe_id, clean)
        return self.get_by_id(recipe_id)

    def delete(self, recipe_id: str, requesting_user_id: str) -> None:
        self._owned(recipe_id, requesting_user_id, "delete")
        self.store.delete(RECIPES, recipe_id)
        logger.info("Recipe %s deleted by %s", recipe_id, requesting_user_id)

    def adjust_counter(self, recipe_id: str, field: str, delta: int) -> int:
        """Add ``delta`` to the ``likes`` or ``bookmarks`` counter (never below zero)."""
        if field not in ('likes', 'bookmarks'):
            raise ValueError(f"Unknown counter: {field}")
        recipe = self.get_by_id(recipe_id)
        value = max(getattr(recipe, field) + delta, 0)
        self.store.update(RECIPES, recipe_id, {field: value})
        return value


__all__ = ['RecipeRepository', 'EDITABLE_FIELDS']
