import logging
from typing import Any, Dict, List

from mealhub.domain.User import Bookmark, User
from mealhub.domain.errors import AuthorizationError, NotFoundError, ValidationError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.utilities.constants import BOOKMARKS
from mealhub.utilities.timestamps import now_iso

logger = logging.getLogger(__name__)


class BookmarkRepository:
    def __init__(self, store: DocumentStore, recipes: RecipeRepository):
        self.store = store
        self.recipes = recipes

    def add(self, user: User, recipe_id: str) -> Bookmark:
        if not recipe_id:
            raise ValidationError("Recipe ID is required")
        self.recipes.get_by_id(recipe_id)
        existing = self.store.query(BOOKMARKS, [('userId', '==', user.id), ('recipeId', '==', recipe_id)], limit=1)
        if existing:
            raise ValidationError("Recipe already bookmarked")
        created = now_iso()
        bookmark_id = self.store.add(BOOKMARKS, {'userId': user.id, 'recipeId': recipe_id, 'createdAt': created})
        self.recipes.adjust_counter(recipe_id, 'bookmarks', 1)
        return Bookmark(bookmark_id, user.id, recipe_id, created)

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Bookmarks joined with their recipes, newest first; dangling ones are skipped."""
        rows = self.store.query(BOOKMARKS, [('userId', '==', user_id)], order_by='createdAt', descending=True)
        out = []
        for doc_id, doc in rows:
            try:
                recipe = self.recipes.get_by_id(doc.get('recipeId', ''))
            except NotFoundError:
                logger.warning("Bookmark %s points at missing recipe %s", doc_id, doc.get('recipeId'))
                continue
            out.append({'id': doc_id, 'recipe': recipe.to_dict(), 'bookmarkedAt': doc.get('createdAt')})
        return out

    def remove(self, bookmark_id: str, user_id: str) -> None:
        data = self.store.get(BOOKMARKS, bookmark_id) if bookmark_id else None
        if data is None:
            raise NotFoundError("Bookmark not found")
        bookmark = Bookmark.from_dict(data, bookmark_id)
        if bookmark.user_id != user_id:
            raise AuthorizationError("Unauthorized")
        self.store.delete(BOOKMARKS, bookmark_id)
        if self.recipes.exists(bookmark.recipe_id):
            self.recipes.adjust_counter(bookmark.recipe_id, 'bookmarks', -1)

    def count_for_user(self, user_id: str) -> int:
        return len(self.store.query(BOOKMARKS, [('userId', '==', user_id)]))
