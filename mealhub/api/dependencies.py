"""FastAPI dependencies: repositories bound to the app's document store, and the current user."""
from typing import Any, Optional

from fastapi import Depends, Request

from mealhub.domain.User import User
from mealhub.domain.errors import AuthenticationError
from mealhub.infra.Bookmark_Repository import BookmarkRepository
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Identity_Provider import IdentityProvider
from mealhub.infra.Like_Repository import LikeRepository
from mealhub.infra.MealSlot_Repository import MealSlotRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository
from mealhub.utilities.config import SESSION_COOKIE


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_recipes(store: DocumentStore = Depends(get_store)) -> RecipeRepository:
    return RecipeRepository(store)


def get_slots(store: DocumentStore = Depends(get_store),
              recipes: RecipeRepository = Depends(get_recipes)) -> MealSlotRepository:
    return MealSlotRepository(store, recipes)


def get_bookmarks(store: DocumentStore = Depends(get_store),
                  recipes: RecipeRepository = Depends(get_recipes)) -> BookmarkRepository:
    return BookmarkRepository(store, recipes)


def get_likes(store: DocumentStore = Depends(get_store),
              recipes: RecipeRepository = Depends(get_recipes)) -> LikeRepository:
    return LikeRepository(store, recipes)


def get_users(store: DocumentStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store)


def get_identity(store: DocumentStore = Depends(get_store),
                 users: UserRepository = Depends(get_users)) -> IdentityProvider:
    return IdentityProvider(store, users)


def get_ai_client(request: Request) -> Any:
    # None means "build a real OpenAI client from the environment"
    return getattr(request.app.state, 'ai_client', None)


def session_token(request: Request) -> Optional[str]:
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    auth = request.headers.get('authorization', '')
    if auth.lower().startswith('bearer '):
        return auth[7:].strip() or None
    return None


def current_user_optional(request: Request,
                          identity: IdentityProvider = Depends(get_identity)) -> Optional[User]:
    return identity.resolve(session_token(request))


def current_user(user: Optional[User] = Depends(current_user_optional)) -> User:
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user
