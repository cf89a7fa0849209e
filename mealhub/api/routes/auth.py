from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from mealhub.api.dependencies import (
    current_user, get_bookmarks, get_identity, get_likes, get_recipes, get_users, session_token,
)
from mealhub.domain.User import User
from mealhub.domain.errors import NotFoundError
from mealhub.infra.Bookmark_Repository import BookmarkRepository
from mealhub.infra.Identity_Provider import IdentityProvider
from mealhub.infra.Like_Repository import LikeRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository
from mealhub.utilities.config import SESSION_COOKIE
from mealhub.utilities.validators import ProfileUpdateInput

router = APIRouter(prefix="/api/auth")


@router.get("/user")
def get_current_user(user: User = Depends(current_user)):
    return {"success": True, "user": user.to_dict()}


@router.get("/profile")
def get_profile(user: User = Depends(current_user),
                users: UserRepository = Depends(get_users),
                recipes: RecipeRepository = Depends(get_recipes),
                likes: LikeRepository = Depends(get_likes),
                bookmarks: BookmarkRepository = Depends(get_bookmarks)):
    profile = users.get(user.id)
    if profile is None:
        raise NotFoundError("User profile not found")
    return {
        "success": True,
        "profile": {
            **profile.to_dict(),
            "createdAt": profile.created_at,
            "recipesCount": len(recipes.list_by_author(user.id)),
            "likesCount": likes.count_for_user(user.id),
            "bookmarksCount": bookmarks.count_for_user(user.id),
        },
    }


@router.put("/profile")
def update_profile(payload: ProfileUpdateInput, user: User = Depends(current_user),
                   users: UserRepository = Depends(get_users)):
    updated = users.update_profile(user.id, payload.name or "", payload.email or "")
    return {"success": True, "message": "Profile updated successfully", "user": updated.to_dict()}


@router.post("/logout")
def logout(request: Request, identity: IdentityProvider = Depends(get_identity)):
    identity.revoke(session_token(request))
    response = JSONResponse({"success": True})
    response.delete_cookie(SESSION_COOKIE)
    return response
