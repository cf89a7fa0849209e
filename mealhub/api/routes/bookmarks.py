from fastapi import APIRouter, Depends

from mealhub.api.dependencies import current_user, get_bookmarks
from mealhub.domain.User import User
from mealhub.infra.Bookmark_Repository import BookmarkRepository
from mealhub.utilities.validators import BookmarkInput

router = APIRouter(prefix="/api/bookmarks")


@router.get("")
def list_bookmarks(user: User = Depends(current_user),
                   bookmarks: BookmarkRepository = Depends(get_bookmarks)):
    return {"success": True, "bookmarks": bookmarks.list_for_user(user.id)}


@router.post("", status_code=201)
def create_bookmark(payload: BookmarkInput, user: User = Depends(current_user),
                    bookmarks: BookmarkRepository = Depends(get_bookmarks)):
    bookmark = bookmarks.add(user, payload.recipe_id or "")
    return {"success": True, "bookmarkId": bookmark.id, "message": "Recipe bookmarked successfully"}


@router.delete("/{bookmark_id}")
def delete_bookmark(bookmark_id: str, user: User = Depends(current_user),
                    bookmarks: BookmarkRepository = Depends(get_bookmarks)):
    bookmarks.remove(bookmark_id, user.id)
    return {"success": True, "message": "Bookmark removed successfully"}
