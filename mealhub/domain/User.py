"""User and Bookmark domain entities."""
from typing import Any, Dict, Optional


class User:
    def __init__(self, id: str, name: str = "", email: str = "",
                 created_at: str = "", updated_at: str = ""):
        self.id = id
        self.name = name
        self.email = email
        self.created_at = created_at
        self.updated_at = updated_at

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

    @staticmethod
    def from_dict(data: Dict[str, Any], id: Optional[str] = None) -> "User":
        d = dict(data)
        return User(
            id=id if id is not None else d.get('id', ''),
            name=d.get('name') or '',
            email=d.get('email') or '',
            created_at=d.get('createdAt') or '',
            updated_at=d.get('updatedAt') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


class Bookmark:
    def __init__(self, id: str, user_id: str, recipe_id: str, created_at: str = ""):
        self.id = id
        self.user_id = user_id
        self.recipe_id = recipe_id
        self.created_at = created_at

    @staticmethod
    def from_dict(data: Dict[str, Any], id: str) -> "Bookmark":
        return Bookmark(id, data.get('userId', ''), data.get('recipeId', ''), data.get('createdAt', ''))
