"""Recipe domain entity: title, ingredients, instructions, authorship and engagement counters."""
import re
from typing import Any, Dict, List, Optional

_LINE_SPLIT = re.compile(r"\r?\n")


def _format_structured(entry: Dict[str, Any]) -> str:
    parts = [str(entry.get(k) or '').strip() for k in ('amount', 'unit', 'item')]
    return " ".join(p for p in parts if p)


def normalize_lines(value: Any) -> List[str]:
    """Return ``value`` as an ordered list of non-blank, trimmed lines.

    Stored recipes carry ingredients either as one newline-delimited block or
    as a list. Lists may hold ``{item, amount, unit}`` objects. Any other
    shape normalizes to an empty list.
    """
    if isinstance(value, str):
        candidates = _LINE_SPLIT.split(value)
    elif isinstance(value, (list, tuple)):
        candidates = []
        for entry in value:
            if isinstance(entry, str):
                candidates.append(entry)
            elif isinstance(entry, dict):
                candidates.append(_format_structured(entry))
    else:
        return []
    return [line.strip() for line in candidates if line and line.strip()]


class Recipe:
    def __init__(self, id: str = "", title: str = "", description: str = "",
                 ingredients: Any = None, instructions: Any = None,
                 image_url: Optional[str] = None, tags: Optional[List[str]] = None,
                 difficulty: str = "medium", servings: int = 1,
                 prep_time: Any = 0, cook_time: Any = 0,
                 nutrition: Optional[Dict[str, Any]] = None,
                 author_id: str = "", author_name: str = "",
                 created_at: str = "", updated_at: str = "",
                 is_ai_generated: bool = False, likes: int = 0, bookmarks: int = 0):
        self.id = id
        self.title = title
        self.description = description
        # Always plain lists of non-blank lines, whatever the stored shape
        self.ingredients = normalize_lines(ingredients)
        self.instructions = normalize_lines(instructions)
        self.image_url = image_url
        self.tags = [t for t in (tags or []) if isinstance(t, str) and t.strip()]
        self.difficulty = difficulty
        self.servings = servings
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.nutrition = nutrition
        self.author_id = author_id
        self.author_name = author_name
        self.created_at = created_at
        self.updated_at = updated_at
        self.is_ai_generated = is_ai_generated
        self.likes = likes
        self.bookmarks = bookmarks

    def __str__(self) -> str:
        return f"{self.title} - {self.servings} servings - {len(self.ingredients)} ingredients"

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    @staticmethod
    def from_dict(data: Dict[str, Any], id: Optional[str] = None) -> "Recipe":
        '''Creates a Recipe from a stored document. Unknown keys are ignored.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(
            id=id if id is not None else d.get('id', ''),
            title=d.get('title') or '',
            description=d.get('description') or '',
            ingredients=d.get('ingredients'),
            instructions=d.get('instructions'),
            image_url=d.get('imageUrl'),
            tags=d.get('tags') or [],
            difficulty=d.get('difficulty') or 'medium',
            servings=d.get('servings') or 1,
            prep_time=d.get('prepTime') or 0,
            cook_time=d.get('cookTime') or 0,
            nutrition=d.get('nutrition'),
            author_id=d.get('authorId') or '',
            author_name=d.get('authorName') or '',
            created_at=d.get('createdAt') or '',
            updated_at=d.get('updatedAt') or '',
            is_ai_generated=bool(d.get('isAIGenerated', False)),
            likes=int(d.get('likes') or 0),
            bookmarks=int(d.get('bookmarks') or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        '''Converts the Recipe to its stored/wire form (camelCase keys).'''
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "imageUrl": self.image_url,
            "tags": list(self.tags),
            "difficulty": self.difficulty,
            "servings": self.servings,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "nutrition": self.nutrition,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "isAIGenerated": self.is_ai_generated,
            "likes": self.likes,
            "bookmarks": self.bookmarks,
        }
