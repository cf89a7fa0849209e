"""ShoppingListItem: a derived, never-persisted checklist line."""
from mealhub.utilities.constants import DEFAULT_CATEGORY, DEFAULT_QUANTITY


class ShoppingListItem:
    def __init__(self, id: str, name: str, recipe_id: str, recipe_name: str,
                 quantity: str = DEFAULT_QUANTITY, category: str = DEFAULT_CATEGORY,
                 checked: bool = False):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.checked = checked
        self.category = category
        self.recipe_id = recipe_id
        self.recipe_name = recipe_name

    def __repr__(self) -> str:
        return f"<ShoppingListItem(id={self.id}, name={self.name})>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingListItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "checked": self.checked,
            "category": self.category,
            "recipeId": self.recipe_id,
            "recipeName": self.recipe_name,
        }
