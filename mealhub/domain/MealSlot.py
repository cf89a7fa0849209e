"""MealSlot domain entity: one recipe assigned to one meal type on one day of one week."""
from datetime import date, datetime
from typing import Any, Dict, Optional

from mealhub.domain.Recipe import Recipe
from mealhub.utilities.constants import STORE_DATE_FORMAT


class MealSlot:
    def __init__(self, id: str, user_id: str, day: str, meal_type: str, recipe_id: str,
                 planned_for: date, created_at: str = "", recipe: Optional[Recipe] = None):
        self.id = id
        self.user_id = user_id
        self.day = day
        self.meal_type = meal_type
        self.recipe_id = recipe_id
        self.planned_for = planned_for
        self.created_at = created_at
        # Populated only when the caller asks for the recipe join
        self.recipe = recipe

    def __repr__(self) -> str:
        return f"<MealSlot(id={self.id}, {self.day} {self.meal_type} -> {self.recipe_id})>"

    @staticmethod
    def from_dict(data: Dict[str, Any], id: Optional[str] = None) -> "MealSlot":
        d = dict(data)
        planned = d.get('plannedFor')
        if isinstance(planned, str):
            planned = datetime.strptime(planned[:10], STORE_DATE_FORMAT).date()
        return MealSlot(
            id=id if id is not None else d.get('id', ''),
            user_id=d.get('userId', ''),
            day=d.get('day', ''),
            meal_type=d.get('mealType', ''),
            recipe_id=d.get('recipeId', ''),
            planned_for=planned,
            created_at=d.get('createdAt', ''),
        )

    def to_document(self) -> Dict[str, Any]:
        '''Stored form; ``plannedFor`` becomes a zero-padded ISO date string.'''
        return {
            "userId": self.user_id,
            "day": self.day,
            "mealType": self.meal_type,
            "recipeId": self.recipe_id,
            "plannedFor": self.planned_for.strftime(STORE_DATE_FORMAT),
            "createdAt": self.created_at,
        }

    def to_dict(self) -> Dict[str, Any]:
        d = {"id": self.id, **self.to_document()}
        if self.recipe is not None:
            d["recipe"] = self.recipe.to_dict()
        return d
