import logging
from datetime import date
from typing import List, Optional

from mealhub.domain.MealSlot import MealSlot
from mealhub.domain.errors import AuthorizationError, NotFoundError, ValidationError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.logic.planning.week_window import resolve_week
from mealhub.utilities.constants import MEAL_PLANS, MEAL_TYPES, STORE_DATE_FORMAT
from mealhub.utilities.timestamps import now_iso

logger = logging.getLogger(__name__)


def _to_store(d: date) -> str:
    return d.strftime(STORE_DATE_FORMAT)


def _sort_key(slot: MealSlot):
    meal_rank = MEAL_TYPES.index(slot.meal_type) if slot.meal_type in MEAL_TYPES else len(MEAL_TYPES)
    return slot.planned_for, meal_rank, slot.created_at


class MealSlotRepository:
    """Meal slots scoped by owner and week.

    ``plannedFor`` is stored as a zero-padded ``YYYY-MM-DD`` string, so the
    store's string range filter orders exactly like the dates do.
    """

    def __init__(self, store: DocumentStore, recipes: RecipeRepository):
        self.store = store
        self.recipes = recipes

    def create(self, user_id: str, day: str, meal_type: str, recipe_id: str,
               planned_for: Optional[date]) -> MealSlot:
        """Assign ``recipe_id`` to a slot, replacing whatever occupied it that week."""
        if not (user_id and day and meal_type and recipe_id and planned_for):
            raise ValidationError("All fields are required")
        if not self.recipes.exists(recipe_id):
            raise NotFoundError("Recipe not found")

        start, end = resolve_week(planned_for)
        slot = MealSlot(id="", user_id=user_id, day=day, meal_type=meal_type,
                        recipe_id=recipe_id, planned_for=planned_for, created_at=now_iso())
        slot.id, replaced = self.store.replace(MEAL_PLANS, [
            ('userId', '==', user_id),
            ('day', '==', day),
            ('mealType', '==', meal_type),
            ('plannedFor', '>=', _to_store(start)),
            ('plannedFor', '<=', _to_store(end)),
        ], slot.to_document())
        for old_id in replaced:
            logger.info("Replaced slot %s (%s %s) for user %s", old_id, day, meal_type, user_id)
        logger.info("Meal slot %s created: %s %s -> %s", slot.id, day, meal_type, recipe_id)
        return slot

    def get(self, slot_id: str) -> MealSlot:
        data = self.store.get(MEAL_PLANS, slot_id) if slot_id else None
        if data is None:
            raise NotFoundError("Meal plan not found")
        return MealSlot.from_dict(data, id=slot_id)

    def list_in_range(self, user_id: str, start: date, end: date, *,
                      with_recipes: bool = False) -> List[MealSlot]:
        rows = self.store.query(MEAL_PLANS, [
            ('userId', '==', user_id),
            ('plannedFor', '>=', _to_store(start)),
            ('plannedFor', '<=', _to_store(end)),
        ])
        slots = sorted((MealSlot.from_dict(doc, id=doc_id) for doc_id, doc in rows), key=_sort_key)
        if not with_recipes:
            return slots

        joined = []
        for slot in slots:
            try:
                slot.recipe = self.recipes.get_by_id(slot.recipe_id)
            except NotFoundError:
                logger.warning("Recipe not found for meal plan %s, recipeId %s", slot.id, slot.recipe_id)
                continue
            joined.append(slot)
        return joined

    def delete(self, slot_id: str, requesting_user_id: str) -> None:
        slot = self.get(slot_id)
        if slot.user_id != requesting_user_id:
            raise AuthorizationError("Unauthorized")
        self.store.delete(MEAL_PLANS, slot_id)
        logger.info("Meal slot %s deleted by %s", slot_id, requesting_user_id)


__all__ = ['MealSlotRepository']
