"""Shopping list builder.

Provides generate_shopping_list(user_id, reference_date, slots=..., recipes=...)
which flattens the ingredients of every meal slot in the reference week into
one checklist.
"""
import logging
from datetime import date, datetime
from typing import Dict, List, Union

from mealhub.domain.ShoppingListItem import ShoppingListItem
from mealhub.domain.errors import NotFoundError
from mealhub.infra.MealSlot_Repository import MealSlotRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.logic.planning.week_window import resolve_week
from mealhub.utilities.constants import DEFAULT_CATEGORY, DEFAULT_QUANTITY, SHOPPING_CATEGORIES

logger = logging.getLogger(__name__)


def generate_shopping_list(user_id: str, reference_date: Union[date, datetime], *,
                           slots: MealSlotRepository,
                           recipes: RecipeRepository) -> List[ShoppingListItem]:
    """Build the checklist for the week containing ``reference_date``.

    Only the slot listing may fail the whole call. A slot whose recipe has
    been deleted contributes nothing.

    Returns:
        One item per (slot, ingredient line), in slot order then ingredient order.
    """
    start, end = resolve_week(reference_date)
    week_slots = slots.list_in_range(user_id, start, end)

    items: List[ShoppingListItem] = []
    for slot in week_slots:
        try:
            recipe = recipes.get_by_id(slot.recipe_id)
        except NotFoundError:
            logger.debug("Skipping slot %s: recipe %s is gone", slot.id, slot.recipe_id)
            continue
        for index, line in enumerate(recipe.ingredients):
            items.append(ShoppingListItem(
                id=f"{slot.id}-{index}",
                name=line.strip(),
                quantity=DEFAULT_QUANTITY,
                category=DEFAULT_CATEGORY,
                recipe_id=recipe.id,
                recipe_name=recipe.title,
            ))
    return items


def group_by_category(items: List[ShoppingListItem]) -> Dict[str, List[ShoppingListItem]]:
    """Group items under SHOPPING_CATEGORIES (in that order), dropping empty groups."""
    grouped: Dict[str, List[ShoppingListItem]] = {c: [] for c in SHOPPING_CATEGORIES}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    return {c: group for c, group in grouped.items() if group}


__all__ = ['generate_shopping_list', 'group_by_category']
