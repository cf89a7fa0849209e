import unittest
from datetime import date

from mealhub.domain.MealSlot import MealSlot
from mealhub.domain.Recipe import Recipe
from mealhub.domain.ShoppingListItem import ShoppingListItem
from mealhub.infra.pdf_utils import generate_pdf_for_week


class TestWeekPdf(unittest.TestCase):

    def test_pdf_with_slots_and_shopping_list(self):
        recipe = Recipe(id="r1", title="Porridge", ingredients="oats\nmilk")
        slot = MealSlot("s1", "u1", "Monday", "breakfast", "r1", date(2024, 6, 10), recipe=recipe)
        items = [ShoppingListItem("s1-0", "oats", "r1", "Porridge")]

        pdf = generate_pdf_for_week(date(2024, 6, 10), [slot], items)
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_empty_week_still_renders(self):
        pdf = generate_pdf_for_week(date(2024, 6, 10), [], [])
        self.assertTrue(pdf.startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
