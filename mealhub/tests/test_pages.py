import unittest
import tempfile
from datetime import date

from fastapi.testclient import TestClient

from mealhub.api.api_run import app
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Identity_Provider import IdentityProvider
from mealhub.infra.MealSlot_Repository import MealSlotRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository
from mealhub.utilities.config import SESSION_COOKIE


class TestPages(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._previous_store = app.state.store
        app.state.store = DocumentStore(self._tmp.name)
        store = app.state.store

        users = UserRepository(store)
        self.user = users.create("Alice", "alice@example.com")
        self.recipes = RecipeRepository(store)
        self.slots = MealSlotRepository(store, self.recipes)
        self.recipe = self.recipes.create({
            "title": "Shakshuka",
            "description": "Eggs in tomato sauce",
            "ingredients": "4 eggs\n1 can tomatoes",
            "instructions": "Simmer sauce\nAdd eggs",
            "servings": 2,
        }, self.user)

        self.client = TestClient(app)
        self.client.cookies.set(SESSION_COOKIE, IdentityProvider(store, users).issue(self.user.id))

    def tearDown(self):
        self.client.close()
        app.state.store = self._previous_store
        self._tmp.cleanup()

    def test_home_lists_recipes(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Shakshuka", resp.text)

    def test_recipe_detail(self):
        resp = self.client.get(f"/recipes/{self.recipe.id}")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("1 can tomatoes", resp.text)
        self.assertIn("Alice", resp.text)

    def test_recipe_detail_not_found(self):
        resp = self.client.get("/recipes/missing")
        self.assertEqual(resp.status_code, 404)

    def test_assign_then_remove_through_planner(self):
        resp = self.client.post("/meal-planner/assign", data={
            "day": "Tuesday", "meal_type": "dinner", "recipe_id": self.recipe.id, "week": "2024-06-12",
        }, follow_redirects=False)
        self.assertEqual(resp.status_code, 303)
        self.assertEqual(resp.headers["location"], "/meal-planner?date=2024-06-12")

        found = self.slots.list_in_range(self.user.id, date(2024, 6, 10), date(2024, 6, 16))
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].planned_for, date(2024, 6, 11))

        page = self.client.get("/meal-planner", params={"date": "2024-06-12"})
        self.assertEqual(page.status_code, 200)
        self.assertIn("10.06.2024", page.text)
        self.assertIn("Shakshuka", page.text)

        resp = self.client.post(f"/meal-planner/remove/{found[0].id}", data={"week": "2024-06-12"},
                                follow_redirects=False)
        self.assertEqual(resp.status_code, 303)
        self.assertEqual(self.slots.list_in_range(self.user.id, date(2024, 6, 10), date(2024, 6, 16)), [])

    def test_shopping_list_page_groups_items(self):
        today = date.today()
        self.slots.create(self.user.id, "Monday", "lunch", self.recipe.id, today)
        resp = self.client.get("/shopping-list")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Other", resp.text)
        self.assertIn("4 eggs", resp.text)

    def test_pages_without_session(self):
        self.client.cookies.clear()
        resp = self.client.get("/meal-planner")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Sign in to plan your meals", resp.text)


if __name__ == "__main__":
    unittest.main()
