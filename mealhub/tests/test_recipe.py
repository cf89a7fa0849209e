import unittest

from mealhub.domain.Recipe import Recipe, normalize_lines


class TestNormalizeLines(unittest.TestCase):

    def test_text_block_is_split_and_blank_lines_dropped(self):
        self.assertEqual(normalize_lines("2 cups flour\n1 cup sugar\n\n"), ["2 cups flour", "1 cup sugar"])

    def test_windows_line_endings(self):
        self.assertEqual(normalize_lines("a\r\n b \r\n"), ["a", "b"])

    def test_list_of_strings_is_trimmed_and_filtered(self):
        self.assertEqual(normalize_lines(["  eggs ", "", "   ", "milk"]), ["eggs", "milk"])

    def test_structured_entries_are_rendered(self):
        lines = normalize_lines([{"item": "flour", "amount": "2", "unit": "cups"}, {"item": "salt"}])
        self.assertEqual(lines, ["2 cups flour", "salt"])

    def test_other_shapes_are_empty(self):
        for value in (None, 42, {"item": "flour"}, [3, None]):
            self.assertEqual(normalize_lines(value), [])


class TestRecipe(unittest.TestCase):

    def setUp(self):
        self.doc = {
            "title": "Omelette",
            "ingredients": "3 eggs\n\n100 g cheese",
            "instructions": ["Beat eggs", "", "Cook with cheese"],
            "imageUrl": "/uploads/recipes/x.jpg",
            "authorId": "u1",
            "likes": 3,
            "isAIGenerated": True,
        }

    def test_from_dict_normalizes_ingredients_once(self):
        recipe = Recipe.from_dict(self.doc, id="r1")
        self.assertEqual(recipe.id, "r1")
        self.assertEqual(recipe.ingredients, ["3 eggs", "100 g cheese"])
        self.assertEqual(recipe.instructions, ["Beat eggs", "Cook with cheese"])
        self.assertTrue(recipe.is_ai_generated)
        self.assertEqual(recipe.likes, 3)

    def test_to_dict_uses_wire_keys(self):
        data = Recipe.from_dict(self.doc, id="r1").to_dict()
        self.assertEqual(data["id"], "r1")
        self.assertEqual(data["imageUrl"], "/uploads/recipes/x.jpg")
        self.assertEqual(data["authorId"], "u1")
        self.assertEqual(data["bookmarks"], 0)
        self.assertEqual(data["difficulty"], "medium")


if __name__ == "__main__":
    unittest.main()
