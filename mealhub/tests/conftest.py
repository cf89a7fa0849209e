from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from mealhub.api.api_run import app
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.Identity_Provider import IdentityProvider
from mealhub.infra.MealSlot_Repository import MealSlotRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository


class FakeResponses:
    """Stands in for ``OpenAI().responses``; records every call."""

    def __init__(self, output_text="", error=None):
        self.output_text = output_text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


class FakeAIClient:
    def __init__(self, output_text="", error=None):
        self.responses = FakeResponses(output_text, error)


@pytest.fixture
def store(tmp_path):
    return DocumentStore(tmp_path / "data")


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def recipes(store):
    return RecipeRepository(store)


@pytest.fixture
def slots(store, recipes):
    return MealSlotRepository(store, recipes)


@pytest.fixture
def alice(users):
    return users.create("Alice", "alice@example.com")


@pytest.fixture
def bob(users):
    return users.create("Bob", "bob@example.com")


@pytest.fixture
def client(store, monkeypatch):
    """TestClient bound to a throwaway document store."""
    monkeypatch.setattr(app.state, "store", store)
    monkeypatch.setattr(app.state, "ai_client", None)
    return TestClient(app)


@pytest.fixture
def login(store, users):
    """Issue a session for a user and return the matching Authorization header."""
    def _login(user):
        token = IdentityProvider(store, users).issue(user.id)
        return {"Authorization": f"Bearer {token}"}
    return _login


@pytest.fixture
def make_recipe(recipes):
    def _make(author, title="Pancakes", ingredients="2 cups flour\n1 cup milk", **extra):
        data = {
            "title": title,
            "description": f"{title} for testing",
            "ingredients": ingredients,
            "instructions": "Mix\nCook",
            "servings": 2,
            "prepTime": 5,
            "cookTime": 10,
        }
        data.update(extra)
        return recipes.create(data, author)
    return _make


@pytest.fixture
def fake_ai():
    """Factory for fake OpenAI clients returning canned ``output_text``."""
    return FakeAIClient
