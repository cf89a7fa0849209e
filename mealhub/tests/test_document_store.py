import json

import pytest

from mealhub.domain.errors import StoreError, ValidationError
from mealhub.infra.Document_Store import DocumentStore


def test_add_get_update_delete(store):
    doc_id = store.add("things", {"name": "a", "n": 1})
    assert store.get("things", doc_id) == {"name": "a", "n": 1}

    assert store.update("things", doc_id, {"n": 2})
    assert store.get("things", doc_id)["n"] == 2
    assert store.update("things", "missing", {"n": 3}) is False

    assert store.delete("things", doc_id)
    assert store.get("things", doc_id) is None
    assert store.delete("things", doc_id) is False


def test_get_returns_a_copy(store):
    doc_id = store.add("things", {"name": "a"})
    store.get("things", doc_id)["name"] = "changed"
    assert store.get("things", doc_id)["name"] == "a"


def test_persists_to_json_file(tmp_path):
    store = DocumentStore(tmp_path)
    store.set("things", "fixed", {"name": "a"})
    with open(tmp_path / "things.json", encoding="utf-8") as f:
        assert json.load(f) == {"fixed": {"name": "a"}}
    assert DocumentStore(tmp_path).get("things", "fixed") == {"name": "a"}


def test_query_combines_equality_and_range_filters(store):
    store.set("plans", "1", {"userId": "u1", "plannedFor": "2024-01-01"})
    store.set("plans", "2", {"userId": "u1", "plannedFor": "2024-01-07"})
    store.set("plans", "3", {"userId": "u1", "plannedFor": "2024-01-08"})
    store.set("plans", "4", {"userId": "u2", "plannedFor": "2024-01-03"})
    store.set("plans", "5", {"userId": "u1"})

    rows = store.query("plans", [
        ("userId", "==", "u1"),
        ("plannedFor", ">=", "2024-01-01"),
        ("plannedFor", "<=", "2024-01-07"),
    ])
    assert sorted(doc_id for doc_id, _ in rows) == ["1", "2"]


def test_query_ordering_and_paging(store):
    store.set("r", "a", {"likes": 1})
    store.set("r", "b", {"likes": 5})
    store.set("r", "c", {})
    store.set("r", "d", {"likes": 3})

    ids = [doc_id for doc_id, _ in store.query("r", order_by="likes", descending=True)]
    assert ids == ["b", "d", "a", "c"]

    page = store.query("r", order_by="likes", descending=True, limit=2, offset=1)
    assert [doc_id for doc_id, _ in page] == ["d", "a"]


def test_query_rejects_unknown_operator(store):
    with pytest.raises(ValidationError):
        store.query("r", [("likes", "!=", 1)])


def test_corrupt_collection_raises_store_error(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        DocumentStore(tmp_path).get("broken", "x")


def test_replace_removes_matches_and_adds_in_one_write(store):
    store.set("plans", "old", {"userId": "u1", "day": "Monday"})
    store.set("plans", "other", {"userId": "u1", "day": "Tuesday"})

    new_id, removed = store.replace("plans", [("userId", "==", "u1"), ("day", "==", "Monday")],
                                    {"userId": "u1", "day": "Monday", "recipeId": "r2"})
    assert removed == ["old"]
    assert store.get("plans", "old") is None
    assert store.get("plans", new_id)["recipeId"] == "r2"
    assert store.get("plans", "other") is not None


def test_replace_leaves_collection_untouched_when_write_fails(store, monkeypatch):
    store.set("plans", "old", {"userId": "u1"})

    def failing_save(collection, docs):
        raise StoreError(f"Could not write {collection}")

    monkeypatch.setattr(store, "_save", failing_save)
    with pytest.raises(StoreError):
        store.replace("plans", [("userId", "==", "u1")], {"userId": "u1", "n": 2})
    monkeypatch.undo()

    assert [doc_id for doc_id, _ in store.query("plans")] == ["old"]
