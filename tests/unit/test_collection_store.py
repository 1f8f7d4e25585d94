"""Tests for CollectionStore."""

import pytest

from schooldesk.lib.collection_store import CollectionStore, normalize_key
from schooldesk.lib.mutation_events import EntityType, MutationEvent


@pytest.fixture
def store():
    return CollectionStore([{"id": 1, "title": "A"}, {"id": 2, "title": "B"}])


class TestLoad:
    def test_load_replaces_everything(self, store):
        store.load([{"id": 7, "title": "Z"}])
        assert store.snapshot() == [{"id": 7, "title": "Z"}]

    def test_load_keeps_insertion_order(self):
        store = CollectionStore()
        store.load([{"id": 3}, {"id": 1}, {"id": 2}])
        assert [r["id"] for r in store.snapshot()] == [3, 1, 2]

    def test_load_collapses_repeated_ids(self):
        store = CollectionStore()
        store.load([{"id": 1, "v": "old"}, {"id": 2}, {"id": 1, "v": "new"}])
        assert store.snapshot() == [{"id": 1, "v": "new"}, {"id": 2}]

    def test_load_rejects_record_without_id(self):
        with pytest.raises(ValueError):
            CollectionStore().load([{"title": "no id"}])


class TestCreated:
    def test_created_appends(self):
        """Load [{id:1}], create {id:2} -> both, in order."""
        store = CollectionStore([{"id": 1, "title": "A"}])
        store.apply_created({"id": 2, "title": "B"})
        assert store.snapshot() == [{"id": 1, "title": "A"}, {"id": 2, "title": "B"}]

    def test_created_with_fresh_id_grows_by_one(self, store):
        before = len(store)
        store.apply_created({"id": 3, "title": "C"})
        assert len(store) == before + 1
        assert 3 in store

    def test_created_twice_is_idempotent(self, store):
        event = MutationEvent.created(EntityType.EVENT, {"id": 3, "title": "C"})
        store.apply(event)
        once = store.snapshot()
        store.apply(event)
        assert store.snapshot() == once

    def test_second_create_for_same_id_wins(self):
        store = CollectionStore()
        store.apply_created({"id": 5, "title": "first"})
        store.apply_created({"id": 5, "title": "second"})
        assert store.snapshot() == [{"id": 5, "title": "second"}]


class TestUpdated:
    def test_updated_replaces_in_place(self):
        store = CollectionStore([{"id": 1, "title": "A"}])
        store.apply_updated({"id": 1, "title": "A2"})
        assert store.snapshot() == [{"id": 1, "title": "A2"}]

    def test_updated_keeps_size_and_position(self, store):
        store.apply_updated({"id": 1, "title": "A2"})
        assert len(store) == 2
        assert store.snapshot()[0] == {"id": 1, "title": "A2"}

    def test_updated_is_full_replace_not_merge(self):
        store = CollectionStore([{"id": 1, "title": "A", "location": "Hall"}])
        store.apply_updated({"id": 1, "title": "A2"})
        assert store.find(1) == {"id": 1, "title": "A2"}

    def test_updated_unknown_id_appends(self, store):
        store.apply_updated({"id": 9, "title": "late"})
        assert store.snapshot()[-1] == {"id": 9, "title": "late"}


class TestDeleted:
    def test_deleted_removes_match(self, store):
        assert store.apply_deleted(2) is True
        assert store.snapshot() == [{"id": 1, "title": "A"}]

    def test_deleted_unknown_id_is_noop(self):
        store = CollectionStore([{"id": 1}])
        assert store.apply_deleted(99) is False
        assert store.snapshot() == [{"id": 1}]

    def test_string_and_numeric_ids_match(self, store):
        store.apply_deleted("2")
        assert 2 not in store


class TestApply:
    def test_apply_without_record_asks_for_refetch(self, store):
        before = store.snapshot()
        assert store.apply(MutationEvent.updated(EntityType.EVENT, None)) is False
        assert store.snapshot() == before

    def test_apply_routes_by_kind(self, store):
        assert store.apply(MutationEvent.deleted(EntityType.EVENT, 1)) is True
        assert [r["id"] for r in store.snapshot()] == [2]


class TestSnapshot:
    def test_snapshot_is_a_copy(self, store):
        rows = store.snapshot()
        rows[0]["title"] = "changed"
        rows.append({"id": 3})
        assert store.snapshot() == [{"id": 1, "title": "A"}, {"id": 2, "title": "B"}]

    def test_nested_values_are_copied(self):
        store = CollectionStore([{"id": 1, "teachers": [10]}])
        store.snapshot()[0]["teachers"].append(11)
        store.find(1)["teachers"].append(12)
        assert store.find(1) == {"id": 1, "teachers": [10]}

    def test_stored_record_is_detached_from_caller(self):
        record = {"id": 1, "title": "A"}
        store = CollectionStore()
        store.apply_created(record)
        record["title"] = "mutated"
        assert store.find(1)["title"] == "A"


def test_normalize_key():
    assert normalize_key("5") == 5
    assert normalize_key(" 12 ") == 12
    assert normalize_key("abc") == "abc"
    assert normalize_key(5) == 5


@pytest.mark.parametrize("key", ["--5", "²", "5-", "1_000"])
def test_normalize_key_leaves_non_numeric_strings(key):
    assert normalize_key(key) == key


def test_find_with_malformed_key():
    store = CollectionStore([{"id": 1}, {"id": 5}])
    assert store.find("--5") is None
    assert store.find("²") is None
    assert store.find("-1") is None
