"""Tests for the reactive data store and scoped contexts."""

import threading

import pytest

from a2ui_core.data import DataStore, ScopedDataContext


# ============================================================================
# Typed reads
# ============================================================================

@pytest.mark.unit
def test_typed_getters(store):
    """Getters return values of the requested kind only."""
    assert store.get_string("/user/name") == "Ada"
    assert store.get_number("/user/age") == 36
    assert store.get_boolean("/user/admin") is True

    assert store.get_string("/user/age") is None
    assert store.get_number("/user/name") is None
    assert store.get_boolean("/user/name") is None


@pytest.mark.unit
def test_boolean_is_not_a_number(store):
    """Booleans are never read as numbers."""
    assert store.get_number("/user/admin") is None


@pytest.mark.unit
def test_collection_getters(store):
    """Array length, object keys and string lists."""
    assert store.get_array_length("/items") == 2
    assert store.get_array_length("/user") is None
    assert store.get_object_keys("/user") == ["name", "age", "admin", "email"]
    assert store.get_object_keys("/items") is None
    assert store.get_string_list("/tags") == ["a", "b"]
    assert store.get_string_list("/user") is None


@pytest.mark.unit
def test_get_missing(store):
    """Absent paths read as None or the given default."""
    assert store.get("/nope") is None
    assert store.get("/nope", "fallback") == "fallback"
    assert not store.contains("/nope")
    assert store.contains("/user/name")


@pytest.mark.unit
def test_trailing_slash(store):
    """Trailing slashes are tolerated."""
    assert store.get_string("/user/name/") == "Ada"


# ============================================================================
# Writes
# ============================================================================

@pytest.mark.unit
def test_update_and_delete():
    """Update writes, delete removes."""
    store = DataStore()
    store.update("/user/name", "Ada")
    assert store.get_string("/user/name") == "Ada"

    store.delete("/user/name")
    assert store.get("/user/name") is None
    assert store.snapshot == {"user": {}}


@pytest.mark.unit
def test_update_root_replaces_tree(store):
    """An object written at the root replaces the whole tree."""
    store.update("/", {"fresh": True})
    assert store.snapshot == {"fresh": True}


@pytest.mark.unit
def test_update_root_with_primitive_is_ignored(store):
    """A primitive at the root leaves the tree unchanged."""
    before = store.snapshot
    store.update("", 42)
    assert store.snapshot is before


@pytest.mark.unit
def test_delete_root_clears(store):
    """Deleting the root empties the store."""
    store.delete("/")
    assert store.snapshot == {}


@pytest.mark.unit
def test_set_data():
    """set_data replaces the tree."""
    store = DataStore({"a": 1})
    store.set_data({"b": 2})
    assert store.snapshot == {"b": 2}


@pytest.mark.unit
def test_snapshots_are_stable(store):
    """Captured snapshots never change after later writes."""
    before = store.snapshot
    store.update("/user/name", "Grace")

    assert before["user"]["name"] == "Ada"
    assert store.snapshot["user"]["name"] == "Grace"
    assert store.snapshot["items"] is before["items"]


@pytest.mark.unit
def test_written_values_are_copied():
    """Mutating a value after writing it does not leak into the store."""
    store = DataStore()
    value = {"list": [1, 2]}
    store.update("/data", value)
    value["list"].append(3)

    assert store.get("/data/list") == [1, 2]


@pytest.mark.unit
def test_initial_data_is_copied():
    """The initial tree is copied on construction."""
    initial = {"a": {"b": 1}}
    store = DataStore(initial)
    initial["a"]["b"] = 2

    assert store.get_number("/a/b") == 1


@pytest.mark.unit
def test_concurrent_writes():
    """Concurrent writers never lose updates to distinct keys."""
    store = DataStore()

    def writer(n):
        for i in range(50):
            store.update(f"/w{n}/k{i}", i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for n in range(4):
        assert len(store.get_object_keys(f"/w{n}")) == 50


# ============================================================================
# Observation
# ============================================================================

@pytest.mark.unit
def test_subscribe_and_unsubscribe():
    """Subscribers receive every new snapshot until unsubscribed."""
    store = DataStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.update("/a", 1)
    store.update("/b", 2)
    unsubscribe()
    store.update("/c", 3)

    assert seen == [{"a": 1}, {"a": 1, "b": 2}]


@pytest.mark.unit
def test_noop_write_does_not_notify():
    """Writes that change nothing publish nothing."""
    store = DataStore({"a": 1})
    seen = []
    store.subscribe(seen.append)

    store.delete("/missing")
    store.update("/", "primitive")

    assert seen == []


@pytest.mark.unit
def test_observe_path():
    """Path observers fire only when their value changes."""
    store = DataStore({"user": {"name": "Ada"}})
    names = []
    store.observe("/user/name", names.append)

    store.update("/other", 1)
    store.update("/user/name", "Grace")
    store.update("/user/name", "Grace")
    store.delete("/user/name")

    assert names == ["Grace", None]


@pytest.mark.unit
def test_failing_observer_does_not_block_others():
    """An observer that raises is logged; the write and other observers proceed."""
    store = DataStore()
    seen = []

    def broken(_snapshot):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(seen.append)
    store.update("/a", 1)

    assert store.get_number("/a") == 1
    assert seen == [{"a": 1}]


# ============================================================================
# Scoped contexts
# ============================================================================

@pytest.mark.unit
def test_scoped_context_reads_item(store):
    """A context scoped to an item resolves relative paths inside it."""
    item = store.create_context("/items/0")

    assert isinstance(item, ScopedDataContext)
    assert item.get_string("/name") == "Apple"
    assert item.get_number("/price") == 1.25
    assert item.get("/") == {"name": "Apple", "price": 1.25}


@pytest.mark.unit
def test_nested_base_paths():
    """with_base_path concatenates prefixes."""
    store = DataStore({"a": {"b": {"c": "deep"}}})
    context = store.with_base_path("/a").with_base_path("/b")

    assert context.base_path == "/a/b"
    assert context.get_string("/c") == "deep"


@pytest.mark.unit
def test_scoped_writes_go_to_store(store):
    """Writes through a scoped context land under its prefix."""
    user = store.create_context("/user")
    user.update("/name", "Grace")
    assert store.get_string("/user/name") == "Grace"

    user.delete("/email")
    assert not store.contains("/user/email")
