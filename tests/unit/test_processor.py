"""Tests for the surface operation processor."""

import pytest

from a2ui_core.core import safe_json_dumps
from a2ui_core.model import DeleteSurface
from a2ui_core.state import SurfaceProcessor


def snapshot(*operations):
    return {"operations": list(operations)}


def create(surface_id="main", **fields):
    return {"createSurface": {"surfaceId": surface_id, **fields}}


def components(surface_id="main", *items):
    return {"updateComponents": {"surfaceId": surface_id, "components": list(items)}}


def data(surface_id="main", **fields):
    return {"updateDataModel": {"surfaceId": surface_id, **fields}}


def delete(surface_id="main"):
    return {"deleteSurface": {"surfaceId": surface_id}}


# ============================================================================
# End to end
# ============================================================================

@pytest.mark.unit
def test_snapshot_builds_surface(processor, sample_operations):
    """A snapshot creates a surface with components and data."""
    applied = processor.process_snapshot(snapshot(*sample_operations), message_id="msg-1")

    assert applied == 3
    surface = processor.get_surface("main")
    assert surface.catalog_id == "https://a2ui.org/catalogs/standard"
    assert surface.theme == {"primaryColor": "#3366ff"}
    assert surface.root_component.component_type == "Column"
    assert surface.components["title"].properties == {"text": {"path": "/title"}, "variant": "h1"}
    assert surface.components["list"].weight == 1
    assert processor.get_data_store("main").get_string("/items/1/name") == "Pear"


@pytest.mark.unit
def test_full_lifecycle(processor):
    """Create, populate, bind data, then delete."""
    processor.process_snapshot(
        snapshot(
            create(catalogId="c"),
            components("main", {"id": "root", "component": "Text", "text": {"path": "/message"}}),
            data(path="/message", value="Hello"),
        )
    )
    assert processor.count() == 1
    assert processor.get_data_store("main").get_string("/message") == "Hello"

    processor.process_snapshot(snapshot(delete()))

    assert processor.count() == 0
    assert processor.get_surface("main") is None
    assert processor.get_data_store("main") is None


@pytest.mark.unit
def test_snapshot_from_json_text(processor, sample_operations):
    """Snapshots may arrive as JSON text or bytes."""
    text = safe_json_dumps(snapshot(*sample_operations))

    assert processor.process_snapshot(text) == 3
    assert processor.process_snapshot(text.encode("utf-8")) == 3
    assert processor.count() == 1


@pytest.mark.unit
@pytest.mark.parametrize("message", ["{not json", {"ops": []}, {"operations": "nope"}, [create()], None])
def test_bad_snapshot_messages(processor, message):
    """Messages without an operations array apply nothing."""
    assert processor.process_snapshot(message) == 0
    assert processor.count() == 0


# ============================================================================
# Operation semantics
# ============================================================================

@pytest.mark.unit
def test_create_resets_metadata_only(processor):
    """A second createSurface overwrites metadata and keeps content."""
    processor.apply_snapshot(
        [
            create(catalogId="a", theme={"x": 1}, sendDataModel=True),
            components("main", {"id": "root", "component": "Text"}),
            data(path="/k", value=1),
            create(catalogId="b"),
        ]
    )
    surface = processor.get_surface("main")

    assert surface.catalog_id == "b"
    assert surface.theme is None
    assert surface.send_data_model is False
    assert surface.root_component is not None
    assert processor.get_data_store("main").get_number("/k") == 1


@pytest.mark.unit
def test_implicit_creation(processor):
    """Updates to unknown surfaces create them."""
    processor.apply_snapshot(
        [
            components("a", {"id": "root", "component": "Text"}),
            data("b", path="/x", value=1),
        ]
    )

    assert set(processor.list_surfaces()) == {"a", "b"}
    assert processor.get_surface("b").catalog_id is None


@pytest.mark.unit
def test_components_replace_by_id(processor):
    """Updating a component id replaces it wholesale."""
    processor.apply_snapshot(
        [
            components("main", {"id": "t", "component": "Text", "text": "a", "variant": "h1"}),
            components("main", {"id": "t", "component": "Text", "text": "b"}),
        ]
    )
    assert processor.get_surface("main").components["t"].properties == {"text": "b"}


@pytest.mark.unit
def test_root_absent_is_not_an_error(processor):
    """A surface may exist without a root component."""
    processor.apply_snapshot([components("main", {"id": "child", "component": "Text"})])
    assert processor.get_surface("main").root_component is None


@pytest.mark.unit
def test_value_null_versus_omitted(processor):
    """Explicit null writes null; an omitted value deletes the key."""
    processor.apply_snapshot(
        [
            data(value={"a": 1, "b": 2}),
            data(path="/a", value=None),
            data(path="/b"),
        ]
    )
    store = processor.get_data_store("main")

    assert store.snapshot == {"a": None}
    assert store.contains("/a")
    assert not store.contains("/b")


@pytest.mark.unit
def test_update_data_model_without_path_replaces_root(processor):
    """A value without a path replaces the whole tree."""
    processor.apply_snapshot([data(value={"a": 1}), data(value={"b": 2})])
    assert processor.get_data_store("main").snapshot == {"b": 2}


@pytest.mark.unit
def test_delete_then_recreate_starts_fresh(processor):
    """A surface referenced after deletion starts empty."""
    processor.apply_snapshot(
        [
            components("main", {"id": "root", "component": "Text"}),
            data(path="/k", value=1),
            delete(),
            data(path="/other", value=2),
        ]
    )
    surface = processor.get_surface("main")

    assert surface.components == {}
    assert processor.get_data_store("main").snapshot == {"other": 2}


@pytest.mark.unit
def test_delete_unknown_surface_is_harmless(processor):
    """Deleting a surface that does not exist changes nothing."""
    assert processor.apply_operation(delete("ghost")) is True
    assert processor.count() == 0


# ============================================================================
# Robustness
# ============================================================================

@pytest.mark.unit
def test_malformed_operations_are_dropped(processor):
    """Bad operations are skipped and later ones still apply."""
    applied = processor.apply_snapshot(
        [
            {"createSurface": {}},
            "not an object",
            {"unknownOperation": {"surfaceId": "main"}},
            components("main", {"id": "root", "component": "Text"}, {"component": "NoId"}),
            create("ok"),
        ]
    )

    assert applied == 1
    assert set(processor.list_surfaces()) == {"ok"}


@pytest.mark.unit
def test_deep_operations_are_dropped(small_settings):
    """Operations nested beyond the configured depth are dropped."""
    processor = SurfaceProcessor(small_settings)
    deep = {"a": {"b": {"c": {"d": {"e": {"f": 1}}}}}}

    assert processor.apply_operation(data(value=deep)) is False
    assert processor.apply_operation(data(value={"a": 1})) is True


@pytest.mark.unit
def test_apply_typed_operation(processor):
    """Already decoded operations apply directly."""
    processor.apply_operation(create("x"))
    assert processor.apply_operation(DeleteSurface(surface_id="x")) is True
    assert "x" not in processor


@pytest.mark.unit
def test_mistyped_optional_fields_still_apply(processor):
    """Wrongly typed optional fields do not drop the operation."""
    applied = processor.apply_snapshot(
        [
            create("s", catalogId=7, sendDataModel=True),
            data("s", path=3, value={"a": 1}),
        ]
    )

    assert applied == 2
    surface = processor.get_surface("s")
    assert surface.catalog_id == "7"
    assert surface.send_data_model is True
    assert processor.get_data_store("s").snapshot == {"3": {"a": 1}}


# ============================================================================
# Deltas
# ============================================================================

@pytest.mark.unit
def test_delta_appends_operations(processor):
    """Only add operations under /operations/ act."""
    patch = [
        {"op": "add", "path": "/operations/-", "value": create()},
        {"op": "add", "path": "/operations/1", "value": data(path="/n", value=5)},
        {"op": "replace", "path": "/operations/0", "value": delete()},
        {"op": "add", "path": "/other/0", "value": delete()},
        {"op": "add", "path": "/operations/2"},
        "garbage",
    ]

    assert processor.process_delta(patch, message_id="msg-2") == 2
    assert processor.get_data_store("main").get_number("/n") == 5


@pytest.mark.unit
def test_delta_from_json_text(processor):
    """Deltas may arrive as JSON text."""
    patch = safe_json_dumps([{"op": "add", "path": "/operations/0", "value": create("t")}])
    assert processor.process_delta(patch) == 1
    assert processor.process_delta("{broken") == 0
    assert processor.process_delta({"op": "add"}) == 0


# ============================================================================
# Queries
# ============================================================================

@pytest.mark.unit
def test_definitions_are_point_in_time(processor):
    """Returned definitions do not change with later operations."""
    processor.apply_operation(components("main", {"id": "root", "component": "Text", "text": "a"}))
    before = processor.get_surface("main")

    processor.apply_operation(components("main", {"id": "root", "component": "Text", "text": "b"}))

    assert before.root_component.properties == {"text": "a"}
    assert processor.get_surface("main").root_component.properties == {"text": "b"}


@pytest.mark.unit
def test_replay_is_idempotent(sample_operations):
    """Replaying identical operations yields an identical state."""
    once = SurfaceProcessor()
    once.apply_snapshot(sample_operations)

    twice = SurfaceProcessor()
    twice.apply_snapshot(sample_operations)
    twice.apply_snapshot(sample_operations)

    assert once.get_surface("main").fingerprint() == twice.get_surface("main").fingerprint()
    assert once.get_data_store("main").snapshot == twice.get_data_store("main").snapshot


@pytest.mark.unit
def test_fingerprint_ignores_arrival_order():
    """Component arrival order does not affect the fingerprint."""
    a = SurfaceProcessor()
    a.apply_snapshot([components("s", {"id": "x", "component": "Text"}, {"id": "y", "component": "Text"})])
    b = SurfaceProcessor()
    b.apply_snapshot([components("s", {"id": "y", "component": "Text"}, {"id": "x", "component": "Text"})])

    assert a.get_surface("s").fingerprint() == b.get_surface("s").fingerprint()

    b.apply_operation(components("s", {"id": "x", "component": "Button"}))
    assert a.get_surface("s").fingerprint() != b.get_surface("s").fingerprint()


@pytest.mark.unit
def test_collect_data_models(processor):
    """Only surfaces that opted in report their data."""
    processor.apply_snapshot(
        [
            create("shared", sendDataModel=True),
            data("shared", path="/form/name", value="Ada"),
            create("private"),
            data("private", path="/secret", value=1),
        ]
    )

    assert processor.collect_data_models() == {"shared": {"form": {"name": "Ada"}}}


@pytest.mark.unit
def test_clear_and_len(processor):
    """clear removes everything."""
    processor.apply_snapshot([create("a"), create("b")])
    assert len(processor) == 2

    processor.clear()
    assert len(processor) == 0
    assert processor.list_surfaces() == {}
