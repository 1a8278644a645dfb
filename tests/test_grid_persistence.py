import json
from pathlib import Path

import pytest

from contrastgrid.errors import StorageError
from contrastgrid.models import ColorEntry, PersistedState, default_state
from contrastgrid.services.grid_persistence import GridPersistence, InMemoryStore, JsonFileStore


def _state():
    return PersistedState(
        fg=(ColorEntry("#FFFFFF", " Text", ","), ColorEntry("#FF0000")),
        bg=(ColorEntry("#000000", "Ink", " "),),
    )


def test_load_returns_none_when_missing():
    assert GridPersistence(InMemoryStore()).load() is None


def test_save_and_reload_round_trip_in_memory():
    p = GridPersistence(InMemoryStore())
    p.save(_state())
    assert p.load() == _state()


def test_serialized_shape():
    store = InMemoryStore()
    GridPersistence(store, key="k").save(_state())
    data = json.loads(store.get("k"))
    assert data == {
        "fg": [{"color": "#FFFFFF", "label": " Text"}, {"color": "#FF0000"}],
        "bg": [{"color": "#000000", "label": "Ink", "delimiter": " "}],
    }


def test_legacy_string_list_is_accepted():
    store = InMemoryStore({"k": json.dumps({"fg": ["#FFF", "red"], "bg": ["#000"]})})
    state = GridPersistence(store, key="k").load()
    assert state.fg == (ColorEntry("#FFF"), ColorEntry("red"))
    assert state.bg == (ColorEntry("#000"),)


def test_corrupt_json_returns_none():
    store = InMemoryStore({"k": "not json"})
    assert GridPersistence(store, key="k").load(default=default_state()) is None


def test_malformed_axis_without_default_returns_none():
    store = InMemoryStore({"k": json.dumps({"fg": [{"label": "no color"}], "bg": []})})
    assert GridPersistence(store, key="k").load() is None


def test_malformed_axis_with_default_uses_default_axis():
    store = InMemoryStore({"k": json.dumps({"fg": [42], "bg": [{"color": "#111111"}]})})
    state = GridPersistence(store, key="k").load(default=default_state())
    assert state.fg == default_state().fg
    assert state.bg == (ColorEntry("#111111"),)


def test_json_file_store_round_trip(tmp_path: Path):
    p = GridPersistence(JsonFileStore(tmp_path), key="grid")
    p.save(_state())
    assert (tmp_path / "grid.json").exists()
    assert not (tmp_path / "grid.json.tmp").exists()
    assert GridPersistence(JsonFileStore(tmp_path), key="grid").load() == _state()


def test_json_file_store_corrupt_file(tmp_path: Path):
    (tmp_path / "grid.json").write_text("{{{", encoding="utf-8")
    assert GridPersistence(JsonFileStore(tmp_path), key="grid").load() is None


def test_json_file_store_write_failure_raises_storage_error(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    p = GridPersistence(JsonFileStore(blocker / "nested"), key="grid")
    with pytest.raises(StorageError):
        p.save(_state())
