import random

import pytest

from contrastgrid.design.contrast import ContrastLevel
from contrastgrid.design.random_palette import RandomPolicy
from contrastgrid.models import Axis, ColorEntry
from contrastgrid.services.event_bus import GridEvent
from contrastgrid.services.grid_persistence import GridPersistence, InMemoryStore
from contrastgrid.viewmodels.contrast_grid_viewmodel import GridState


def colors(entries):
    return [e.color for e in entries]


def test_defaults_when_nothing_persisted(grid):
    assert colors(grid.columns()) == ["#FFFFFF", "#000000", "#FF0000"]
    assert colors(grid.rows()) == ["#000000", "#FFFFFF", "#0000FF"]


def test_cell_ratio_uses_row_background_and_column_foreground(grid):
    # column 0 = white text, row 0 = black background
    result = grid.cell_ratio(0, 0)
    assert result.ratio == pytest.approx(21.0)
    assert result.level is ContrastLevel.AAA
    # white on white
    assert grid.cell_ratio(1, 0).ratio == pytest.approx(1.0)


def test_cell_ratio_invalid_entry_is_fail(grid):
    grid.set_axis_text("fg", "not-a-color\n#FFFFFF")
    result = grid.cell_ratio(0, 0)
    assert result.ratio == 0
    assert result.level is ContrastLevel.FAIL
    assert grid.cell_ratio(0, 1).ratio == pytest.approx(21.0)


def test_cell_ratio_out_of_range_is_fail(grid):
    result = grid.cell_ratio(10, 0)
    assert result.ratio == 0
    assert result.level is ContrastLevel.FAIL


def test_grid_dimensions(grid):
    grid.set_axis_text(Axis.BACKGROUND, "#000\n#FFF")
    matrix = grid.grid()
    assert len(matrix) == 2
    assert all(len(row) == 3 for row in matrix)


def test_set_axis_text_round_trips(grid):
    text = "#FFFFFF, Body\nFF0000 Error\n\n#000"
    grid.set_axis_text("fg", text)
    assert grid.axis_text("fg") == "#FFFFFF, Body\n#FF0000 Error\n\n#000"
    assert grid.columns()[0].label == " Body"


def test_set_axis_persists(grid, store):
    grid.set_axis("bg", [ColorEntry("#123456", "Navy", " ")])
    reloaded = GridState(GridPersistence(store))
    assert reloaded.rows() == [ColorEntry("#123456", "Navy", " ")]


def test_update_entry_color_keeps_label(grid):
    grid.set_axis_text("fg", "#FF0000, Red")
    assert grid.update_entry_color("fg", 0, "#00FF00") is True
    assert grid.columns() == [ColorEntry("#00FF00", " Red", ",")]


def test_update_entry_color_stale_index_is_noop(grid):
    before = grid.snapshot()
    assert grid.update_entry_color("fg", 3, "#00FF00") is False
    assert grid.update_entry_color("bg", -1, "#00FF00") is False
    assert grid.snapshot() == before


def test_reorder_axis(grid):
    grid.set_axis_text("fg", "A\nB\nC")
    assert grid.reorder("fg", 0, 2) is True
    assert colors(grid.columns()) == ["B", "C", "A"]
    assert grid.reorder("fg", 1, 1) is False
    assert grid.reorder("fg", 0, 5) is False
    assert colors(grid.columns()) == ["B", "C", "A"]


def test_axes_are_independent(grid):
    grid.reorder("bg", 0, 2)
    assert colors(grid.columns()) == ["#FFFFFF", "#000000", "#FF0000"]
    assert colors(grid.rows()) == ["#FFFFFF", "#0000FF", "#000000"]


def test_keyboard_move(grid):
    result = grid.move("bg", 2, "ArrowUp")
    assert result.changed
    assert colors(grid.rows()) == ["#000000", "#0000FF", "#FFFFFF"]
    assert grid.move("bg", 0, "unknown").changed is False


def test_clear_resets_to_single_labelled_entries(grid, store):
    grid.clear()
    assert grid.columns() == [ColorEntry("#FFFFFF", "White", " ")]
    assert grid.rows() == [ColorEntry("#000000", "Black", " ")]
    assert GridState(GridPersistence(store)).snapshot() == grid.snapshot()


def test_randomize_fixed_count(grid):
    grid.randomize(RandomPolicy(mode="fixed", count=4))
    assert len(grid.columns()) == 4
    assert len(grid.rows()) == 4
    assert all(c.startswith("#") and len(c) == 7 for c in colors(grid.columns()))


def test_randomize_is_deterministic_with_seed():
    a = GridState(GridPersistence(InMemoryStore()), rng=random.Random(99))
    b = GridState(GridPersistence(InMemoryStore()), rng=random.Random(99))
    a.randomize()
    b.randomize()
    assert a.snapshot() == b.snapshot()


def test_clear_randomize_reload_round_trip(grid, store):
    grid.clear()
    grid.randomize(RandomPolicy(mode="range", min_count=2, max_count=5, label_prefix="Swatch"))
    reloaded = GridState(GridPersistence(store))
    assert reloaded.snapshot() == grid.snapshot()


def test_mutations_publish_events(grid):
    seen = []
    for name in (GridEvent.AXIS_CHANGED, GridEvent.GRID_CLEARED, GridEvent.GRID_RANDOMIZED):
        grid.bus.subscribe(name, lambda evt: seen.append((evt.name, evt.payload)))
    grid.set_axis_text("fg", "#000")
    grid.clear()
    grid.randomize()
    assert seen == [("axis_changed", "fg"), ("grid_cleared", None), ("grid_randomized", None)]


class ExplodingStore(InMemoryStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


def test_save_failure_keeps_state_in_memory():
    grid = GridState(GridPersistence(ExplodingStore()))
    failures = []
    grid.bus.subscribe(GridEvent.PERSISTENCE_FAILED, lambda evt: failures.append(evt.payload))
    grid.set_axis_text("fg", "#ABCDEF")
    assert colors(grid.columns()) == ["#ABCDEF"]
    assert grid.last_save_error is not None
    assert len(failures) == 1


def test_corrupt_state_falls_back_to_defaults():
    store = InMemoryStore({"contrast-grid-colors": "{not json"})
    grid = GridState(GridPersistence(store))
    assert colors(grid.columns()) == ["#FFFFFF", "#000000", "#FF0000"]
    assert colors(grid.rows()) == ["#000000", "#FFFFFF", "#0000FF"]


def test_corrupt_axis_falls_back_independently():
    store = InMemoryStore({"contrast-grid-colors": '{"fg": "oops", "bg": [{"color": "#123456"}]}'})
    grid = GridState(GridPersistence(store))
    assert colors(grid.columns()) == ["#FFFFFF", "#000000", "#FF0000"]
    assert colors(grid.rows()) == ["#123456"]
