import json

from contrastgrid.cli import main
from contrastgrid.models import ColorEntry, PersistedState
from contrastgrid.services.grid_persistence import GridPersistence, JsonFileStore


def test_check_prints_ratio_and_level(capsys):
    assert main(["check", "#FFFFFF", "#000000"]) == 0
    assert capsys.readouterr().out.strip() == "21.00 AAA"


def test_check_invalid_color_exits_nonzero(capsys):
    assert main(["check", "nope", "#000000"]) == 1
    assert capsys.readouterr().out.strip() == "0.00 FAIL"


def test_check_json(capsys):
    main(["check", "#767676", "#FFFFFF", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["level"] == "AA"
    assert data["ratio"] == 4.54


def test_convert_json(capsys):
    assert main(["convert", "red", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"hex": "#FF0000", "rgb": [255, 0, 0], "hsl": [0, 100, 50]}


def test_convert_invalid(capsys):
    assert main(["convert", "zzz"]) == 1
    assert "Invalid color" in capsys.readouterr().err


def test_grid_json_dimensions(capsys):
    assert main(["grid", "--fg", "#FFFFFF", "#000000", "--bg", "#000000", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["rows"]) == 1
    assert len(data["cells"]) == 1
    assert len(data["cells"][0]) == 2
    assert data["cells"][0][0] == {"ratio": 21.0, "level": "AAA"}
    assert data["cells"][0][1] == {"ratio": 1.0, "level": "FAIL"}


def test_grid_text_includes_labels(capsys):
    main(["grid", "--fg", "#FFFFFF, Body", "--bg", "#000000 Ink"])
    out = capsys.readouterr().out
    assert "#FFFFFF (Body)" in out
    assert "#000000 (Ink)" in out
    assert "21.00 AAA" in out


def test_state_reads_saved_grid(tmp_path, capsys):
    state = PersistedState(fg=(ColorEntry("#000000"),), bg=(ColorEntry("#FFFFFF"), ColorEntry("#000000")))
    GridPersistence(JsonFileStore(tmp_path)).save(state)
    assert main(["state", "--data-dir", str(tmp_path), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [c["color"] for c in data["rows"]] == ["#FFFFFF", "#000000"]
    assert data["cells"][1][0]["level"] == "FAIL"
