"""CLI entry point for headless contrast checks.

Subcommands:
  grid     --fg SPEC... --bg SPEC...   matrix of ratios (rows = bg, columns = fg)
  check    FG BG                       single ratio + WCAG level
  convert  SPEC                        hex / rgb / hsl views of one color
  state    [--data-dir DIR]            matrix for the persisted GUI state

Every subcommand accepts --json. Entries follow the text area syntax
("#FF0000, Label"), so labels are allowed in grid arguments.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Sequence

from .config import settings
from .design import color_model
from .design.contrast import evaluate, format_ratio
from .models import ColorEntry
from .services.entry_parser import EntryParser
from .services.grid_persistence import GridPersistence, JsonFileStore
from .viewmodels.contrast_grid_viewmodel import GridState


def _name(entry: ColorEntry) -> str:
    return f"{entry.color} ({entry.label.strip()})" if entry.label and entry.label.strip() else entry.color


def _matrix(grid: GridState) -> Dict[str, Any]:
    cells = grid.grid()
    return {
        "columns": [e.to_dict() for e in grid.columns()],
        "rows": [e.to_dict() for e in grid.rows()],
        "cells": [[{"ratio": round(c.ratio, 2), "level": c.level.value} for c in row] for row in cells],
    }


def _print_grid(grid: GridState) -> None:
    cols = grid.columns()
    header = ["bg \\ fg"] + [_name(c) for c in cols]
    lines = [header]
    for r, row_entry in enumerate(grid.rows()):
        line = [_name(row_entry)]
        for c in range(len(cols)):
            result = grid.cell_ratio(r, c)
            line.append(f"{format_ratio(result.ratio)} {result.level.value}")
        lines.append(line)
    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    for line in lines:
        print("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(line)))


def cmd_grid(args: argparse.Namespace) -> int:
    parser = EntryParser()
    grid = GridState()
    grid.set_axis("fg", [parser.parse(s) for s in args.fg])
    grid.set_axis("bg", [parser.parse(s) for s in args.bg])
    if args.json:
        print(json.dumps(_matrix(grid), indent=2, ensure_ascii=False))
    else:
        _print_grid(grid)
    return 0


def cmd_state(args: argparse.Namespace) -> int:
    store = JsonFileStore(args.data_dir or settings.DATA_DIR)
    grid = GridState(GridPersistence(store))
    if args.json:
        print(json.dumps(_matrix(grid), indent=2, ensure_ascii=False))
    else:
        _print_grid(grid)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    result = evaluate(args.fg, args.bg)
    if args.json:
        print(json.dumps({"fg": args.fg, "bg": args.bg, "ratio": round(result.ratio, 2), "level": result.level.value}))
    else:
        print(f"{format_ratio(result.ratio)} {result.level.value}")
    return 0 if result.computable else 1


def cmd_convert(args: argparse.Namespace) -> int:
    parsed = color_model.parse_color(args.color)
    if isinstance(parsed, color_model.InvalidColor):
        print(f"Invalid color: {parsed.raw}", file=sys.stderr)
        return 1
    hsl = color_model.to_hsl(parsed.hex)
    data = {"hex": parsed.hex, "rgb": list(parsed.rgb), "hsl": list(hsl)}
    if args.json:
        print(json.dumps(data))
    else:
        print(parsed.hex)
        print("rgb({}, {}, {})".format(*parsed.rgb))
        print("hsl({}, {}%, {}%)".format(*hsl))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="contrast-grid-cli")
    sub = p.add_subparsers(dest="command", required=True)

    grid = sub.add_parser("grid", help="Print contrast matrix for given colors")
    grid.add_argument("--fg", nargs="+", required=True, help="Foreground entries (columns)")
    grid.add_argument("--bg", nargs="+", required=True, help="Background entries (rows)")
    grid.add_argument("--json", action="store_true")
    grid.set_defaults(func=cmd_grid)

    check = sub.add_parser("check", help="Contrast ratio of a single pair")
    check.add_argument("fg")
    check.add_argument("bg")
    check.add_argument("--json", action="store_true")
    check.set_defaults(func=cmd_check)

    convert = sub.add_parser("convert", help="Show hex/rgb/hsl of a color")
    convert.add_argument("color")
    convert.add_argument("--json", action="store_true")
    convert.set_defaults(func=cmd_convert)

    state = sub.add_parser("state", help="Print the grid saved by the GUI")
    state.add_argument("--data-dir", required=False, help="Directory holding the saved state")
    state.add_argument("--json", action="store_true")
    state.set_defaults(func=cmd_state)
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
