"""Entry parser for the foreground/background text areas.

Each line of text becomes one ColorEntry: a color token followed by an
optional label. The split happens at the first comma or space, whichever
comes first. Delimiters inside parentheses do not split, so functional
notations such as ``rgb(0, 0, 0) Body text`` keep their arguments together.

Two behaviours are selectable through ParsePolicy:

- exact preservation (default): every line is kept, blank ones included, and
  labels are stored verbatim so ``format(parse(line)) == line``;
- trim mode: lines are stripped, blank lines dropped, labels stripped and
  re-rendered in a canonical ``"<color>, <label>"`` / ``"<color> <label>"`` form.

A bare six-digit hex token (``FF00FF``) is stored as ``#FF00FF``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..design.color_model import normalize_color_token
from ..models import ColorEntry

__all__ = ["ParsePolicy", "EntryParser", "DELIMITERS", "remap_cursor"]

DELIMITERS = (",", " ")


@dataclass(frozen=True)
class ParsePolicy:
    trim_blank_lines: bool = False
    preserve_label_whitespace: bool = True


def _split_index(line: str) -> Optional[int]:
    depth = 0
    for idx, ch in enumerate(line):
        if ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch in DELIMITERS and depth == 0:
            return idx
    return None


class EntryParser:
    def __init__(self, policy: ParsePolicy | None = None):
        self.policy = policy or ParsePolicy()

    def parse(self, line: str) -> ColorEntry:
        if not self.policy.preserve_label_whitespace:
            line = line.strip()
        idx = _split_index(line)
        if idx is None:
            return ColorEntry(color=normalize_color_token(line))
        color = normalize_color_token(line[:idx])
        rest = line[idx + 1 :]
        label: Optional[str] = rest
        if not self.policy.preserve_label_whitespace:
            label = rest.strip() or None
        return ColorEntry(color=color, label=label, delimiter=line[idx])

    def format(self, entry: ColorEntry) -> str:
        if entry.label is None:
            return entry.color
        if self.policy.preserve_label_whitespace:
            return f"{entry.color}{entry.delimiter}{entry.label}"
        sep = ", " if entry.delimiter == "," else " "
        return f"{entry.color}{sep}{entry.label.strip()}"

    def parse_text(self, text: str) -> List[ColorEntry]:
        """Parse a multi-line text area; entry order follows line order."""
        if not text:
            return []
        lines = text.split("\n")
        if self.policy.trim_blank_lines:
            lines = [ln for ln in lines if ln.strip()]
        return [self.parse(ln) for ln in lines]

    def format_text(self, entries: Iterable[ColorEntry]) -> str:
        return "\n".join(self.format(e) for e in entries)


def remap_cursor(old_text: str, new_text: str, position: int) -> int:
    """Carry a cursor position over a canonical rewrite of a text area.

    The rewrite only prefixes bare hex tokens with '#', so on the cursor's line
    the position moves right by the number of characters added in front of it.
    When the line structure changed the position is clamped instead.
    """
    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    if len(old_lines) != len(new_lines):
        return min(position, len(new_text))
    offset = 0
    for old_line, new_line in zip(old_lines, new_lines):
        if position <= len(old_line):
            added = len(new_line) - len(old_line) if new_line.endswith(old_line) else 0
            column = position + added if position > 0 else 0
            return offset + min(column, len(new_line))
        position -= len(old_line) + 1
        offset += len(new_line) + 1
    return len(new_text)
