"""List reordering for grid axes.

Headless helpers shared by pointer drag-and-drop and the keyboard fallback:

 - reorder(items, from_index, to_index): pure pop/insert returning a new list.
 - move_up / move_down / move_top / move_bottom / move_to: keyboard operations
   returning a ReorderActionResult with the new order, the index that should
   receive focus and a screen-reader announcement.
 - interpret_key_command(command): maps key names to operation verbs.

Inputs are never mutated. Out-of-range indices produce an unchanged result
instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Sequence, Tuple, TypeVar

__all__ = [
    "ReorderActionResult",
    "reorder",
    "move_up",
    "move_down",
    "move_top",
    "move_bottom",
    "move_to",
    "interpret_key_command",
    "KEY_OPERATIONS",
]

T = TypeVar("T")


@dataclass(frozen=True)
class ReorderActionResult(Generic[T]):
    items: Tuple[T, ...]
    changed: bool
    focus_index: int
    announcement: str


def _in_range(items: Sequence[T], index: int) -> bool:
    return 0 <= index < len(items)


def reorder(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Move the item at `from_index` to `to_index`, shifting the items between.

    Same index or an index outside the list returns an unchanged copy.
    """
    lst = list(items)
    if from_index == to_index or not _in_range(lst, from_index) or not _in_range(lst, to_index):
        return lst
    item = lst.pop(from_index)
    lst.insert(to_index, item)
    return lst


def _apply(items: Sequence[T], index: int, target: int, verb: str) -> ReorderActionResult[T]:
    if index == target or not _in_range(items, index) or not _in_range(items, target):
        return ReorderActionResult(tuple(items), False, index, "No change")
    new_items = reorder(items, index, target)
    announcement = f"Moved item from {index + 1} to {target + 1} ({verb})."
    return ReorderActionResult(tuple(new_items), True, target, announcement)


def move_up(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _apply(items, index, index - 1 if index > 0 else index, "move-up")


def move_down(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _apply(items, index, index + 1 if index < len(items) - 1 else index, "move-down")


def move_top(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _apply(items, index, 0, "move-top")


def move_bottom(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _apply(items, index, len(items) - 1, "move-bottom")


def move_to(items: Sequence[T], index: int, target_index: int) -> ReorderActionResult[T]:
    return _apply(items, index, target_index, "move-to")


KEY_OPERATIONS: Dict[str, Callable[[Sequence, int], ReorderActionResult]] = {
    "up": move_up,
    "down": move_down,
    "top": move_top,
    "bottom": move_bottom,
}


def interpret_key_command(command: str) -> str:
    """Map an abstract key command to an operation verb.

    Returns one of: up, down, top, bottom. Unknown commands return "".
    """
    cmd = command.lower()
    if cmd in {"up", "arrowup", "alt+up"}:
        return "up"
    if cmd in {"down", "arrowdown", "alt+down"}:
        return "down"
    if cmd in {"home", "ctrl+home", "top"}:
        return "top"
    if cmd in {"end", "ctrl+end", "bottom"}:
        return "bottom"
    return ""
