"""EventBus core.

Lightweight synchronous publish/subscribe used by GridState and the picker to
notify views of state changes.

Goals:
 - Decouple the headless core from the Qt layer
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "GridEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class GridEvent(str, Enum):  # str subclass so payloads/names stay JSON friendly
    AXIS_CHANGED = "axis_changed"
    GRID_CLEARED = "grid_cleared"
    GRID_RANDOMIZED = "grid_randomized"
    PERSISTENCE_FAILED = "persistence_failed"
    PICKER_OPENED = "picker_opened"
    PICKER_CLOSED = "picker_closed"
    THEME_CHANGED = "theme_changed"


@dataclass
class Event:
    name: str  # matches GridEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | GridEvent) -> str:
    return name.value if isinstance(name, GridEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run outside the lock (subscribers are snapshotted first) so a
    handler may subscribe or unsubscribe without deadlocking.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, Exception]] = []

    def subscribe(
        self, name: str | GridEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | GridEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.exception("Handler for %s failed", key)
                with self._lock:
                    self._errors.append((evt, exc))
            if sub.once:
                finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | GridEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, Exception]]:
        with self._lock:
            return list(self._errors)
