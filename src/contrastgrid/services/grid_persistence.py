"""Grid state persistence.

The core talks to storage through a tiny key-value port so it has no ambient
dependency on a concrete mechanism:

- KeyValueStore protocol: get(key) -> str | None, set(key, value)
- JsonFileStore: one ``<key>.json`` file per key under a base directory,
  written atomically (temp file + replace)
- InMemoryStore: dict backed, for tests and headless use
- GridPersistence: load()/save() of PersistedState under one key

Loading is forgiving: a missing key or undecodable JSON yields None, and a
malformed axis falls back to the caller supplied default. Saving raises
StorageError; callers decide whether to log or surface it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..config import settings
from ..errors import StorageError
from ..models import PersistedState

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "InMemoryStore",
    "GridPersistence",
]

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...  # pragma: no cover - structural

    def set(self, key: str, value: str) -> None: ...  # pragma: no cover - structural


class InMemoryStore:
    def __init__(self, initial: Dict[str, str] | None = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """File-backed key-value store rooted at `base_dir` (defaults to settings.DATA_DIR)."""

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path(settings.DATA_DIR)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError:
            _logger.warning("Could not read %s", path, exc_info=True)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(path.suffix + ".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StorageError(f"Could not write {path}", context={"key": key}) from exc


class GridPersistence:
    def __init__(self, store: KeyValueStore, key: str = settings.GRID_STATE_KEY):
        self.store = store
        self.key = key

    def load(self, default: PersistedState | None = None) -> Optional[PersistedState]:
        """Return the stored state, or None when absent or unreadable.

        With `default`, an axis that is malformed is replaced by the default's
        axis while the other axis is kept.
        """
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            return PersistedState.from_dict(data, default=default)
        except ValueError:  # JSONDecodeError is a ValueError
            _logger.warning("Discarding corrupt persisted grid state under %r", self.key)
            return None

    def save(self, state: PersistedState) -> None:
        text = json.dumps(state.to_dict(), ensure_ascii=False)
        try:
            self.store.set(self.key, text)
        except StorageError:
            raise
        except Exception as exc:  # noqa: BLE001 - foreign stores may raise anything
            raise StorageError(f"Could not save grid state: {exc}", context={"key": self.key}) from exc
