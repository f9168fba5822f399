from __future__ import annotations

import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import orjson

from ..domain.errors import StorageError

DEFAULT_STORE_STATE: Dict[str, Any] = {
    "activities": [],
    "counters": {"activity": 0},
    "metadata": {"schema_version": 1},
}


class ActivityStore:
    """Single-file JSON document store for activity records.

    The file is shared with other processes (the CLI and the server both open
    the default store), so the cached state is dropped whenever the file's
    modification time or size no longer matches the last read or write.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._state: Optional[Dict[str, Any]] = None
        self._signature: Optional[Tuple[int, int]] = None
        self._lock = threading.RLock()

    def _file_signature(self) -> Optional[Tuple[int, int]]:
        try:
            stat = self._path.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Unable to open activity store at {self._path}: {exc}") from exc
        return stat.st_mtime_ns, stat.st_size

    def _ensure_materialized(self) -> None:
        signature = self._file_signature()
        if self._state is not None and signature is not None and signature == self._signature:
            return
        try:
            if signature is None:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._state = deepcopy(DEFAULT_STORE_STATE)
                self._write()
                return
            raw = self._path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Unable to open activity store at {self._path}: {exc}") from exc
        if not raw.strip():
            self._state = deepcopy(DEFAULT_STORE_STATE)
            self._signature = signature
            return
        try:
            state = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise StorageError(f"Activity store at {self._path} is not valid JSON") from exc
        if not isinstance(state, dict):
            raise StorageError(f"Activity store at {self._path} must hold a JSON object")
        # Backfill missing keys written by older versions.
        for key, value in DEFAULT_STORE_STATE.items():
            if key not in state:
                state[key] = deepcopy(value)
        self._state = state
        self._signature = signature

    def _write(self) -> None:
        payload = orjson.dumps(self._state, option=orjson.OPT_INDENT_2)
        try:
            self._path.write_bytes(payload + b"\n")
        except OSError as exc:
            raise StorageError(f"Unable to write activity store at {self._path}: {exc}") from exc
        self._signature = self._file_signature()

    def read(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        with self._lock:
            self._ensure_materialized()
            assert self._state is not None
            return callback(self._state)

    def mutate(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        with self._lock:
            self._ensure_materialized()
            assert self._state is not None
            # Work on a copy so a failed write leaves the cached state untouched.
            working = deepcopy(self._state)
            result = callback(working)
            previous, self._state = self._state, working
            try:
                self._write()
            except StorageError:
                self._state = previous
                self._signature = None
                raise
            return result

    def consume_id(self, state: Dict[str, Any], prefix: str) -> str:
        counters = state.setdefault("counters", {})
        current = counters.get(prefix, 0) + 1
        counters[prefix] = current
        return f"{prefix}_{current:06d}"


__all__ = ["ActivityStore", "DEFAULT_STORE_STATE"]
