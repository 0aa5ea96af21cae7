import os
import json
import logging
import tempfile
import time
from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Callable, Dict, Optional

from headlines.errors import StoreError

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class KeyValueStore(ABC):
    """
    Key/value store with optional per-key TTL (seconds).

    Serves both as the headline cache and as the settings store; a value
    written with ``ttl=None`` never expires.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        pass

    @abstractmethod
    def forget(self, key: str) -> bool:
        pass

    @abstractmethod
    def increment(self, key: str, ttl: Optional[float] = None) -> int:
        """Atomically add 1 to an integer entry (missing/expired = 0)."""
        pass

    def has(self, key: str) -> bool:
        return self.get(key) is not None


def _expires_at(now: float, ttl: Optional[float]) -> Optional[float]:
    return None if ttl is None else now + ttl


def _alive(entry: Dict[str, Any], now: float) -> bool:
    expires = entry.get("expires")
    return expires is None or expires > now


class MemoryStore(KeyValueStore):
    def __init__(self, time_fn: TimeFn = time.time):
        self._time = time_fn
        self._data: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()

    def _entry(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        if not _alive(entry, self._time()):
            del self._data[key]
            return None
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entry(key)
            if entry is None or entry["value"] is None:
                return default
            return entry["value"]

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        with self._lock:
            self._data[key] = {"value": value, "expires": _expires_at(self._time(), ttl)}

    def forget(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def increment(self, key: str, ttl: Optional[float] = None) -> int:
        with self._lock:
            entry = self._entry(key)
            count = int(entry["value"] or 0) + 1 if entry else 1
            self._data[key] = {"value": count, "expires": _expires_at(self._time(), ttl)}
            return count


class JsonFileStore(KeyValueStore):
    """
    Store persistido em um arquivo JSON: {key: {"value": ..., "expires": ts|null}}.

    Every operation reloads the file under the lock. Writes go to a temp file
    that replaces the store in one step, so a reader never sees a half-written
    file; across processes the last writer still wins.
    """

    def __init__(self, path: str, time_fn: TimeFn = time.time):
        self.path = path
        self._time = time_fn
        self._lock = Lock()
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, ValueError):
            logger.warning("%s está vazio ou corrompido. Recriando do zero.", self.path)
            return {}
        except OSError as e:
            raise StoreError(f"Failed to read store: {e}", {"path": self.path})
        if not isinstance(raw, dict):
            logger.warning("Unexpected store layout in %s; ignoring contents", self.path)
            return {}
        now = self._time()
        return {k: v for k, v in raw.items() if isinstance(v, dict) and _alive(v, now)}

    def _save(self, data: Dict[str, Dict[str, Any]]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory, suffix=".tmp", delete=False) as f:
                tmp_path = f.name
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StoreError(f"Failed to write store: {e}", {"path": self.path})

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._load().get(key)
        if entry is None or entry.get("value") is None:
            return default
        return entry["value"]

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        with self._lock:
            data = self._load()
            data[key] = {"value": value, "expires": _expires_at(self._time(), ttl)}
            self._save(data)

    def forget(self, key: str) -> bool:
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._save(data)
            return True

    def increment(self, key: str, ttl: Optional[float] = None) -> int:
        with self._lock:
            data = self._load()
            entry = data.get(key)
            count = int(entry.get("value") or 0) + 1 if entry else 1
            data[key] = {"value": count, "expires": _expires_at(self._time(), ttl)}
            self._save(data)
            return count
