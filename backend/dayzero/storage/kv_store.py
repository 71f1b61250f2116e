"""
Key-Value Store - JSON values addressed by string keys
Backs habits, logs, profile, plan cache and AI limits
"""
import copy
import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict, List

from dayzero.core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Base class for durable key-value stores

    Values are JSON-compatible Python objects. Callers always receive a copy,
    so mutating a returned value never changes stored state until set() is called.
    """

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> List[str]:
        raise NotImplementedError


class InMemoryStore(KeyValueStore):
    """Process-local store, used for tests and ephemeral sessions"""

    def __init__(self, initial: Dict[str, Any] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        try:
            # Reject anything that would not survive a JSON round trip
            encoded = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageUnavailableError(f"Value for '{key}' is not JSON serializable: {e}")
        with self._lock:
            self._data[key] = json.loads(encoded)

    def keys(self, prefix: str = "") -> List[str]:
        with self._lock:
            return sorted(k for k in self._data if k.startswith(prefix))


class JSONFileStore(KeyValueStore):
    """
    Store persisted as a single JSON document on disk

    Every write rewrites the whole file through a temp file and os.replace,
    so a crash mid-write leaves the previous version intact.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Storage read error for {self.path}: {e}")
            raise StorageUnavailableError(f"Failed to read store: {e}")
        if not isinstance(data, dict):
            raise StorageUnavailableError(f"Store file {self.path} is not a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".dayzero-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Storage write error for {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageUnavailableError(f"Failed to write store: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def keys(self, prefix: str = "") -> List[str]:
        with self._lock:
            return sorted(k for k in self._read_all() if k.startswith(prefix))
