"""Storage capability probe.

Persistent key/value storage on the client host may be unusable (quota
exhausted, disabled by policy, sandboxed frame). Callers never need to know:
open_storage() probes the host store once per process and hands back a
StorageBackend that either delegates to the host store or keeps values in
process memory with the same semantics.

Usage:
    from tranquil.shared.storage import open_storage
    storage = open_storage(host_store)
    storage.set("auth_user", payload)
"""
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SENTINEL_KEY = "__storage_test__"
SENTINEL_VALUE = "1"


class StorageBackend(ABC):
    """Uniform key/value contract. Missing keys read as None, never raise."""

    kind: str = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store str(value) under key."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""

    @abstractmethod
    def key_at(self, index: int) -> Optional[str]:
        """Return the index-th key, or None when out of range."""

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of distinct keys currently stored."""


class MemoryStorageBackend(StorageBackend):
    """Process-lifetime storage. Never written to disk.

    Keys are ordered by first insertion, which is stable while the
    process runs.
    """

    kind = "memory"

    def __init__(self):
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = str(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def key_at(self, index: int) -> Optional[str]:
        with self._lock:
            if not 0 <= index < len(self._items):
                return None
            return list(self._items)[index]

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._items)


class HostStorageBackend(StorageBackend):
    """Delegates every operation to the host's persistent store.

    The host store is either web-storage shaped (getItem, setItem,
    removeItem, clear, key, length) or any MutableMapping such as a
    shelve.Shelf.
    """

    kind = "host"

    def __init__(self, host_store: Any):
        self._store = host_store
        self._web_style = hasattr(host_store, "setItem")
        if not self._web_style and not isinstance(host_store, MutableMapping):
            raise TypeError(
                f"Unsupported host store type: {type(host_store).__name__}"
            )

    def get(self, key: str) -> Optional[str]:
        if self._web_style:
            return self._store.getItem(key)
        value = self._store.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: Any) -> None:
        if self._web_style:
            self._store.setItem(key, str(value))
        else:
            self._store[key] = str(value)

    def remove(self, key: str) -> None:
        if self._web_style:
            self._store.removeItem(key)
        else:
            self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def key_at(self, index: int) -> Optional[str]:
        if self._web_style:
            return self._store.key(index)
        keys = list(self._store)
        if not 0 <= index < len(keys):
            return None
        return keys[index]

    @property
    def count(self) -> int:
        if self._web_style:
            return int(self._store.length)
        return len(self._store)


def probe_host_store(host_store: Any) -> StorageBackend:
    """Probe a host store with a sentinel write-then-remove cycle.

    Args:
        host_store: Host persistent store, or None if the host has none

    Returns:
        HostStorageBackend if the cycle succeeds, otherwise a fresh
        MemoryStorageBackend
    """
    if host_store is None:
        logger.warning(
            "STORAGE_FALLBACK_IN_MEMORY",
            extra={"reason": "no_host_store"}
        )
        return MemoryStorageBackend()

    try:
        backend = HostStorageBackend(host_store)
        backend.set(SENTINEL_KEY, SENTINEL_VALUE)
        backend.remove(SENTINEL_KEY)
    except Exception as e:
        logger.warning(
            "STORAGE_FALLBACK_IN_MEMORY",
            extra={"reason": "probe_failed", "error_type": type(e).__name__, "error": str(e)}
        )
        return MemoryStorageBackend()

    logger.info("STORAGE_HOST_BACKEND_SELECTED", extra={"store_type": type(host_store).__name__})
    return backend


_backend: Optional[StorageBackend] = None
_backend_lock = threading.Lock()


def open_storage(host_store: Any = None) -> StorageBackend:
    """Get the process-wide storage backend, probing on first use.

    The first call decides the backend for the lifetime of the process;
    later calls return the same instance whatever host_store they pass.

    Args:
        host_store: Host persistent store to probe

    Returns:
        StorageBackend shared by every caller in this process
    """
    global _backend
    with _backend_lock:
        if _backend is None:
            _backend = probe_host_store(host_store)
        return _backend


def reset_storage() -> None:
    """Forget the cached backend so the next open_storage() probes again."""
    global _backend
    with _backend_lock:
        _backend = None
