"""Key/value storage with automatic in-memory fallback."""
from .probe import (
    HostStorageBackend,
    MemoryStorageBackend,
    StorageBackend,
    open_storage,
    probe_host_store,
    reset_storage,
)

__all__ = [
    "HostStorageBackend",
    "MemoryStorageBackend",
    "StorageBackend",
    "open_storage",
    "probe_host_store",
    "reset_storage",
]
