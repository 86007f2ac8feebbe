from __future__ import annotations

from ..core.exceptions import StorageError
from .json_file_storage import JSONFileStorage
from .memory_storage import InMemoryStorage
from .repository import KeyValueStorage


def build_storage(*, backend: str, storage_dir: str) -> KeyValueStorage:
    """Factory: pick the storage backend named in settings."""

    backend = (backend or "json").lower()
    if backend == "json":
        return JSONFileStorage(storage_dir)
    if backend == "memory":
        return InMemoryStorage()
    raise StorageError(f"Unknown storage backend: {backend}")
