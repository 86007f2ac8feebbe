from __future__ import annotations

from ..core.constants import AUTH_STORAGE_KEY
from ..core.exceptions import StorageError
from ..storage.repository import KeyValueStorage
from .model import SessionState
from .repository import SessionStateRepository


class LocalSessionStateRepository(SessionStateRepository):
    def __init__(self, storage: KeyValueStorage, *, key: str = AUTH_STORAGE_KEY):
        self._storage = storage
        self._key = key

    def load(self) -> SessionState:
        data = self._storage.get_item(self._key)
        if not data:
            return SessionState()
        if not isinstance(data, dict):
            raise StorageError(f"Corrupted {self._key} snapshot: expected an object")
        try:
            return SessionState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Corrupted {self._key} snapshot: {e}") from e

    def save(self, state: SessionState) -> None:
        self._storage.set_item(self._key, state.to_dict())
