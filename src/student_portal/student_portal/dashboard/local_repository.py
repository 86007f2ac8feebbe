from __future__ import annotations

from ..core.constants import DASHBOARD_STORAGE_KEY
from ..core.exceptions import StorageError
from ..storage.repository import KeyValueStorage
from .model import DashboardState
from .repository import DashboardStateRepository


class LocalDashboardStateRepository(DashboardStateRepository):
    def __init__(self, storage: KeyValueStorage, *, key: str = DASHBOARD_STORAGE_KEY):
        self._storage = storage
        self._key = key

    def load(self) -> DashboardState:
        data = self._storage.get_item(self._key)
        if not data:
            return DashboardState()
        if not isinstance(data, dict):
            raise StorageError(f"Corrupted {self._key} snapshot: expected an object")
        try:
            return DashboardState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Corrupted {self._key} snapshot: {e}") from e

    def save(self, state: DashboardState) -> None:
        self._storage.set_item(self._key, state.to_dict())
