from __future__ import annotations

import copy
from typing import Any, Optional

from .repository import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Process-local storage; values are deep-copied in and out like a real serializer would."""

    def __init__(self, initial: Optional[dict[str, dict[str, Any]]] = None):
        self._items: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})

    def get_item(self, key: str) -> Optional[dict[str, Any]]:
        value = self._items.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set_item(self, key: str, value: dict[str, Any]) -> None:
        self._items[key] = copy.deepcopy(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)
