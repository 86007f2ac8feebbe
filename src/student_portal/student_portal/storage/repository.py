from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStorage(Protocol):
    """Local key-value storage holding one JSON blob per named key.

    Note (DIP): state repositories depend on this interface, not on a concrete backend.
    """

    def get_item(self, key: str) -> Optional[dict[str, Any]]:
        raise NotImplementedError

    def set_item(self, key: str, value: dict[str, Any]) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError
