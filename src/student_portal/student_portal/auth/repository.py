from __future__ import annotations

from typing import Protocol

from .model import SessionState


class SessionStateRepository(Protocol):
    """Loads and saves the whole session state as one snapshot."""

    def load(self) -> SessionState:
        raise NotImplementedError

    def save(self, state: SessionState) -> None:
        raise NotImplementedError
