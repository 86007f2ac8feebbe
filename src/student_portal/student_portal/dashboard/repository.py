from __future__ import annotations

from typing import Protocol

from .model import DashboardState


class DashboardStateRepository(Protocol):
    def load(self) -> DashboardState:
        raise NotImplementedError

    def save(self, state: DashboardState) -> None:
        raise NotImplementedError
