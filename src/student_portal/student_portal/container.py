from __future__ import annotations

from dataclasses import dataclass

from .auth.local_repository import LocalSessionStateRepository
from .auth.mailer import ConsoleMailer, Mailer
from .auth.service import SessionService
from .core.constants import DEFAULT_MIN_PASSWORD_LENGTH, DEFAULT_RESET_TOKEN_TTL_MINUTES
from .dashboard.local_repository import LocalDashboardStateRepository
from .dashboard.service import DashboardService
from .storage.factory import build_storage
from .storage.repository import KeyValueStorage


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    mailer: Mailer

    session_repo: LocalSessionStateRepository
    dashboard_repo: LocalDashboardStateRepository

    session_service: SessionService
    dashboard_service: DashboardService


def build_container(*, settings: dict, storage: KeyValueStorage | None = None, mailer: Mailer | None = None) -> Container:
    storage = storage or build_storage(
        backend=str(settings.get("STORAGE_BACKEND", "json")),
        storage_dir=str(settings.get("STORAGE_DIR", "instance/storage")),
    )
    mailer = mailer or ConsoleMailer(base_url=str(settings.get("BASE_URL", "http://localhost:5000")))

    session_repo = LocalSessionStateRepository(storage)
    dashboard_repo = LocalDashboardStateRepository(storage)

    session_service = SessionService(
        session_repo,
        mailer,
        reset_token_ttl_minutes=int(settings.get("RESET_TOKEN_TTL_MINUTES", DEFAULT_RESET_TOKEN_TTL_MINUTES)),
        min_password_length=int(settings.get("MIN_PASSWORD_LENGTH", DEFAULT_MIN_PASSWORD_LENGTH)),
    )
    dashboard_service = DashboardService(dashboard_repo)

    return Container(
        storage=storage,
        mailer=mailer,
        session_repo=session_repo,
        dashboard_repo=dashboard_repo,
        session_service=session_service,
        dashboard_service=dashboard_service,
    )
