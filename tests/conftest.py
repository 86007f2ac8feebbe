from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.student_portal.student_portal.auth.local_repository import LocalSessionStateRepository
from src.student_portal.student_portal.auth.service import SessionService
from src.student_portal.student_portal.dashboard.local_repository import LocalDashboardStateRepository
from src.student_portal.student_portal.dashboard.service import DashboardService
from src.student_portal.student_portal.main import create_app
from src.student_portal.student_portal.storage.memory_storage import InMemoryStorage


class OutboxMailer:
    """Records what would have been emailed."""

    def __init__(self):
        self.verifications: list[tuple[str, str]] = []
        self.resets: list[tuple[str, str, datetime]] = []

    def send_verification_email(self, *, email, token):
        self.verifications.append((email, token))

    def send_password_reset_email(self, *, email, token, expires_at):
        self.resets.append((email, token, expires_at))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def mailer() -> OutboxMailer:
    return OutboxMailer()


@pytest.fixture
def sessions(storage, mailer) -> SessionService:
    return SessionService(LocalSessionStateRepository(storage), mailer)


@pytest.fixture
def dashboard(storage) -> DashboardService:
    return DashboardService(LocalDashboardStateRepository(storage))


@pytest.fixture
def verified_student(sessions, mailer):
    user = sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")
    sessions.verify_email(mailer.verifications[-1][1])
    return user


@pytest.fixture
def app(storage, mailer):
    app = create_app({"TESTING": True, "SEED_DEMO_USERS": False}, storage=storage, mailer=mailer)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def container(app):
    return app.extensions["student_portal"]
