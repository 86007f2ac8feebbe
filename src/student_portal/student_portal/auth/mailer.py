from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send_verification_email(self, *, email: str, token: str) -> None:
        raise NotImplementedError

    def send_password_reset_email(self, *, email: str, token: str, expires_at: datetime) -> None:
        raise NotImplementedError


class ConsoleMailer(Mailer):
    """Simulated email delivery: links are written to the log instead of being sent."""

    def __init__(self, base_url: str = "http://localhost:5000"):
        self._base_url = base_url.rstrip("/")

    def verification_link(self, token: str) -> str:
        return f"{self._base_url}/verify-email/{token}"

    def reset_link(self, token: str) -> str:
        return f"{self._base_url}/reset-password/{token}"

    def send_verification_email(self, *, email: str, token: str) -> None:
        logger.info("Verification email for %s: %s", email, self.verification_link(token))

    def send_password_reset_email(self, *, email: str, token: str, expires_at: datetime) -> None:
        logger.info(
            "Password reset email for %s: %s (valid until %s)",
            email,
            self.reset_link(token),
            expires_at.isoformat(),
        )
