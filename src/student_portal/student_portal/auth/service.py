from __future__ import annotations

import secrets
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_alpha_name, require_email, require_min_length, require_role
from ..core.constants import DEFAULT_MIN_PASSWORD_LENGTH, DEFAULT_RESET_TOKEN_TTL_MINUTES, TOKEN_BYTES
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    EmailNotVerifiedError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    ValidationError,
)
from .mailer import Mailer
from .model import RegistryEntry, ResetToken, SessionState, User
from .repository import SessionStateRepository

PROFILE_FIELDS = frozenset({"name", "email", "role", "email_verified", "password"})


def new_token(taken: Callable[[str], bool] = lambda _: False) -> str:
    token = secrets.token_urlsafe(TOKEN_BYTES)
    while taken(token):
        token = secrets.token_urlsafe(TOKEN_BYTES)
    return token


class SessionService:
    """Use case: who is logged in, plus the signup / verification / reset lifecycle.

    State is loaded once from the repository. Every mutator changes the
    in-memory state first and then saves a full snapshot; a failed save
    raises StorageError after the change has already been applied.
    """

    def __init__(
        self,
        repo: SessionStateRepository,
        mailer: Mailer,
        *,
        reset_token_ttl_minutes: int = DEFAULT_RESET_TOKEN_TTL_MINUTES,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ):
        self._repo = repo
        self._mailer = mailer
        self._reset_ttl = timedelta(minutes=int(reset_token_ttl_minutes))
        self._min_password_length = int(min_password_length)
        self._state = repo.load()

    # Read side

    @property
    def current_user(self) -> Optional[User]:
        return self._state.user

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def list_users(self) -> list[User]:
        return [e.user for e in self._state.registry]

    def get_user(self, user_id: str) -> Optional[User]:
        entry = self._state.find_by_id(user_id)
        return entry.user if entry else None

    def verification_tokens(self) -> dict[str, str]:
        return dict(self._state.verification_tokens)

    def reset_tokens(self) -> dict[str, ResetToken]:
        return dict(self._state.reset_tokens)

    # Session transitions

    def login(self, email: str, password: str) -> User:
        require_email(email)

        entry = next(
            (e for e in self._state.registry if e.email == email and e.password == password),
            None,
        )
        if not entry:
            raise AuthenticationError("Invalid email or password")
        if not entry.user.email_verified:
            raise EmailNotVerifiedError("Please verify your email before logging in")

        self._state.user = entry.user
        self._state.is_authenticated = True
        self._save()
        return entry.user

    def logout(self) -> None:
        self._state.user = None
        self._state.is_authenticated = False
        self._save()

    # Registry side operations

    def signup(self, *, name: str, email: str, password: str, role: Role | str) -> User:
        require_email(email)
        require_min_length(password, "Password", self._min_password_length)
        name = require_alpha_name(name)
        role = require_role(role)

        if self._state.find_by_email(email):
            raise DuplicateEmailError("Email is already registered")

        user = User(id=str(uuid.uuid4()), name=name, email=email, role=role, email_verified=False)
        self._state.registry.append(RegistryEntry(user=user, password=password))

        token = new_token(lambda t: t in self._state.verification_tokens)
        self._state.verification_tokens[token] = email
        try:
            self._save()
        finally:
            self._mailer.send_verification_email(email=email, token=token)
        return user

    def verify_email(self, token: str) -> None:
        email = self._state.verification_tokens.get(token)
        if email is None:
            raise InvalidTokenError("Invalid verification token")

        self._state.update_entries(email, email_verified=True)
        del self._state.verification_tokens[token]
        self._refresh_session_user()
        self._save()

    def request_password_reset(self, email: str, *, now: Optional[datetime] = None) -> None:
        """Always succeeds from the caller's point of view, whether or not the email exists."""
        if not self._state.find_by_email(email):
            return

        now = now or now_utc()
        token = new_token(lambda t: t in self._state.reset_tokens)
        reset = ResetToken(email=email, expires_at=now + self._reset_ttl)
        self._state.reset_tokens[token] = reset
        try:
            self._save()
        finally:
            self._mailer.send_password_reset_email(email=email, token=token, expires_at=reset.expires_at)

    def reset_password(self, token: str, new_password: str, *, now: Optional[datetime] = None) -> None:
        now = now or now_utc()
        reset = self._state.reset_tokens.get(token)
        if reset is None or reset.is_expired(now):
            raise InvalidOrExpiredTokenError("Invalid or expired reset token")

        require_min_length(new_password, "Password", self._min_password_length)

        self._state.update_entries(reset.email, password=new_password)
        del self._state.reset_tokens[token]
        self._save()

    def update_profile(self, user_id: str, **fields: Any) -> Optional[User]:
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown profile field(s): {', '.join(sorted(unknown))}")

        for i, entry in enumerate(self._state.registry):
            if entry.id != user_id:
                continue
            changes = dict(fields)
            password = changes.pop("password", entry.password)
            if "email" in changes and any(
                e.email == changes["email"] and e.id != user_id for e in self._state.registry
            ):
                raise DuplicateEmailError("Email is already registered")
            if "role" in changes:
                changes["role"] = require_role(changes["role"])
            self._state.registry[i] = RegistryEntry(user=replace(entry.user, **changes), password=password)
            self._refresh_session_user()
            self._save()
            return self._state.registry[i].user
        return None

    def purge_expired_reset_tokens(self, *, now: Optional[datetime] = None) -> int:
        now = now or now_utc()
        expired = [t for t, r in self._state.reset_tokens.items() if r.is_expired(now)]
        for token in expired:
            del self._state.reset_tokens[token]
        if expired:
            self._save()
        return len(expired)

    # Internals

    def _refresh_session_user(self) -> None:
        current = self._state.user
        if current is None:
            return
        entry = self._state.find_by_id(current.id)
        if entry:
            self._state.user = entry.user

    def _save(self) -> None:
        self._repo.save(self._state)
