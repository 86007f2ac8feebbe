from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso, to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: the user record exposed to the UI (no credential)."""

    id: str
    name: str
    email: str
    role: Role
    email_verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            role=Role(data["role"]),
            email_verified=bool(data.get("email_verified", False)),
        )


@dataclass(frozen=True)
class RegistryEntry:
    """A registered user plus its password.

    Note: the password is kept as typed. This mirrors the local-registry
    deployment it comes from; it is not a security design.
    """

    user: User
    password: str

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email

    def to_dict(self) -> dict[str, Any]:
        return {**self.user.to_dict(), "password": self.password}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistryEntry":
        return cls(user=User.from_dict(data), password=data["password"])


@dataclass(frozen=True)
class ResetToken:
    email: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass
class SessionState:
    """Everything the session store persists under a single storage key."""

    user: Optional[User] = None
    is_authenticated: bool = False
    registry: list[RegistryEntry] = field(default_factory=list)
    verification_tokens: dict[str, str] = field(default_factory=dict)
    reset_tokens: dict[str, ResetToken] = field(default_factory=dict)

    def find_by_email(self, email: str) -> Optional[RegistryEntry]:
        return next((e for e in self.registry if e.email == email), None)

    def find_by_id(self, user_id: str) -> Optional[RegistryEntry]:
        return next((e for e in self.registry if e.id == user_id), None)

    def update_entries(self, email: str, *, password: Optional[str] = None, **user_changes: Any) -> int:
        """Apply changes to every registry entry with ``email``; returns how many matched."""
        count = 0
        for i, entry in enumerate(self.registry):
            if entry.email != email:
                continue
            self.registry[i] = RegistryEntry(
                user=replace(entry.user, **user_changes),
                password=entry.password if password is None else password,
            )
            count += 1
        return count

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict() if self.user else None,
            "is_authenticated": self.is_authenticated,
            "registry": [e.to_dict() for e in self.registry],
            "verification_tokens": dict(self.verification_tokens),
            "reset_tokens": {
                token: {"email": t.email, "expires_at": to_iso(t.expires_at)}
                for token, t in self.reset_tokens.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionState":
        user = data.get("user")
        return cls(
            user=User.from_dict(user) if user else None,
            is_authenticated=bool(data.get("is_authenticated", False)) and bool(user),
            registry=[RegistryEntry.from_dict(e) for e in data.get("registry", [])],
            verification_tokens=dict(data.get("verification_tokens", {})),
            reset_tokens={
                token: ResetToken(email=t["email"], expires_at=parse_iso(t["expires_at"]))
                for token, t in data.get("reset_tokens", {}).items()
            },
        )
