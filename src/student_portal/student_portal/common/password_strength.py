from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zxcvbn import zxcvbn

STRENGTH_LABELS = ("Very Weak", "Weak", "Fair", "Strong", "Very Strong")


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    label: str
    warning: Optional[str] = None

    @property
    def is_strong(self) -> bool:
        return self.score >= 3


def password_strength(password: str) -> PasswordStrength:
    """Advisory strength meter for the signup form (score 0-4)."""
    if not password:
        return PasswordStrength(score=0, label=STRENGTH_LABELS[0])

    result = zxcvbn(password)
    score = int(result["score"])
    warning = (result.get("feedback") or {}).get("warning") or None
    return PasswordStrength(score=score, label=STRENGTH_LABELS[score], warning=warning)
