from __future__ import annotations

from ..core.enums import Role
from .service import SessionService

DEMO_USERS = (
    ("Admin", "admin@school.edu", "admin12345", Role.ADMIN),
    ("Faculty Demo", "faculty@school.edu", "faculty12345", Role.FACULTY),
    ("Student Demo", "student@school.edu", "student12345", Role.STUDENT),
)


def ensure_demo_users(sessions: SessionService) -> int:
    """Register and verify the demo accounts that are missing; returns how many were created."""

    existing = {u.email for u in sessions.list_users()}
    created = 0
    for name, email, password, role in DEMO_USERS:
        if email in existing:
            continue
        sessions.signup(name=name, email=email, password=password, role=role)
        for token, target in sessions.verification_tokens().items():
            if target == email:
                sessions.verify_email(token)
        created += 1
    return created
