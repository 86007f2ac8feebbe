from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class NavLink:
    endpoint: str
    label: str
    icon: str


STUDENT_LINKS = (
    NavLink("dashboard", "Dashboard", "home"),
    NavLink("attendance", "Attendance", "calendar"),
    NavLink("assignments", "Assignments", "file-text"),
    NavLink("timetable", "Timetable", "book-open"),
)

FACULTY_LINKS = (
    NavLink("dashboard", "Dashboard", "home"),
    NavLink("students", "Students", "users"),
    NavLink("assignments", "Assignments", "file-text"),
    NavLink("attendance", "Attendance", "calendar"),
)

ADMIN_LINKS = (
    NavLink("dashboard", "Dashboard", "home"),
    NavLink("users", "Users", "users"),
    NavLink("settings", "Settings", "settings"),
)


def links_for_role(role: Optional[Role | str]) -> tuple[NavLink, ...]:
    """Sidebar links; anything that is not student or faculty gets the admin menu."""
    try:
        role = Role(role) if role is not None else None
    except ValueError:
        role = None

    if role == Role.STUDENT:
        return STUDENT_LINKS
    if role == Role.FACULTY:
        return FACULTY_LINKS
    return ADMIN_LINKS
