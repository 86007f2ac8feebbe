from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for navigation and access control."""

    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"


class NotificationType(str, Enum):
    """Severity of a dashboard notification (also used as flash category)."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
