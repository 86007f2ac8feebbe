from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from ..core.enums import NotificationType, SubmissionStatus


@dataclass(frozen=True)
class AssignmentSubmission:
    id: str
    student_id: str
    assignment_id: str
    submission_date: str
    status: SubmissionStatus = SubmissionStatus.PENDING
    grade: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssignmentSubmission":
        return cls(
            id=str(data["id"]),
            student_id=str(data["student_id"]),
            assignment_id=str(data["assignment_id"]),
            submission_date=data["submission_date"],
            status=SubmissionStatus(data.get("status", SubmissionStatus.PENDING.value)),
            grade=data.get("grade"),
        )


@dataclass(frozen=True)
class Assignment:
    """Domain entity: an assignment published by a faculty member."""

    id: str
    title: str
    description: str
    subject: str
    due_date: str
    faculty_id: str
    submissions: tuple[AssignmentSubmission, ...] = ()

    def submitted_by(self, student_id: str) -> bool:
        return any(s.student_id == student_id for s in self.submissions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "subject": self.subject,
            "due_date": self.due_date,
            "faculty_id": self.faculty_id,
            "submissions": [s.to_dict() for s in self.submissions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assignment":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            subject=data.get("subject", ""),
            due_date=data.get("due_date", ""),
            faculty_id=str(data.get("faculty_id", "")),
            submissions=tuple(AssignmentSubmission.from_dict(s) for s in data.get("submissions", [])),
        )


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    type: NotificationType
    read: bool
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Notification":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            message=data["message"],
            type=NotificationType(data.get("type", NotificationType.INFO.value)),
            read=bool(data.get("read", False)),
            created_at=data["created_at"],
        )


@dataclass
class DashboardState:
    """Display data persisted under a single storage key.

    ``attendance`` maps student id -> date string -> present flag.
    """

    assignments: list[Assignment] = field(default_factory=list)
    attendance: dict[str, dict[str, bool]] = field(default_factory=dict)
    notifications: list[Notification] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assignments": [a.to_dict() for a in self.assignments],
            "attendance": {sid: dict(days) for sid, days in self.attendance.items()},
            "notifications": [n.to_dict() for n in self.notifications],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardState":
        return cls(
            assignments=[Assignment.from_dict(a) for a in data.get("assignments", [])],
            attendance={
                str(sid): {str(day): bool(present) for day, present in days.items()}
                for sid, days in data.get("attendance", {}).items()
            },
            notifications=[Notification.from_dict(n) for n in data.get("notifications", [])],
        )
