from __future__ import annotations

import uuid
from dataclasses import fields as dc_fields
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc, to_iso
from ..core.enums import NotificationType, SubmissionStatus
from ..core.exceptions import ValidationError
from .model import Assignment, AssignmentSubmission, DashboardState, Notification
from .repository import DashboardStateRepository
from .stats import AssignmentStats, AttendanceStats, assignment_stats, attendance_stats

ASSIGNMENT_FIELDS = frozenset(f.name for f in dc_fields(Assignment)) - {"id"}


class DashboardService:
    """Display data for the dashboard: assignments, attendance and the notification feed.

    No business rules live here; missing ids are silent no-ops.
    """

    def __init__(self, repo: DashboardStateRepository):
        self._repo = repo
        self._state = repo.load()

    # Assignments

    def list_assignments(self) -> list[Assignment]:
        return list(self._state.assignments)

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return next((a for a in self._state.assignments if a.id == assignment_id), None)

    def add_assignment(self, assignment: Assignment, *, now: Optional[datetime] = None) -> Assignment:
        if self.get_assignment(assignment.id):
            raise ValidationError("Assignment id already exists")

        self._state.assignments.append(assignment)
        self._prepend_notification(
            title="New Assignment",
            message=f"New assignment added: {assignment.title}",
            type=NotificationType.INFO,
            now=now,
        )
        self._save()
        return assignment

    def create_assignment(
        self,
        *,
        title: str,
        description: str,
        subject: str,
        due_date: str,
        faculty_id: str,
        now: Optional[datetime] = None,
    ) -> Assignment:
        assignment = Assignment(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            subject=subject,
            due_date=due_date,
            faculty_id=faculty_id,
        )
        return self.add_assignment(assignment, now=now)

    def update_assignment(self, assignment_id: str, **updates: Any) -> Optional[Assignment]:
        unknown = set(updates) - ASSIGNMENT_FIELDS
        if unknown:
            raise ValidationError(f"Unknown assignment field(s): {', '.join(sorted(unknown))}")
        if "submissions" in updates:
            updates["submissions"] = tuple(updates["submissions"])

        for i, assignment in enumerate(self._state.assignments):
            if assignment.id == assignment_id:
                self._state.assignments[i] = replace(assignment, **updates)
                self._save()
                return self._state.assignments[i]
        return None

    def submit_assignment(
        self, assignment_id: str, student_id: str, *, now: Optional[datetime] = None
    ) -> Optional[AssignmentSubmission]:
        assignment = self.get_assignment(assignment_id)
        if not assignment:
            return None

        submission = AssignmentSubmission(
            id=str(uuid.uuid4()),
            student_id=student_id,
            assignment_id=assignment_id,
            submission_date=to_iso(now or now_utc()),
            status=SubmissionStatus.PENDING,
        )
        self.update_assignment(assignment_id, submissions=(*assignment.submissions, submission))
        return submission

    # Attendance

    def mark_attendance(self, student_id: str, date: str, present: bool) -> None:
        self._state.attendance.setdefault(student_id, {})[date] = bool(present)
        self._save()

    def attendance_for(self, student_id: str) -> dict[str, bool]:
        return dict(self._state.attendance.get(student_id, {}))

    def attendance_stats(self, student_id: str) -> AttendanceStats:
        return attendance_stats(self._state.attendance.get(student_id, {}))

    def assignment_stats(self, student_id: str) -> AssignmentStats:
        return assignment_stats(self._state.assignments, student_id)

    # Notifications

    def list_notifications(self) -> list[Notification]:
        return list(self._state.notifications)

    def unread_count(self) -> int:
        return sum(1 for n in self._state.notifications if not n.read)

    def add_notification(
        self,
        *,
        title: str,
        message: str,
        type: NotificationType | str = NotificationType.INFO,
        now: Optional[datetime] = None,
    ) -> Notification:
        try:
            type = NotificationType(type)
        except ValueError:
            raise ValidationError("Invalid notification type")

        notification = self._prepend_notification(title=title, message=message, type=type, now=now)
        self._save()
        return notification

    def mark_notification_as_read(self, notification_id: str) -> bool:
        for i, n in enumerate(self._state.notifications):
            if n.id == notification_id:
                self._state.notifications[i] = replace(n, read=True)
                self._save()
                return True
        return False

    # Internals

    def _prepend_notification(
        self, *, title: str, message: str, type: NotificationType, now: Optional[datetime]
    ) -> Notification:
        notification = Notification(
            id=str(uuid.uuid4()),
            title=title,
            message=message,
            type=type,
            read=False,
            created_at=to_iso(now or now_utc()),
        )
        self._state.notifications.insert(0, notification)
        return notification

    def _save(self) -> None:
        self._repo.save(self._state)
