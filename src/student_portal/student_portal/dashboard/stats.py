from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .model import Assignment


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    present: int
    percentage: int


@dataclass(frozen=True)
class AssignmentStats:
    total: int
    completed: int
    pending: int


def attendance_stats(days: Mapping[str, bool]) -> AttendanceStats:
    total = len(days)
    present = sum(1 for v in days.values() if v)
    # round-half-up, as the dashboard has always displayed it
    percentage = int(present * 100 / total + 0.5) if total else 0
    return AttendanceStats(total=total, present=present, percentage=percentage)


def assignment_stats(assignments: Sequence[Assignment], student_id: str) -> AssignmentStats:
    total = len(assignments)
    completed = sum(1 for a in assignments if a.submitted_by(student_id))
    return AssignmentStats(total=total, completed=completed, pending=total - completed)


def chart_rows(att: AttendanceStats, asg: AssignmentStats) -> list[dict]:
    """Rows for the overview bar chart."""
    return [
        {"name": "Attendance", "Present": att.present, "Total": att.total},
        {"name": "Assignments", "Completed": asg.completed, "Total": asg.total},
    ]
