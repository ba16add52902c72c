from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """One marked class: a subject on a date, attended or not.

    A class with no record at all means "no data" (or a day off), which is
    different from an explicit absence.
    """

    subject: str
    class_date: date
    is_present: bool
    user_id: Optional[int] = None
    attendance_id: Optional[int] = None


@dataclass
class SubjectTally:
    present: int = 0
    total: int = 0


@dataclass(frozen=True)
class SubjectStats:
    subject: str
    present: int
    total: int
    percent: int
    classes_needed: int

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "present": self.present,
            "total": self.total,
            "percent": self.percent,
            "classes_needed": self.classes_needed,
        }


@dataclass(frozen=True)
class OverallStats:
    total_present: int
    total_classes: int
    overall_percent: int

    def to_dict(self) -> dict:
        return {
            "total_present": self.total_present,
            "total_classes": self.total_classes,
            "overall_percent": self.overall_percent,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model for dashboards: per-subject stats plus the overall line."""

    threshold: float
    subjects: list[SubjectStats] = field(default_factory=list)
    overall: OverallStats = OverallStats(0, 0, 0)
    below_threshold: list[SubjectStats] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "threshold": self.threshold,
            "subjects": [s.to_dict() for s in self.subjects],
            "overall": self.overall.to_dict(),
            "below_threshold": [s.subject for s in self.below_threshold],
        }
