"""Attendance aggregation and threshold projection.

Everything here is pure: records in, statistics out. No I/O and no shared
state, so the functions are safe to call from any request thread.

Percentages are integers rounded half-up. Arithmetic is done on exact
fractions so values such as 12.5% round the same way on every platform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Sequence, Union

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, AttendanceSummary, OverallStats, SubjectStats, SubjectTally

Number = Union[int, float]


def _as_fraction(value: Number) -> Fraction:
    # str() keeps decimal thresholds like 62.5 or 74.9 exact
    return Fraction(str(value))


def compute_subject_stats(records: Iterable[AttendanceRecord]) -> dict[str, SubjectTally]:
    """Tally present/total per subject.

    Duplicated (subject, date) pairs are counted as given: uniqueness is the
    record store's job. Subjects keep the order in which they first appear.
    """
    tallies: dict[str, SubjectTally] = {}
    for record in records:
        tally = tallies.setdefault(record.subject, SubjectTally())
        tally.total += 1
        if record.is_present is True:
            tally.present += 1
    return tallies


def compute_percent(present: int, total: int) -> int:
    if total == 0:
        return 0
    return math.floor(Fraction(present * 100, total) + Fraction(1, 2))


def compute_classes_needed(present: int, total: int, threshold: Number = DEFAULT_ATTENDANCE_THRESHOLD) -> int:
    """Consecutive classes to attend, starting now, to reach ``threshold``.

    Every projected class is assumed attended and adds one to both present
    and total. The already-met check uses the rounded percent, the projection
    itself does not round.
    """
    if total == 0:
        return 0
    if compute_percent(present, total) >= threshold:
        return 0

    ratio = _as_fraction(threshold) / 100
    if ratio >= 1:
        raise ValueError(f"threshold {threshold} can never be reached once a class is missed")

    needed = math.ceil((ratio * total - present) / (1 - ratio))
    return max(0, needed)


def compute_overall_stats(subject_stats: Sequence[SubjectStats]) -> OverallStats:
    total_present = sum(s.present for s in subject_stats)
    total_classes = sum(s.total for s in subject_stats)
    return OverallStats(
        total_present=total_present,
        total_classes=total_classes,
        overall_percent=compute_percent(total_present, total_classes),
    )


def classes_below_threshold(
    subject_stats: Sequence[SubjectStats],
    threshold: Number = DEFAULT_ATTENDANCE_THRESHOLD,
) -> list[SubjectStats]:
    return [s for s in subject_stats if s.percent < threshold]


@dataclass(frozen=True)
class AttendanceAggregator:
    """Single entry point every view uses to turn records into statistics."""

    threshold: Number = DEFAULT_ATTENDANCE_THRESHOLD

    def __post_init__(self):
        if not 0 < self.threshold < 100:
            raise ValidationError("Attendance threshold must be between 0 and 100")

    def subject_stats(self, records: Iterable[AttendanceRecord]) -> list[SubjectStats]:
        return [
            SubjectStats(
                subject=subject,
                present=tally.present,
                total=tally.total,
                percent=compute_percent(tally.present, tally.total),
                classes_needed=compute_classes_needed(tally.present, tally.total, self.threshold),
            )
            for subject, tally in compute_subject_stats(records).items()
        ]

    def overall(self, subject_stats: Sequence[SubjectStats]) -> OverallStats:
        return compute_overall_stats(subject_stats)

    def below_threshold(self, subject_stats: Sequence[SubjectStats]) -> list[SubjectStats]:
        return classes_below_threshold(subject_stats, self.threshold)

    def summarize(self, records: Iterable[AttendanceRecord]) -> AttendanceSummary:
        subjects = self.subject_stats(records)
        return AttendanceSummary(
            threshold=self.threshold,
            subjects=subjects,
            overall=self.overall(subjects),
            below_threshold=self.below_threshold(subjects),
        )
