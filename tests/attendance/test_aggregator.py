from __future__ import annotations

from datetime import date, timedelta

import pytest

from attendease.attendance.aggregator import (
    AttendanceAggregator,
    classes_below_threshold,
    compute_classes_needed,
    compute_overall_stats,
    compute_percent,
    compute_subject_stats,
)
from attendease.attendance.model import AttendanceRecord, SubjectStats
from attendease.core.exceptions import ValidationError


def _records(subject: str, present: int, absent: int, start=date(2026, 1, 5)):
    out = []
    for i in range(present + absent):
        out.append(AttendanceRecord(subject=subject, class_date=start + timedelta(days=i), is_present=i < present))
    return out


@pytest.mark.parametrize(
    "present,total,expected",
    [(0, 0, 0), (3, 4, 75), (1, 3, 33), (2, 3, 67), (1, 8, 13), (149, 200, 75), (0, 5, 0), (5, 5, 100)],
)
def test_percent_rounds_half_up(present, total, expected):
    assert compute_percent(present, total) == expected


@pytest.mark.parametrize(
    "present,total,expected",
    [(0, 0, 0), (2, 4, 4), (3, 4, 0), (149, 200, 0), (0, 1, 3), (1, 3, 5), (7, 10, 2)],
)
def test_classes_needed_for_75(present, total, expected):
    assert compute_classes_needed(present, total) == expected


def test_classes_needed_actually_reaches_threshold():
    for total in range(1, 30):
        for present in range(total + 1):
            needed = compute_classes_needed(present, total)
            assert compute_percent(present + needed, total + needed) >= 75


def test_classes_needed_with_custom_threshold():
    # 1/2 at 60%: ceil((0.6*2 - 1) / 0.4) = 1, and 2/3 -> 67
    assert compute_classes_needed(1, 2, 60) == 1
    assert compute_classes_needed(1, 2, 50) == 0


def test_subject_stats_tally_and_first_seen_order():
    records = _records("Networks", 1, 1) + _records("Algorithms", 3, 1)
    tallies = compute_subject_stats(records)

    assert list(tallies) == ["Networks", "Algorithms"]
    assert (tallies["Networks"].present, tallies["Networks"].total) == (1, 2)
    assert (tallies["Algorithms"].present, tallies["Algorithms"].total) == (3, 4)


def test_empty_records_give_empty_summary():
    summary = AttendanceAggregator().summarize([])

    assert summary.subjects == []
    assert summary.below_threshold == []
    assert summary.overall.to_dict() == {"total_present": 0, "total_classes": 0, "overall_percent": 0}


def test_overall_sums_match_subjects():
    records = _records("A", 4, 1) + _records("B", 2, 3) + _records("C", 0, 2)
    agg = AttendanceAggregator()
    stats = agg.subject_stats(records)
    overall = compute_overall_stats(stats)

    assert overall.total_present == sum(s.present for s in stats) == 6
    assert overall.total_classes == sum(s.total for s in stats) == 12
    assert overall.overall_percent == 50
    for s in stats:
        assert 0 <= s.present <= s.total


def test_below_threshold_lists_only_failing_subjects():
    stats = [
        SubjectStats(subject="A", present=4, total=5, percent=80, classes_needed=0),
        SubjectStats(subject="B", present=3, total=5, percent=60, classes_needed=3),
    ]
    assert [s.subject for s in classes_below_threshold(stats)] == ["B"]


def test_summary_dict_shape():
    records = _records("Data Structures", 3, 1) + _records("Operating Systems", 1, 1)
    data = AttendanceAggregator().summarize(records).to_dict()

    assert data["threshold"] == 75
    assert data["subjects"][0] == {
        "subject": "Data Structures",
        "present": 3,
        "total": 4,
        "percent": 75,
        "classes_needed": 0,
    }
    assert data["subjects"][1]["classes_needed"] == 2
    assert data["below_threshold"] == ["Operating Systems"]
    assert data["overall"]["overall_percent"] == 67


def test_aggregation_is_deterministic():
    records = _records("X", 2, 2) + _records("Y", 5, 0)
    agg = AttendanceAggregator()
    assert agg.summarize(records) == agg.summarize(list(records))


@pytest.mark.parametrize("threshold", [0, 100, -5, 150])
def test_threshold_must_be_between_0_and_100(threshold):
    with pytest.raises(ValidationError):
        AttendanceAggregator(threshold=threshold)


def test_unreachable_threshold_raises():
    with pytest.raises(ValueError):
        compute_classes_needed(1, 2, 100)


def test_subject_stats_counts_duplicates():
    record = AttendanceRecord(subject="A", class_date=date(2026, 1, 5), is_present=True)
    tally = compute_subject_stats([record, record])["A"]
    assert (tally.present, tally.total) == (2, 2)
