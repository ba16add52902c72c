from __future__ import annotations

from datetime import date

import pytest

from attendease.attendance.aggregator import AttendanceAggregator
from attendease.attendance.model import AttendanceRecord
from attendease.core.exceptions import ValidationError
from attendease.timetable.model import TimetableSlot

MONDAY = date(2026, 1, 5)


def test_mark_present_then_absent_keeps_one_record(container, store):
    svc = container.attendance_service
    svc.mark(1, subject="Algorithms", class_date="2026-01-05", status="present")
    svc.mark(1, subject="Algorithms", class_date="2026-01-05", status="absent")

    assert store.attendance.count() == 1
    assert svc.history(1) == [{"subject": "Algorithms", "date": "2026-01-05", "is_present": False}]


def test_marking_same_status_twice_is_idempotent(container, store):
    svc = container.attendance_service
    first = svc.mark(1, subject="Algorithms", class_date=MONDAY, status="present")
    svc.mark(1, subject="Algorithms", class_date=MONDAY, status="present")

    assert first == {"subject": "Algorithms", "date": "2026-01-05", "status": "present"}
    assert store.attendance.count() == 1


def test_day_off_removes_the_record_and_stats(container, store):
    svc = container.attendance_service
    svc.mark(1, subject="Networks", class_date=MONDAY, status="absent")
    result = svc.mark(1, subject="Networks", class_date=MONDAY, status="off")

    assert result["status"] == "off"
    assert store.attendance.count() == 0
    assert svc.summary(1).subjects == []


def test_day_off_without_record_is_harmless(container, store):
    container.attendance_service.mark(1, subject="Networks", class_date=MONDAY, status="off")
    assert store.attendance.count() == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"subject": "", "class_date": "2026-01-05", "status": "present"},
        {"subject": "Networks", "class_date": "05/01/2026", "status": "present"},
        {"subject": "Networks", "class_date": "2026-02-30", "status": "present"},
        {"subject": "Networks", "class_date": "2026-01-05", "status": "late"},
    ],
)
def test_mark_rejects_bad_input(container, kwargs):
    with pytest.raises(ValidationError):
        container.attendance_service.mark(1, **kwargs)


def test_history_is_newest_first_and_filtered(container):
    svc = container.attendance_service
    svc.mark(1, subject="A", class_date="2026-01-05", status="present")
    svc.mark(1, subject="B", class_date="2026-01-06", status="absent")
    svc.mark(1, subject="A", class_date="2026-01-07", status="present")
    svc.mark(2, subject="A", class_date="2026-01-07", status="present")

    assert [r["date"] for r in svc.history(1)] == ["2026-01-07", "2026-01-06", "2026-01-05"]
    assert [r["date"] for r in svc.history(1, subject="A")] == ["2026-01-07", "2026-01-05"]
    ranged = svc.history(1, start_date=date(2026, 1, 6), end_date=date(2026, 1, 6))
    assert ranged == [{"subject": "B", "date": "2026-01-06", "is_present": False}]


def test_history_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.attendance_service.history(1, start_date=date(2026, 1, 7), end_date=date(2026, 1, 6))


def test_summary_uses_configured_threshold(container):
    svc = container.attendance_service
    for day, status in [("2026-01-05", "present"), ("2026-01-06", "absent")]:
        svc.mark(1, subject="DBMS", class_date=day, status=status)

    summary = svc.summary(1)
    assert svc.threshold == 75
    assert summary.subjects[0].percent == 50
    assert summary.subjects[0].classes_needed == 2
    assert [s.subject for s in summary.below_threshold] == ["DBMS"]


def test_today_board_merges_timetable_and_marks(container, store):
    store.timetable.replace_all(
        [
            TimetableSlot(weekday="Monday", time_label="10:00-11:00", subject="Operating Systems", room="CSE-102"),
            TimetableSlot(weekday="Monday", time_label="09:00-10:00", subject="Data Structures", room="CSE-101"),
            TimetableSlot(weekday="Monday", time_label="14:00-16:00", subject="Lab", sub_batches=("B2",)),
            TimetableSlot(weekday="Tuesday", time_label="09:00-10:00", subject="Algorithms"),
        ]
    )
    container.attendance_service.mark(1, subject="Operating Systems", class_date=MONDAY, status="absent")

    board = container.attendance_service.today_board(1, batch="B1", on_date=MONDAY)

    assert [(c["subject"], c["status"]) for c in board] == [
        ("Data Structures", None),
        ("Operating Systems", "absent"),
    ]
    assert board[0] == {
        "time": "09:00-10:00",
        "subject": "Data Structures",
        "room": "CSE-101",
        "date": "2026-01-05",
        "status": None,
    }


def test_day_off_matches_stats_of_record_set_without_it(container):
    svc = container.attendance_service
    svc.mark(1, subject="Networks", class_date="2026-01-05", status="present")
    svc.mark(1, subject="Networks", class_date="2026-01-06", status="absent")
    svc.mark(1, subject="Networks", class_date="2026-01-07", status="present")

    svc.mark(1, subject="Networks", class_date="2026-01-06", status="off")

    expected = AttendanceAggregator().subject_stats(
        [
            AttendanceRecord(subject="Networks", class_date=date(2026, 1, 5), is_present=True),
            AttendanceRecord(subject="Networks", class_date=date(2026, 1, 7), is_present=True),
        ]
    )
    assert svc.summary(1).subjects == expected
