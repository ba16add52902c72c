from __future__ import annotations

import pytest

from attendease.core.enums import Role
from attendease.core.exceptions import AuthorizationError, ValidationError
from attendease.timetable.service import parse_timetable

UPLOAD = {
    "timetable": {
        "Monday": [
            {"time": "10:00-11:00", "subject": "Operating Systems", "room": "CSE-102"},
            {"time": "09:00-10:00", "subject": "Data Structures", "room": "CSE-101"},
        ],
        "wednesday": [
            {"time": "14:00-16:00", "subject": "DS Lab", "room": "Lab-1", "subBatches": ["B1"]},
            {"time": "14:00-16:00", "subject": "OS Lab", "room": "Lab-2", "subBatches": ["B2"]},
        ],
    }
}


def test_parse_accepts_wrapped_and_normalizes_weekday():
    slots = parse_timetable(UPLOAD)
    assert len(slots) == 4
    assert {s.weekday for s in slots} == {"Monday", "Wednesday"}
    assert slots[2].sub_batches == ("B1",)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"Funday": []},
        {"Monday": {"time": "09:00"}},
        {"Monday": [{"subject": "Algorithms"}]},
        {"Monday": [{"time": "09:00-10:00", "subject": " "}]},
        {"Monday": [{"time": "09:00-10:00", "subject": "X", "subBatches": "B1"}]},
    ],
)
def test_parse_rejects_malformed(payload):
    with pytest.raises(ValidationError):
        parse_timetable(payload)


def test_replace_requires_admin(container):
    with pytest.raises(AuthorizationError):
        container.timetable_service.replace_timetable(UPLOAD, current_role=Role.STUDENT)


def test_week_for_batch_filters_sub_batches_and_sorts(container):
    svc = container.timetable_service
    assert svc.replace_timetable(UPLOAD, current_role=Role.ADMIN) == 4

    week = svc.week_for_batch("B2")

    assert list(week) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert [c["subject"] for c in week["Monday"]] == ["Data Structures", "Operating Systems"]
    assert week["Tuesday"] == []
    assert week["Wednesday"] == [
        {"time": "14:00-16:00", "subject": "OS Lab", "room": "Lab-2", "subBatches": ["B2"]}
    ]


def test_weekend_appears_only_when_scheduled(container):
    svc = container.timetable_service
    svc.replace_timetable({"Saturday": [{"time": "09:00-10:00", "subject": "Seminar"}]}, current_role=Role.ADMIN)

    week = svc.week_for_batch("B1")
    assert "Saturday" in week
    assert "Sunday" not in week


def test_slots_for_day(container):
    svc = container.timetable_service
    svc.replace_timetable(UPLOAD, current_role=Role.ADMIN)

    assert [s.subject for s in svc.slots_for_day("Wednesday", "B1")] == ["DS Lab"]
    assert svc.slots_for_day("Friday", "B1") == []
