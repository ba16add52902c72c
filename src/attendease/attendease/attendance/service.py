from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from ..common.datetime_utils import parse_iso_date, weekday_name
from ..common.validators import require_non_empty
from ..core.enums import MarkStatus
from ..core.exceptions import ValidationError
from ..timetable.service import TimetableService
from .aggregator import AttendanceAggregator
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _as_status(value: Union[str, MarkStatus]) -> MarkStatus:
    try:
        return MarkStatus(value)
    except ValueError:
        raise ValidationError("Status must be one of: present, absent, off") from None


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        timetable: Optional[TimetableService] = None,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
    ):
        self._attendance = attendance
        self._timetable = timetable
        self._aggregator = aggregator or AttendanceAggregator()

    @property
    def threshold(self):
        return self._aggregator.threshold

    def mark(self, user_id: int, *, subject: str, class_date: Union[str, date], status: Union[str, MarkStatus]) -> dict:
        subject = require_non_empty(subject, "Subject")
        day = parse_iso_date(class_date)
        status = _as_status(status)

        if status == MarkStatus.OFF:
            removed = self._attendance.delete(user_id=user_id, subject=subject, class_date=day)
            logger.debug("Day off user=%s subject=%s date=%s removed=%s", user_id, subject, day, removed)
        else:
            self._attendance.upsert(
                user_id=user_id,
                subject=subject,
                class_date=day,
                is_present=status == MarkStatus.PRESENT,
            )

        return {"subject": subject, "date": day.isoformat(), "status": status.value}

    def history(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        subject: Optional[str] = None,
    ) -> list[dict]:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date must not be after end date")

        rows = self._attendance.list_for_user(user_id, start_date=start_date, end_date=end_date, subject=subject)
        return [self._to_ui(r) for r in rows]

    def summary(self, user_id: int) -> AttendanceSummary:
        return self._aggregator.summarize(self._attendance.list_for_user(user_id))

    def today_board(self, user_id: int, *, batch: str, on_date: date) -> list[dict]:
        """Scheduled classes for ``on_date`` with whatever the user marked so far."""
        if self._timetable is None:
            return []

        slots = self._timetable.slots_for_day(weekday_name(on_date), batch)
        marks = {
            r.subject: r.is_present
            for r in self._attendance.list_for_user(user_id, start_date=on_date, end_date=on_date)
        }

        board = []
        for slot in slots:
            marked = marks.get(slot.subject)
            status = None
            if marked is not None:
                status = MarkStatus.PRESENT.value if marked else MarkStatus.ABSENT.value
            board.append({**slot.to_dict(), "date": on_date.isoformat(), "status": status})
        return board

    @staticmethod
    def _to_ui(r: AttendanceRecord) -> dict:
        return {
            "subject": r.subject,
            "date": r.class_date.isoformat(),
            "is_present": r.is_present,
        }
