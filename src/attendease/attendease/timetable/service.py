from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.validators import require_non_empty
from ..core.constants import TEACHING_DAYS, WEEKDAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import TimetableSlot
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


def parse_timetable(payload: Any) -> list[TimetableSlot]:
    """Turn an uploaded timetable document into slots.

    Accepts ``{"timetable": {"Monday": [...]}}`` or the inner weekday mapping.
    Each entry needs ``time`` and ``subject``; ``room`` and ``subBatches`` are optional.
    """
    if isinstance(payload, Mapping) and isinstance(payload.get("timetable"), Mapping):
        payload = payload["timetable"]
    if not isinstance(payload, Mapping):
        raise ValidationError("Timetable must map weekdays to lists of classes")

    slots: list[TimetableSlot] = []
    for day, entries in payload.items():
        weekday = str(day).strip().capitalize()
        if weekday not in WEEKDAYS:
            raise ValidationError(f"Unknown weekday: {day}")
        if not isinstance(entries, list):
            raise ValidationError(f"{weekday} must be a list of classes")

        for i, entry in enumerate(entries, start=1):
            if not isinstance(entry, Mapping):
                raise ValidationError(f"{weekday} #{i} must be an object")
            sub_batches = entry.get("subBatches") or []
            if not isinstance(sub_batches, list):
                raise ValidationError(f"{weekday} #{i}: subBatches must be a list")
            slots.append(
                TimetableSlot(
                    weekday=weekday,
                    time_label=require_non_empty(entry.get("time"), f"{weekday} #{i} time"),
                    subject=require_non_empty(entry.get("subject"), f"{weekday} #{i} subject"),
                    room=str(entry.get("room") or "").strip(),
                    sub_batches=tuple(str(b).strip() for b in sub_batches if str(b).strip()),
                )
            )
    return slots


class TimetableService:
    """Schedule source: which classes a batch has on a given weekday."""

    def __init__(self, timetable: TimetableRepository):
        self._timetable = timetable

    def slots_for_day(self, weekday: str, batch: str) -> list[TimetableSlot]:
        batch = require_non_empty(batch, "Batch")
        slots = [s for s in self._timetable.list_for_weekday(weekday) if s.applies_to(batch)]
        slots.sort(key=lambda s: s.time_label)
        return slots

    def week_for_batch(self, batch: str) -> dict[str, list[dict]]:
        batch = require_non_empty(batch, "Batch")
        week: dict[str, list[dict]] = {day: [] for day in TEACHING_DAYS}
        for slot in sorted(self._timetable.list_all(), key=lambda s: s.time_label):
            if slot.applies_to(batch):
                week.setdefault(slot.weekday, []).append(slot.to_dict())
        return {day: week[day] for day in WEEKDAYS if day in week}

    def replace_timetable(self, payload: Any, *, current_role: Role) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        slots: Sequence[TimetableSlot] = parse_timetable(payload)
        count = self._timetable.replace_all(slots)
        logger.info("Timetable replaced with %d slots", count)
        return count
