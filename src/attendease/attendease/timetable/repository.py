from __future__ import annotations

from typing import Protocol, Sequence

from .model import TimetableSlot


class TimetableRepository(Protocol):
    def list_all(self) -> Sequence[TimetableSlot]:
        raise NotImplementedError

    def list_for_weekday(self, weekday: str) -> Sequence[TimetableSlot]:
        raise NotImplementedError

    def replace_all(self, slots: Sequence[TimetableSlot]) -> int:
        """Swap the whole timetable in one transaction.

        Returns the number of slots stored.
        """

        raise NotImplementedError
