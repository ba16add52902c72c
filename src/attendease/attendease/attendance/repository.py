from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record source and write sink for attendance marks.

    Implementations must keep at most one record per (user, subject, date).
    """

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        subject: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of one user, newest date first."""

        raise NotImplementedError

    def upsert(self, *, user_id: int, subject: str, class_date: date, is_present: bool) -> None:
        raise NotImplementedError

    def delete(self, *, user_id: int, subject: str, class_date: date) -> bool:
        raise NotImplementedError
