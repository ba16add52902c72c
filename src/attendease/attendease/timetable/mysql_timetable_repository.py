from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TimetableSlot
from .repository import TimetableRepository


def _split_batches(value) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(b.strip() for b in str(value).split(",") if b.strip())


def _to_slot(r: dict) -> TimetableSlot:
    return TimetableSlot(
        slot_id=int(r["slot_id"]),
        weekday=r["weekday"],
        time_label=r["time_label"],
        subject=r["subject"],
        room=r.get("room") or "",
        sub_batches=_split_batches(r.get("sub_batches")),
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimetableSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT slot_id, weekday, time_label, subject, room, sub_batches
                FROM timetable_slots
                ORDER BY FIELD(weekday,'Monday','Tuesday','Wednesday','Thursday','Friday','Saturday','Sunday'),
                         time_label ASC
                """
            )
            return [_to_slot(r) for r in fetchall(cur)]

    def list_for_weekday(self, weekday: str) -> Sequence[TimetableSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT slot_id, weekday, time_label, subject, room, sub_batches
                FROM timetable_slots
                WHERE weekday=%s
                ORDER BY time_label ASC
                """,
                (weekday,),
            )
            return [_to_slot(r) for r in fetchall(cur)]

    def replace_all(self, slots: Sequence[TimetableSlot]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetable_slots")
            if slots:
                cur.executemany(
                    """
                    INSERT INTO timetable_slots(weekday, time_label, subject, room, sub_batches)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    [
                        (s.weekday, s.time_label, s.subject, s.room or None, ",".join(s.sub_batches) or None)
                        for s in slots
                    ],
                )
            return len(slots)
