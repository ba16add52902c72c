from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        subject: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start_date is not None:
            clauses.append("class_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("class_date <= %s")
            params.append(end_date)
        if subject:
            clauses.append("subject=%s")
            params.append(subject)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, user_id, subject, class_date, is_present
                FROM attendance_records
                WHERE {where}
                ORDER BY class_date DESC, subject ASC
                """,
                tuple(params),
            )
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    subject=r["subject"],
                    class_date=normalize_mysql_date(r["class_date"]),
                    is_present=bool(r["is_present"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, user_id: int, subject: str, class_date: date, is_present: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, subject, class_date, is_present)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE is_present=VALUES(is_present)
                """,
                (int(user_id), subject, class_date, 1 if is_present else 0),
            )

    def delete(self, *, user_id: int, subject: str, class_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE user_id=%s AND subject=%s AND class_date=%s",
                (int(user_id), subject, class_date),
            )
            return cur.rowcount > 0
