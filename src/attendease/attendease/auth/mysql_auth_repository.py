from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import OtpPurpose
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AuthSession, OtpCode
from .repository import OtpRepository, SessionRepository


class MySQLOtpRepository(OtpRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, otp: OtpCode) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM otp_codes WHERE email=%s", (otp.email,))
            cur.execute(
                "INSERT INTO otp_codes(email, code, purpose, expires_at) VALUES(%s,%s,%s,%s)",
                (otp.email, otp.code, otp.purpose.value, otp.expires_at),
            )

    def find_valid(self, *, email: str, code: str, purpose: OtpPurpose, now: datetime) -> Optional[OtpCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT email, code, purpose, expires_at
                FROM otp_codes
                WHERE email=%s AND code=%s AND purpose=%s AND expires_at > %s
                """,
                (email, code, purpose.value, now),
            )
            r = fetchone(cur)
            if not r:
                return None
            return OtpCode(email=r["email"], code=r["code"], purpose=OtpPurpose(r["purpose"]), expires_at=r["expires_at"])

    def delete_for_email(self, email: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM otp_codes WHERE email=%s", (email,))


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, session: AuthSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO auth_sessions(token, subject_id, expires_at) VALUES(%s,%s,%s)",
                (session.token, session.subject_id, session.expires_at),
            )

    def get_valid(self, token: str, *, now: datetime) -> Optional[AuthSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT token, subject_id, expires_at FROM auth_sessions WHERE token=%s AND expires_at > %s",
                (token, now),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AuthSession(token=r["token"], subject_id=str(r["subject_id"]), expires_at=r["expires_at"])

    def delete(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_sessions WHERE token=%s", (token,))
            return cur.rowcount > 0

    def delete_for_subject(self, subject_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_sessions WHERE subject_id=%s", (str(subject_id),))
            return int(cur.rowcount)
