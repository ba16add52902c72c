from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, student_id, name, email, password_hash, branch, semester, batch, role, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        student_id=row["student_id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        branch=row["branch"],
        semester=int(row["semester"]),
        batch=row["batch"],
        role=Role(row.get("role") or Role.STUDENT.value),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_student_id(self, student_id: str) -> Optional[User]:
        return self._get_one("student_id", student_id)

    def create_user(
        self,
        *,
        student_id: str,
        name: str,
        email: str,
        password_hash: str,
        branch: str,
        semester: int,
        batch: str,
    ) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(student_id, name, email, password_hash, branch, semester, batch, role)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (student_id, name, email, password_hash, branch, int(semester), batch, Role.STUDENT.value),
                )
                user_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # Lost a race with a concurrent registration; the unique keys decide.
            msg = str(e).lower()
            if "email" in msg:
                raise ConflictError("User already exists with this email") from e
            if "student_id" in msg:
                raise ConflictError("An account with this student ID already exists") from e
            raise ConflictError("Student ID or email already exists") from e

        return User(
            user_id=user_id,
            student_id=student_id,
            name=name,
            email=email,
            password_hash=password_hash,
            branch=branch,
            semester=int(semester),
            batch=batch,
        )

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def list_students(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY student_id ASC",
                (Role.STUDENT.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]
