from __future__ import annotations

import importlib
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from attendease.attendance.model import AttendanceRecord
from attendease.auth.model import AuthSession, OtpCode
from attendease.container import wire_services
from attendease.core.enums import OtpPurpose, Role
from attendease.core.exceptions import DeliveryError
from attendease.main import create_app
from attendease.users.model import User

FIXED_OTP = "123456"


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    def add(self, **kwargs) -> User:
        password = kwargs.pop("password", "secret123")
        n = self._next_id
        fields = dict(
            student_id=f"2023UCP{n:04d}",
            name=f"Student {n}",
            email=f"student{n}@example.com",
            branch="CSE",
            semester=3,
            batch="B1",
        )
        fields.update(kwargs)
        return self.create_user(password_hash=generate_password_hash(password), **fields)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def get_by_student_id(self, student_id: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.student_id == student_id), None)

    def create_user(self, *, student_id, name, email, password_hash, branch, semester, batch) -> User:
        user = User(
            user_id=self._next_id,
            student_id=student_id,
            name=name,
            email=email,
            password_hash=password_hash,
            branch=branch,
            semester=int(semester),
            batch=batch,
            role=Role.STUDENT,
            created_at=datetime(2026, 1, 5, 9, 0, 0),
        )
        self._by_id[user.user_id] = user
        self._next_id += 1
        return user

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, password_hash=password_hash)
        return True

    def list_students(self):
        return sorted(
            (u for u in self._by_id.values() if u.role == Role.STUDENT),
            key=lambda u: u.student_id,
        )


class InMemoryAttendance:
    def __init__(self):
        self._records: dict[tuple[int, str, date], AttendanceRecord] = {}
        self._next_id = 1

    def list_for_user(self, user_id, *, start_date=None, end_date=None, subject=None):
        rows = [r for r in self._records.values() if r.user_id == user_id]
        if start_date is not None:
            rows = [r for r in rows if r.class_date >= start_date]
        if end_date is not None:
            rows = [r for r in rows if r.class_date <= end_date]
        if subject:
            rows = [r for r in rows if r.subject == subject]
        rows.sort(key=lambda r: r.subject)
        rows.sort(key=lambda r: r.class_date, reverse=True)
        return rows

    def upsert(self, *, user_id, subject, class_date, is_present) -> None:
        key = (user_id, subject, class_date)
        existing = self._records.get(key)
        if existing:
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._next_id
            self._next_id += 1
        self._records[key] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            subject=subject,
            class_date=class_date,
            is_present=is_present,
        )

    def delete(self, *, user_id, subject, class_date) -> bool:
        return self._records.pop((user_id, subject, class_date), None) is not None

    def count(self) -> int:
        return len(self._records)


class InMemoryTimetable:
    def __init__(self, slots=()):
        self._slots = list(slots)

    def list_all(self):
        return list(self._slots)

    def list_for_weekday(self, weekday: str):
        return [s for s in self._slots if s.weekday == weekday]

    def replace_all(self, slots) -> int:
        self._slots = list(slots)
        return len(self._slots)


class InMemoryOtps:
    def __init__(self):
        self.codes: dict[str, OtpCode] = {}

    def save(self, otp: OtpCode) -> None:
        self.codes[otp.email] = otp

    def find_valid(self, *, email: str, code: str, purpose: OtpPurpose, now: datetime) -> Optional[OtpCode]:
        otp = self.codes.get(email)
        if otp and otp.code == code and otp.purpose == purpose and otp.expires_at > now:
            return otp
        return None

    def delete_for_email(self, email: str) -> None:
        self.codes.pop(email, None)


class InMemorySessions:
    def __init__(self):
        self.sessions: dict[str, AuthSession] = {}

    def save(self, session: AuthSession) -> None:
        self.sessions[session.token] = session

    def get_valid(self, token: str, *, now: datetime) -> Optional[AuthSession]:
        session = self.sessions.get(token)
        if session and session.expires_at > now:
            return session
        return None

    def delete(self, token: str) -> bool:
        return self.sessions.pop(token, None) is not None

    def delete_for_subject(self, subject_id: str) -> int:
        doomed = [t for t, s in self.sessions.items() if s.subject_id == subject_id]
        for t in doomed:
            del self.sessions[t]
        return len(doomed)


@dataclass
class RecordingMailer:
    sent: list[dict] = field(default_factory=list)
    fail: bool = False

    def send(self, *, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise DeliveryError("Failed to send email")
        self.sent.append({"to": to, "subject": subject, "body": body})


class MutableClock:
    # Starts at wall-clock time: token expiry is checked against the real clock.
    def __init__(self):
        self.now = datetime.now().replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class Store:
    users: InMemoryUsers = field(default_factory=InMemoryUsers)
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    timetable: InMemoryTimetable = field(default_factory=InMemoryTimetable)
    otps: InMemoryOtps = field(default_factory=InMemoryOtps)
    sessions: InMemorySessions = field(default_factory=InMemorySessions)
    mailer: RecordingMailer = field(default_factory=RecordingMailer)
    clock: MutableClock = field(default_factory=MutableClock)


@pytest.fixture
def settings():
    return importlib.import_module("config.testing")


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def container(settings, store):
    return wire_services(
        settings=settings,
        users_repo=store.users,
        attendance_repo=store.attendance,
        timetable_repo=store.timetable,
        otp_repo=store.otps,
        sessions_repo=store.sessions,
        mailer=store.mailer,
        clock=store.clock,
        otp_generator=lambda: FIXED_OTP,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
