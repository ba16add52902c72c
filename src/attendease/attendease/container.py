from __future__ import annotations

from dataclasses import dataclass

from .admin.service import AdminService
from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_auth_repository import MySQLOtpRepository, MySQLSessionRepository
from .auth.repository import OtpRepository, SessionRepository
from .auth.service import AuthService
from .auth.tokens import TokenCodec
from .core.constants import DEFAULT_ATTENDANCE_THRESHOLD, DEFAULT_OTP_EXPIRY_MINUTES, DEFAULT_SESSION_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mailer import Mailer, build_mailer
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    timetable_repo: TimetableRepository
    otp_repo: OtpRepository
    sessions_repo: SessionRepository
    mailer: Mailer

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    timetable_service: TimetableService
    admin_service: AdminService


def wire_services(
    *,
    settings,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    timetable_repo: TimetableRepository,
    otp_repo: OtpRepository,
    sessions_repo: SessionRepository,
    mailer: Mailer,
    **auth_overrides,
) -> Container:
    """Build the services on top of any set of repositories (MySQL or in-memory)."""

    aggregator = AttendanceAggregator(
        threshold=getattr(settings, "ATTENDANCE_THRESHOLD", DEFAULT_ATTENDANCE_THRESHOLD)
    )
    timetable_service = TimetableService(timetable_repo)
    attendance_service = AttendanceService(attendance_repo, timetable_service, aggregator=aggregator)
    auth_service = AuthService(
        users_repo,
        otp_repo,
        sessions_repo,
        TokenCodec(getattr(settings, "JWT_SECRET", "") or getattr(settings, "SECRET_KEY")),
        mailer,
        admin_email=getattr(settings, "ADMIN_EMAIL", ""),
        admin_password=getattr(settings, "ADMIN_PASSWORD", ""),
        session_days=getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS),
        otp_minutes=getattr(settings, "OTP_EXPIRY_MINUTES", DEFAULT_OTP_EXPIRY_MINUTES),
        **auth_overrides,
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        timetable_repo=timetable_repo,
        otp_repo=otp_repo,
        sessions_repo=sessions_repo,
        mailer=mailer,
        auth_service=auth_service,
        user_service=UserService(users_repo, mailer),
        attendance_service=attendance_service,
        timetable_service=timetable_service,
        admin_service=AdminService(users_repo, attendance_service),
    )


def build_container(*, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    return wire_services(
        settings=settings,
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        timetable_repo=MySQLTimetableRepository(conn),
        otp_repo=MySQLOtpRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        mailer=build_mailer(settings),
    )
