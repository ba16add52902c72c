from __future__ import annotations

from ..attendance.service import AttendanceService
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.repository import UserRepository


class AdminService:
    """Use case: admin overview of every student and their attendance."""

    def __init__(self, users: UserRepository, attendance: AttendanceService):
        self._users = users
        self._attendance = attendance

    def list_students(self, *, current_role: Role) -> list[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        out: list[dict] = []
        for user in self._users.list_students():
            summary = self._attendance.summary(user.user_id)
            out.append(
                {
                    **user.public_dict(),
                    "total_attendance_records": summary.overall.total_classes,
                    "overall_percent": summary.overall.overall_percent,
                    "subjects_below_threshold": [s.subject for s in summary.below_threshold],
                }
            )
        return out
