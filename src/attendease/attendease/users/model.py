from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a registered student.

    Note: plain data object, no DB access here.
    """

    user_id: int
    student_id: str
    name: str
    email: str
    password_hash: str
    branch: str
    semester: int
    batch: str
    role: Role = Role.STUDENT
    created_at: Optional[datetime] = None

    def public_dict(self) -> dict:
        """Everything except the password hash."""
        return {
            "id": self.user_id,
            "student_id": self.student_id,
            "name": self.name,
            "email": self.email,
            "branch": self.branch,
            "semester": self.semester,
            "batch": self.batch,
            "role": self.role.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
