from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks."""

    ADMIN = "admin"
    STUDENT = "student"


class MarkStatus(str, Enum):
    """What a student can record for a scheduled class.

    OFF means the class did not happen: the record is removed, not stored as absent.
    """

    PRESENT = "present"
    ABSENT = "absent"
    OFF = "off"


class OtpPurpose(str, Enum):
    LOGIN = "login"
    PASSWORD_RESET = "password_reset"
