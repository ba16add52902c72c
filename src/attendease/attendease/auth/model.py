from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import OtpPurpose


@dataclass(frozen=True)
class OtpCode:
    email: str
    code: str
    purpose: OtpPurpose
    expires_at: datetime


@dataclass(frozen=True)
class AuthSession:
    """Server-side record of an issued token; deleting it revokes the token."""

    token: str
    subject_id: str
    expires_at: datetime


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: dict
    expires_at: datetime

    def to_dict(self, message: str = "Login successful") -> dict:
        return {"message": message, "user": self.user, "token": self.token}
