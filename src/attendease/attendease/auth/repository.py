from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import OtpPurpose
from .model import AuthSession, OtpCode


class OtpRepository(Protocol):
    def save(self, otp: OtpCode) -> None:
        """Store a code, dropping any earlier code for the same email."""

        raise NotImplementedError

    def find_valid(self, *, email: str, code: str, purpose: OtpPurpose, now: datetime) -> Optional[OtpCode]:
        raise NotImplementedError

    def delete_for_email(self, email: str) -> None:
        raise NotImplementedError


class SessionRepository(Protocol):
    def save(self, session: AuthSession) -> None:
        raise NotImplementedError

    def get_valid(self, token: str, *, now: datetime) -> Optional[AuthSession]:
        raise NotImplementedError

    def delete(self, token: str) -> bool:
        raise NotImplementedError

    def delete_for_subject(self, subject_id: str) -> int:
        raise NotImplementedError
