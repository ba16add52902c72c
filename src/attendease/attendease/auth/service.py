from __future__ import annotations

import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_min_length, require_non_empty, require_string
from ..core.constants import (
    ADMIN_SUBJECT_ID,
    DEFAULT_OTP_EXPIRY_MINUTES,
    DEFAULT_SESSION_DAYS,
    MIN_PASSWORD_LENGTH,
    OTP_LENGTH,
)
from ..core.enums import OtpPurpose, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..notifications import messages
from ..notifications.mailer import Mailer
from ..users.model import User
from ..users.repository import UserRepository
from .model import AuthSession, LoginResult, OtpCode
from .repository import OtpRepository, SessionRepository
from .session import ClientSession
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


class AuthService:
    """Use cases: password login, e-mail OTP login, password reset, admin login, logout."""

    def __init__(
        self,
        users: UserRepository,
        otps: OtpRepository,
        sessions: SessionRepository,
        tokens: TokenCodec,
        mailer: Mailer,
        *,
        admin_email: str = "",
        admin_password: str = "",
        session_days: int = DEFAULT_SESSION_DAYS,
        otp_minutes: int = DEFAULT_OTP_EXPIRY_MINUTES,
        clock: Callable[[], datetime] = now_local,
        otp_generator: Callable[[], str] = generate_otp,
    ):
        self._users = users
        self._otps = otps
        self._sessions = sessions
        self._tokens = tokens
        self._mailer = mailer
        self._admin_email = (admin_email or "").strip().lower()
        self._admin_password = admin_password or ""
        self._session_days = int(session_days)
        self._otp_minutes = int(otp_minutes)
        self._clock = clock
        self._otp_generator = otp_generator

    # sessions

    def _open_session(self, subject_id: str) -> tuple[str, datetime]:
        expires_at = self._clock() + timedelta(days=self._session_days)
        token = self._tokens.encode(subject_id, expires_at=expires_at)
        self._sessions.save(AuthSession(token=token, subject_id=subject_id, expires_at=expires_at))
        return token, expires_at

    def _login(self, user: User) -> LoginResult:
        token, expires_at = self._open_session(str(user.user_id))
        logger.info("User %s logged in", user.email)
        return LoginResult(token=token, user=user.public_dict(), expires_at=expires_at)

    def resolve(self, token: str) -> ClientSession:
        subject_id = self._tokens.decode(token)

        session = self._sessions.get_valid(token, now=self._clock())
        if not session or session.subject_id != subject_id:
            raise AuthenticationError("Session expired")

        if subject_id == ADMIN_SUBJECT_ID:
            return ClientSession(token=token, subject_id=subject_id, role=Role.ADMIN)

        user = self._users.get_by_id(int(subject_id)) if subject_id.isdigit() else None
        if not user:
            raise AuthenticationError("User not found")
        return ClientSession(token=token, subject_id=subject_id, role=user.role, user=user)

    def logout(self, token: str) -> None:
        if token:
            self._sessions.delete(token)

    # password login

    def login_with_password(self, email: str, password: str) -> LoginResult:
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Password")
        require_string(password, "Password")

        user = self._users.get_by_email(email)
        try:
            ok = bool(user) and check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hash in the store
            ok = False

        if not ok:
            logger.info("Failed password login for %s", email)
            raise AuthenticationError("Invalid credentials")
        return self._login(user)

    def admin_login(self, email: str, password: str) -> LoginResult:
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Password")
        require_string(password, "Password")

        if not self._admin_email or not self._admin_password:
            raise AuthenticationError("Invalid admin credentials")
        email_ok = hmac.compare_digest(email, self._admin_email)
        password_ok = hmac.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8"))
        if not (email_ok and password_ok):
            logger.warning("Failed admin login for %s", email)
            raise AuthenticationError("Invalid admin credentials")

        token, expires_at = self._open_session(ADMIN_SUBJECT_ID)
        admin = {"id": ADMIN_SUBJECT_ID, "email": email, "name": "Admin", "role": Role.ADMIN.value}
        logger.info("Admin logged in")
        return LoginResult(token=token, user=admin, expires_at=expires_at)

    # one-time codes

    def _issue_otp(self, email: str, purpose: OtpPurpose) -> None:
        email = require_email(email)
        if not self._users.get_by_email(email):
            raise NotFoundError("User not found. Please register first.")

        code = self._otp_generator()
        self._otps.save(
            OtpCode(
                email=email,
                code=code,
                purpose=purpose,
                expires_at=self._clock() + timedelta(minutes=self._otp_minutes),
            )
        )

        if purpose == OtpPurpose.LOGIN:
            subject, body = messages.login_otp(code, minutes=self._otp_minutes)
        else:
            subject, body = messages.password_reset_otp(code, minutes=self._otp_minutes)
        self._mailer.send(to=email, subject=subject, body=body)

    def _consume_otp(self, email: str, code: str, purpose: OtpPurpose) -> User:
        email = require_non_empty(email, "Email").lower()
        code = require_non_empty(code, "OTP")

        if not self._otps.find_valid(email=email, code=code, purpose=purpose, now=self._clock()):
            raise ValidationError("Invalid or expired OTP")

        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        self._otps.delete_for_email(email)
        return user

    def request_login_otp(self, email: str) -> None:
        self._issue_otp(email, OtpPurpose.LOGIN)

    def verify_login_otp(self, email: str, code: str) -> LoginResult:
        return self._login(self._consume_otp(email, code, OtpPurpose.LOGIN))

    def request_password_reset(self, email: str) -> None:
        self._issue_otp(email, OtpPurpose.PASSWORD_RESET)

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        user = self._consume_otp(email, code, OtpPurpose.PASSWORD_RESET)

        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password))
        revoked = self._sessions.delete_for_subject(str(user.user_id))
        logger.info("Password reset for %s, %d sessions revoked", user.email, revoked)
