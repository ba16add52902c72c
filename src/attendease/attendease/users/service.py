from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty, require_positive_int
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ConflictError, DeliveryError, NotFoundError
from ..notifications import messages
from ..notifications.mailer import Mailer
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: student registration and profile."""

    def __init__(self, users: UserRepository, mailer: Optional[Mailer] = None):
        self._users = users
        self._mailer = mailer

    def register(
        self,
        *,
        student_id: str,
        name: str,
        email: str,
        password: str,
        branch: str,
        semester,
        batch: str,
    ) -> User:
        student_id = require_non_empty(student_id, "Student ID")
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        branch = require_non_empty(branch, "Branch")
        semester = require_positive_int(semester, "Semester")
        batch = require_non_empty(batch, "Batch")

        if self._users.get_by_email(email):
            raise ConflictError("User already exists with this email")
        if self._users.get_by_student_id(student_id):
            raise ConflictError("An account with this student ID already exists")

        user = self._users.create_user(
            student_id=student_id,
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            branch=branch,
            semester=semester,
            batch=batch,
        )
        logger.info("Registered student %s (%s)", user.student_id, user.email)

        if self._mailer is not None:
            subject, body = messages.welcome(user.name)
            try:
                self._mailer.send(to=user.email, subject=subject, body=body)
            except DeliveryError:
                # Registration stands even if the greeting bounces.
                logger.warning("Welcome mail to %s was not delivered", user.email)

        return user

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
