from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_student_id(self, student_id: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def list_students(self) -> Sequence[User]:
        raise NotImplementedError
