from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..core.constants import ADMIN_SUBJECT_ID
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.model import User

if TYPE_CHECKING:
    from .service import AuthService


def bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    if not authorization_header:
        return None
    scheme, _, token = authorization_header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@dataclass(frozen=True)
class ClientSession:
    """Who is calling, resolved once per request and passed to the views that need it.

    Loaded from the bearer token at the start of a request, cleared on logout.
    """

    token: str
    subject_id: str
    role: Role
    user: Optional[User] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def user_id(self) -> int:
        if self.user is None:
            raise AuthenticationError("Student account required")
        return self.user.user_id

    def public_user(self) -> dict:
        if self.user is not None:
            return self.user.public_dict()
        return {"id": ADMIN_SUBJECT_ID, "name": "Admin", "role": Role.ADMIN.value}

    @classmethod
    def load(cls, auth: "AuthService", authorization_header: Optional[str]) -> "ClientSession":
        token = bearer_token(authorization_header)
        if not token:
            raise AuthenticationError("Access token required")
        return auth.resolve(token)

    def clear(self, auth: "AuthService") -> None:
        auth.logout(self.token)
