from __future__ import annotations

import uuid
from datetime import datetime, timezone

from jose import JWTError, jwt

from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


class TokenCodec:
    """Signs and checks bearer tokens.

    The signature only proves the token was issued here; whether it is still
    live is decided by the session store.
    """

    def __init__(self, secret: str, *, algorithm: str = ALGORITHM):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm

    def encode(self, subject_id: str, *, expires_at: datetime) -> str:
        if expires_at.tzinfo is None:
            expires_at = expires_at.astimezone(timezone.utc)
        claims = {
            "sub": str(subject_id),
            "exp": expires_at,
            # unique per issue so two logins in the same second get distinct tokens
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationError("Invalid or expired token") from None

        subject_id = payload.get("sub")
        if not subject_id:
            raise AuthenticationError("Invalid or expired token")
        return str(subject_id)
