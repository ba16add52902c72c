from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthorizationError
from .service import AuthService
from .session import ClientSession


def build_guards(auth: AuthService):
    """Route decorators that load the caller's ClientSession into ``g.client_session``.

    Failures raise domain errors; the app-wide handler turns them into 401/403.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.client_session = ClientSession.load(auth, request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            client = ClientSession.load(auth, request.headers.get("Authorization"))
            if not client.is_admin:
                raise AuthorizationError("Access denied")
            g.client_session = client
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def current_session() -> ClientSession:
    return g.client_session
