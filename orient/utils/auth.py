from __future__ import annotations

from flask import g, request

from orient.extensions import db
from orient.models import User
from orient.utils.jwt_utils import decode_token, get_bearer_token


def current_user() -> User | None:
    """User behind the request's bearer token, or None.

    Resolved once per request and cached on ``g``.
    """
    if "auth_user" in g:
        return g.auth_user
    g.auth_user = None
    token = get_bearer_token(request.headers.get("Authorization", ""))
    if not token:
        return None
    payload = decode_token(token)
    if not payload or payload.get("type") != "access":
        return None
    sub = (payload.get("sub") or "").strip()
    if not sub:
        return None
    user = db.session.get(User, sub)
    g.auth_user = user
    g.auth_user_id = user.id if user else None
    return user
