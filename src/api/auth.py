"""Shared-password admin login and bearer token checks."""

from __future__ import annotations

import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, request
from itsdangerous import BadSignature, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from api.responses import fail

TOKEN_SALT = "chess-club-admin"


class AdminTokens:
    """Issues and verifies signed, expiring admin tokens."""

    def __init__(self, *, secret_key: str, admin_password: str, max_age_seconds: int) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self._password_hash = generate_password_hash(admin_password)
        self.max_age_seconds = max_age_seconds

    def check_password(self, password: object) -> bool:
        if not isinstance(password, str) or not password:
            return False
        return check_password_hash(self._password_hash, password)

    def issue(self) -> str:
        return self._serializer.dumps({"is_admin": True, "login_time": int(time.time() * 1000)})

    def verify(self, token: str) -> dict[str, Any] | None:
        try:
            payload = self._serializer.loads(token, max_age=self.max_age_seconds)
        except BadSignature:
            return None
        if not isinstance(payload, dict) or payload.get("is_admin") is not True:
            return None
        return payload


def bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def admin_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Reject the request with 401 unless it carries a valid admin token."""

    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        token = bearer_token()
        if token is None:
            return fail("No token provided", 401)
        tokens: AdminTokens = current_app.extensions["admin_tokens"]
        payload = tokens.verify(token)
        if payload is None:
            return fail("Invalid token", 401)
        g.admin = payload
        return view(*args, **kwargs)

    return wrapped
