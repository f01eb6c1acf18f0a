"""Bearer token issue and verification (HS256 JWT)."""

from __future__ import annotations

import time
from typing import Any, Dict

import jwt

from taskboard.config import settings


def issue_token(*, user_id: int, username: str) -> str:
    """Return a signed token identifying *user_id*."""

    now = int(time.time())
    payload: Dict[str, object] = {
        "sub": username,
        "user_id": user_id,
        "iss": settings.jwt_iss,
        "iat": now,
        "exp": now + settings.jwt_ttl_seconds,
    }
    if settings.jwt_aud:
        payload["aud"] = settings.jwt_aud
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def decode_token(token: str) -> Dict[str, Any]:
    """Verify *token* and return its claims; raises :class:`jwt.PyJWTError`."""

    options = {
        "verify_signature": True,
        "verify_exp": True,
        "verify_aud": bool(settings.jwt_aud),
        "verify_iss": False,
    }
    decode_kwargs: Dict[str, Any] = {
        "key": settings.jwt_secret,
        "algorithms": ["HS256"],
        "options": options,
    }
    if settings.jwt_aud:
        decode_kwargs["audience"] = settings.jwt_aud
    return jwt.decode(token, **decode_kwargs)
