"""Password hashing helpers."""

from __future__ import annotations

from passlib.context import CryptContext

_pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    default="pbkdf2_sha256",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Hash *password* with a per-call salt."""

    if password is None:
        raise ValueError("password must not be None")
    password = str(password)
    if password == "":
        raise ValueError("password must not be empty")
    return _pwd_context.hash(password)


def verify_password(password: str | None, hashed: str | None) -> bool:
    """Verify *password* against *hashed*; returns ``False`` on any error."""

    if not password or not hashed:
        return False
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        return False
