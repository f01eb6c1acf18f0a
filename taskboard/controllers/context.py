"""Explicit per-request context handed to controller methods."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel

from taskboard.domain.errors import UnauthorizedError, ValidationError
from taskboard.domain.schemas import MAX_ID

BodyT = TypeVar("BodyT", bound=BaseModel)


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a bearer token."""

    user_id: int
    username: str | None = None

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Identity":
        raw = claims.get("user_id")
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise UnauthorizedError()
        try:
            user_id = int(raw)
        except ValueError as exc:
            raise UnauthorizedError() from exc
        if not 0 < user_id <= MAX_ID:
            raise UnauthorizedError()
        sub = claims.get("sub")
        return cls(user_id=user_id, username=str(sub) if sub is not None else None)


@dataclass(frozen=True)
class RequestContext:
    """Decoded identity, raw path parameters and parsed body of one request."""

    identity: Identity | None = None
    params: Mapping[str, str] = field(default_factory=dict)
    body: BaseModel | None = None

    @classmethod
    def build(
        cls,
        claims: Mapping[str, Any] | None = None,
        *,
        body: BaseModel | None = None,
        **params: Any,
    ) -> "RequestContext":
        identity = Identity.from_claims(claims) if claims else None
        return cls(identity=identity, params={key: str(value) for key, value in params.items()}, body=body)

    @property
    def user_id(self) -> int:
        if self.identity is None:
            raise UnauthorizedError()
        return self.identity.user_id

    def int_param(self, name: str) -> int:
        """Parse path parameter *name* as a base-10 integer."""

        raw = self.params.get(name)
        if raw is None:
            raise ValidationError(f"Missing path parameter '{name}'")
        value = raw.strip()
        if not (value.isascii() and value.isdigit()):
            raise ValidationError(f"Path parameter '{name}' must be an integer")
        parsed = int(value, 10)
        if parsed > MAX_ID:
            raise ValidationError(f"Path parameter '{name}' is out of range")
        return parsed

    def body_as(self, model: Type[BodyT]) -> BodyT:
        """Return the parsed body, checking it is a *model* instance."""

        if not isinstance(self.body, model):
            raise ValidationError(f"Request body must be a {model.__name__}")
        return self.body

    def describe(self) -> Dict[str, Any]:
        return {"user_id": self.identity.user_id if self.identity else None, **dict(self.params)}
