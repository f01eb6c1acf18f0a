"""Repository wrapper for :class:`~taskboard.domain.models.User` rows."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.domain import models as m
from taskboard.domain.errors import ConflictError


class UsersService:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_user_by_id(self, user_id: int) -> m.User | None:
        return self._db.get(m.User, user_id)

    def find_user_by_username(self, username: str) -> m.User | None:
        return self._db.query(m.User).filter(m.User.username == username).one_or_none()

    def create_user(self, user: m.User) -> m.User:
        self._db.add(user)
        try:
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            raise ConflictError("Username already taken") from exc
        self._db.refresh(user)
        return user
