"""Repository wrapper for :class:`~taskboard.domain.models.ProjectMember` rows."""

from __future__ import annotations

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.domain import models as m
from taskboard.domain.errors import ConflictError


class ProjectMemberService:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all_for_user_id(self, user_id: int) -> List[m.ProjectMember]:
        return (
            self._db.query(m.ProjectMember)
            .filter(m.ProjectMember.user_id == user_id)
            .order_by(m.ProjectMember.id.asc())
            .all()
        )

    def find_all_for_project(self, project_id: int) -> List[m.ProjectMember]:
        return (
            self._db.query(m.ProjectMember)
            .filter(m.ProjectMember.project_id == project_id)
            .order_by(m.ProjectMember.id.asc())
            .all()
        )

    def find_membership(self, project_id: int, user_id: int) -> m.ProjectMember | None:
        return (
            self._db.query(m.ProjectMember)
            .filter(m.ProjectMember.project_id == project_id, m.ProjectMember.user_id == user_id)
            .one_or_none()
        )

    def create_member(self, member: m.ProjectMember) -> m.ProjectMember:
        self._db.add(member)
        try:
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            raise ConflictError("User is already a member of this project") from exc
        self._db.refresh(member)
        return member
