"""Repository wrapper for :class:`~taskboard.domain.models.Project` rows."""

from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from taskboard.domain import models as m


class ProjectsService:
    """Finders and savers for projects; the session is owned by the caller."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all_for_user(self, user_id: int) -> List[m.Project]:
        """Return projects led by *user_id*."""

        return (
            self._db.query(m.Project)
            .filter(m.Project.leader_id == user_id)
            .order_by(m.Project.id.asc())
            .all()
        )

    def find_all_with_member(self, user_id: int) -> List[m.Project]:
        """Return projects where *user_id* holds a membership record."""

        return (
            self._db.query(m.Project)
            .join(m.ProjectMember, m.ProjectMember.project_id == m.Project.id)
            .filter(m.ProjectMember.user_id == user_id)
            .order_by(m.Project.id.asc())
            .all()
        )

    def find_project_by_id(self, project_id: int) -> m.Project | None:
        return self._db.get(m.Project, project_id)

    def create_project(self, project: m.Project) -> m.Project:
        self._db.add(project)
        self._db.commit()
        self._db.refresh(project)
        return project

    def remove_project(self, project: m.Project) -> None:
        """Delete *project* together with its tasks and memberships."""

        self._db.delete(project)
        self._db.commit()
