"""Repository wrapper for :class:`~taskboard.domain.models.Task` rows."""

from __future__ import annotations

from typing import Any, List, Mapping

from sqlalchemy.orm import Session

from taskboard.domain import models as m


class TasksService:
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all_for_project(self, project_id: int) -> List[m.Task]:
        return (
            self._db.query(m.Task)
            .filter(m.Task.project_id == project_id)
            .order_by(m.Task.id.asc())
            .all()
        )

    def find_task_by_id(self, task_id: int) -> m.Task | None:
        return self._db.get(m.Task, task_id)

    def create_task(self, task: m.Task) -> m.Task:
        self._db.add(task)
        self._db.commit()
        self._db.refresh(task)
        return task

    def update_task(self, task: m.Task, changes: Mapping[str, Any]) -> m.Task:
        """Apply *changes* to the existing row and persist them."""

        for key, value in changes.items():
            setattr(task, key, value)
        self._db.commit()
        self._db.refresh(task)
        return task

    def delete_task(self, task: m.Task) -> None:
        self._db.delete(task)
        self._db.commit()
