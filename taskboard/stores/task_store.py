from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ..domain.entities import Task, TaskStatus
from ..models.task import TaskRecord, TaskTagLink

logger = logging.getLogger(__name__)


class SqlTaskStore:
    """
    Task store over a SQLModel session.

    `save` writes the task row and reconciles its join rows in a single commit,
    so one task's read-modify-write lands atomically.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_task(record: TaskRecord) -> Task:
        return Task(
            id=record.id,
            title=record.title,
            description=record.description,
            status=TaskStatus(record.status),
            due_date=record.due_date,
            tag_ids={link.tag_id for link in record.tag_links},
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def get(self, task_id: str) -> Optional[Task]:
        record = self._session.get(TaskRecord, task_id)
        return self._to_task(record) if record else None

    def save(self, task: Task) -> Task:
        record = self._session.get(TaskRecord, task.id)
        if record is None:
            record = TaskRecord(id=task.id, created_at=task.created_at)

        record.title = task.title
        record.description = task.description
        record.status = task.status
        record.due_date = task.due_date
        record.updated_at = task.updated_at

        # Dropped links are deleted as orphans; only new ones are inserted.
        wanted = set(task.tag_ids)
        record.tag_links = [link for link in record.tag_links if link.tag_id in wanted]
        present = {link.tag_id for link in record.tag_links}
        for tag_id in sorted(wanted - present):
            record.tag_links.append(TaskTagLink(task_id=task.id, tag_id=tag_id))

        self._session.add(record)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(record)
        return self._to_task(record)

    def list(self) -> list[Task]:
        statement = (
            select(TaskRecord)
            .options(selectinload(TaskRecord.tag_links))
            .order_by(TaskRecord.created_at, TaskRecord.id)
        )
        return [self._to_task(r) for r in self._session.exec(statement).all()]

    def delete(self, task_id: str) -> None:
        record = self._session.get(TaskRecord, task_id)
        if record is None:
            return
        self._session.delete(record)
        self._session.commit()
        logger.debug("Task row deleted id=%s", task_id)
