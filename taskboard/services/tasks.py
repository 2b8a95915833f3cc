from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Optional

from ..core.errors import NotFoundError, ValidationError
from ..domain.entities import Task, TaskStatus, utc_now
from ..domain.ports import TaskStore
from .association import TaskListing, TaskTagAssociationService

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "description", "status", "due_date")


def _clean_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError("title must not be empty")
    return title.strip()


class TaskService:
    """Task lifecycle: create, read, update and delete."""

    def __init__(
        self,
        task_store: TaskStore,
        associations: TaskTagAssociationService,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tasks = task_store
        self._associations = associations
        self._clock = clock

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        status: TaskStatus = TaskStatus.todo,
        due_date: Optional[datetime] = None,
        tag_ids: Iterable[str] = (),
    ) -> Task:
        title = _clean_title(title)
        # Resolved before the single save so a strict-policy failure writes nothing
        resolved = self._associations.resolve_tag_ids(tag_ids)

        now = self._clock()
        task = Task(
            title=title,
            description=description,
            status=TaskStatus(status),
            due_date=due_date,
            tag_ids=resolved,
            created_at=now,
            updated_at=now,
        )
        task = self._tasks.save(task)
        logger.info("Task created id=%s status=%s tags=%d", task.id, task.status.value, len(task.tag_ids))
        return task

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError.for_entity("Task", task_id)
        return task

    def list_tasks(
        self,
        status: Optional[TaskStatus] = None,
        tag_id: Optional[str] = None,
    ) -> TaskListing:
        return self._associations.list_by_filter(status=status, tag_id=tag_id)

    def update_task(self, task_id: str, **changes: Any) -> Task:
        """
        Apply a partial update. Keys outside title/description/status/due_date
        are rejected; status may move between any two values.
        """
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        task = self.get_task(task_id)
        if "title" in changes:
            changes["title"] = _clean_title(changes["title"])
        if changes.get("status") is not None:
            changes["status"] = TaskStatus(changes["status"])
        elif "status" in changes:
            raise ValidationError("status must not be null")

        changed = False
        for key, value in changes.items():
            if getattr(task, key) != value:
                setattr(task, key, value)
                changed = True

        if not changed:
            return task

        task.touch(self._clock())
        return self._tasks.save(task)

    def delete_task(self, task_id: str) -> None:
        self.get_task(task_id)
        self._tasks.delete(task_id)
        logger.info("Task deleted id=%s", task_id)
