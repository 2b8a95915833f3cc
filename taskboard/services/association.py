"""
Task <-> tag association rules.

The service holds no state of its own: both stores are injected, and every
read goes back to them. It enforces:
- a task only references tags that exist when they are attached
- deleting a tag removes it from every task that referenced it
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from enum import Enum
from typing import Optional

from ..core.errors import NotFoundError
from ..domain.entities import Task, TaskStatus, utc_now
from ..domain.ports import TagStore, TaskStore

logger = logging.getLogger(__name__)


class AttachPolicy(str, Enum):
    skip = "skip"  # attach what exists, ignore unknown ids
    strict = "strict"  # any unknown id rejects the whole call


class TaskListing:
    """
    Filtered, ordered view over the task store.

    Nothing is read until iteration starts, and each iteration re-reads the
    store, so the same listing can be walked any number of times.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        status: Optional[TaskStatus] = None,
        tag_id: Optional[str] = None,
    ) -> None:
        self._store = store
        self.status = status
        self.tag_id = tag_id

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status != self.status:
            return False
        if self.tag_id is not None and not task.has_tag(self.tag_id):
            return False
        return True

    def __iter__(self) -> Iterator[Task]:
        tasks = sorted(self._store.list(), key=lambda t: (t.created_at, t.id))
        return (t for t in tasks if self.matches(t))

    def __repr__(self) -> str:
        return f"TaskListing(status={self.status!r}, tag_id={self.tag_id!r})"


class TaskTagAssociationService:
    def __init__(
        self,
        task_store: TaskStore,
        tag_store: TagStore,
        *,
        policy: AttachPolicy = AttachPolicy.skip,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tasks = task_store
        self._tags = tag_store
        self._policy = AttachPolicy(policy)
        self._clock = clock

    def _require_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError.for_entity("Task", task_id)
        return task

    def resolve_tag_ids(self, tag_ids: Iterable[str], *, current: Iterable[str] = ()) -> set[str]:
        """
        Return the ids from `tag_ids` that name existing tags.

        Ids already in `current` are kept without a lookup. Unknown ids are
        dropped under the `skip` policy and raise NotFoundError under `strict`.
        """
        current = set(current)
        requested = set(tag_ids)
        to_check = requested - current
        valid = {t for t in to_check if self._tags.exists(t)}

        missing = to_check - valid
        if missing:
            if self._policy is AttachPolicy.strict:
                raise NotFoundError(f"Tags not found: {', '.join(sorted(missing))}")
            logger.debug("Skipping unknown tags %s", sorted(missing))
        return (requested & current) | valid

    def attach_tags(self, task_id: str, tag_ids: Iterable[str]) -> Task:
        """
        Attach existing tags to a task and refresh its `updated_at`.

        Already-attached ids are no-ops for that tag. Unknown ids follow the
        attach policy; under `strict` nothing is written.
        """
        task = self._require_task(task_id)

        added = self.resolve_tag_ids(tag_ids, current=task.tag_ids) - task.tag_ids
        task.tag_ids |= added
        task.touch(self._clock())
        if added:
            logger.debug("Attached tags task=%s tags=%s", task_id, sorted(added))
        return self._tasks.save(task)

    def detach_tag(self, task_id: str, tag_id: str) -> Task:
        task = self._require_task(task_id)
        if not task.has_tag(tag_id):
            return task

        task.tag_ids.discard(tag_id)
        task.touch(self._clock())
        logger.debug("Detached tag task=%s tag=%s", task_id, tag_id)
        return self._tasks.save(task)

    def list_by_filter(
        self,
        status: Optional[TaskStatus] = None,
        tag_id: Optional[str] = None,
    ) -> TaskListing:
        return TaskListing(self._tasks, status=status, tag_id=tag_id)

    def on_tag_deleted(self, tag_id: str) -> int:
        """Drop `tag_id` from every task holding it. Returns how many changed."""
        changed = 0
        for task in self.list_by_filter(tag_id=tag_id):
            task.tag_ids.discard(tag_id)
            task.touch(self._clock())
            self._tasks.save(task)
            changed += 1

        if changed:
            logger.info("Removed deleted tag %s from %d task(s)", tag_id, changed)
        return changed
