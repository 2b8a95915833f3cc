# tests/test_association.py

from __future__ import annotations

from datetime import datetime

import pytest

from taskboard.core.errors import NotFoundError
from taskboard.domain.entities import Task, TaskStatus
from taskboard.services.association import AttachPolicy, TaskTagAssociationService

from .fakes import FakeClock, InMemoryTagStore, InMemoryTaskStore


def _task(task_id: str, created_second: int, **kwargs) -> Task:
    created = datetime(2026, 1, 1, 0, 0, created_second)
    return Task(id=task_id, title=f"task {task_id}", created_at=created, updated_at=created, **kwargs)


def test_attach_existing_tags_is_idempotent(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1))

    first = associations.attach_tags("t1", {"tag-a", "tag-b"})
    assert first.tag_ids == {"tag-a", "tag-b"}

    second = associations.attach_tags("t1", {"tag-a", "tag-b"})
    assert second.tag_ids == first.tag_ids
    assert task_store.get("t1").tag_ids == {"tag-a", "tag-b"}


def test_attach_already_attached_tag_refreshes_updated_at(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    original = task_store.save(_task("t1", 1, tag_ids={"tag-a"}))

    task = associations.attach_tags("t1", {"tag-a"})

    assert task.tag_ids == {"tag-a"}
    assert task.updated_at > original.updated_at
    assert task_store.get("t1").updated_at == task.updated_at


def test_attach_keeps_previously_attached_tags(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1, tag_ids={"tag-c"}))

    task = associations.attach_tags("t1", ["tag-a"])

    assert task.tag_ids == {"tag-a", "tag-c"}
    assert task_store.get("t1").tag_ids == {"tag-a", "tag-c"}


def test_attach_skips_unknown_tag_ids(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1))

    task = associations.attach_tags("t1", {"tag-a", "missing"})

    assert task.tag_ids == {"tag-a"}


def test_attach_refreshes_updated_at_on_change(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    original = task_store.save(_task("t1", 1))

    task = associations.attach_tags("t1", {"tag-a"})

    assert task.updated_at > original.updated_at
    assert task.created_at == original.created_at


def test_attach_only_unknown_ids_keeps_tags_but_refreshes_updated_at(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    original = task_store.save(_task("t1", 1))

    task = associations.attach_tags("t1", {"nope"})

    assert task.tag_ids == set()
    assert task.updated_at > original.updated_at


def test_attach_to_missing_task_raises(associations: TaskTagAssociationService) -> None:
    with pytest.raises(NotFoundError):
        associations.attach_tags("missing", {"tag-a"})


def test_strict_policy_rejects_unknown_tag(
    task_store: InMemoryTaskStore, tag_store: InMemoryTagStore
) -> None:
    service = TaskTagAssociationService(
        task_store, tag_store, policy=AttachPolicy.strict, clock=FakeClock()
    )
    task_store.save(_task("t1", 1))

    with pytest.raises(NotFoundError, match="missing"):
        service.attach_tags("t1", {"tag-a", "missing"})

    assert task_store.get("t1").tag_ids == set()


def test_strict_policy_accepts_string_value(
    task_store: InMemoryTaskStore, tag_store: InMemoryTagStore
) -> None:
    service = TaskTagAssociationService(task_store, tag_store, policy="strict")
    task_store.save(_task("t1", 1))

    with pytest.raises(NotFoundError):
        service.attach_tags("t1", {"missing"})


def test_detach_removes_tag(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    original = task_store.save(_task("t1", 1, tag_ids={"tag-a", "tag-b"}))

    task = associations.detach_tag("t1", "tag-a")

    assert task.tag_ids == {"tag-b"}
    assert task.updated_at > original.updated_at


def test_detach_unattached_tag_is_noop(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    original = task_store.save(_task("t1", 1, tag_ids={"tag-a"}))

    task = associations.detach_tag("t1", "tag-b")

    assert task == original
    assert task_store.save_calls == 1


def test_detach_from_missing_task_raises(associations: TaskTagAssociationService) -> None:
    with pytest.raises(NotFoundError):
        associations.detach_tag("missing", "tag-a")


def test_list_by_filter_orders_by_created_at_then_id(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t3", 3))
    task_store.save(_task("b", 1))
    task_store.save(_task("a", 1))
    task_store.save(_task("t2", 2))

    ids = [t.id for t in associations.list_by_filter()]

    assert ids == ["a", "b", "t2", "t3"]


def test_list_by_filter_status(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1, status=TaskStatus.done))
    task_store.save(_task("t2", 2, status=TaskStatus.todo))
    task_store.save(_task("t3", 3, status=TaskStatus.done))

    ids = [t.id for t in associations.list_by_filter(status=TaskStatus.done)]

    assert ids == ["t1", "t3"]


def test_list_by_filter_status_and_tag_is_intersection(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1, status=TaskStatus.done, tag_ids={"tag-a"}))
    task_store.save(_task("t2", 2, status=TaskStatus.done, tag_ids={"tag-b"}))
    task_store.save(_task("t3", 3, status=TaskStatus.todo, tag_ids={"tag-a"}))

    ids = [t.id for t in associations.list_by_filter(status=TaskStatus.done, tag_id="tag-a")]

    assert ids == ["t1"]


def test_listing_is_lazy_and_restartable(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    listing = associations.list_by_filter(tag_id="tag-a")
    assert task_store.list_calls == 0

    assert list(listing) == []

    task_store.save(_task("t1", 1, tag_ids={"tag-a"}))
    first = [t.id for t in listing]
    second = [t.id for t in listing]

    assert first == second == ["t1"]
    assert task_store.list_calls == 3
    assert task_store.save_calls == 1


def test_on_tag_deleted_removes_from_every_task(
    associations: TaskTagAssociationService, task_store: InMemoryTaskStore
) -> None:
    task_store.save(_task("t1", 1, tag_ids={"tag-a", "tag-b"}))
    task_store.save(_task("t2", 2, tag_ids={"tag-b"}))
    task_store.save(_task("t3", 3, tag_ids={"tag-a"}))

    assert associations.on_tag_deleted("tag-b") == 2

    assert task_store.get("t1").tag_ids == {"tag-a"}
    assert task_store.get("t2").tag_ids == set()
    assert task_store.get("t3").tag_ids == {"tag-a"}

    saves = task_store.save_calls
    assert associations.on_tag_deleted("tag-b") == 0
    assert task_store.save_calls == saves


def test_on_tag_deleted_without_references(associations: TaskTagAssociationService) -> None:
    assert associations.on_tag_deleted("tag-c") == 0


def test_two_task_scenario(
    associations: TaskTagAssociationService,
    task_store: InMemoryTaskStore,
    tag_store: InMemoryTagStore,
) -> None:
    task_store.save(_task("T1", 1, status=TaskStatus.todo))
    task_store.save(_task("T2", 2, status=TaskStatus.done))
    associations.attach_tags("T1", {"tag-a"})
    associations.attach_tags("T2", {"tag-a", "tag-b"})

    assert [t.id for t in associations.list_by_filter(tag_id="tag-a")] == ["T1", "T2"]
    assert [t.id for t in associations.list_by_filter(status=TaskStatus.done, tag_id="tag-b")] == ["T2"]

    tag_store.delete("tag-b")
    associations.on_tag_deleted("tag-b")

    assert list(associations.list_by_filter(tag_id="tag-b")) == []


def test_resolve_tag_ids_follows_policy(
    task_store: InMemoryTaskStore, tag_store: InMemoryTagStore
) -> None:
    skip = TaskTagAssociationService(task_store, tag_store)
    strict = TaskTagAssociationService(task_store, tag_store, policy=AttachPolicy.strict)

    assert skip.resolve_tag_ids(["tag-a", "ghost"]) == {"tag-a"}
    # ids already held are kept without a lookup
    assert strict.resolve_tag_ids(["gone", "tag-b"], current={"gone"}) == {"gone", "tag-b"}
    with pytest.raises(NotFoundError, match="ghost"):
        strict.resolve_tag_ids(["tag-a", "ghost"])
