# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from taskboard.db.session import build_engine, create_db_and_tables, get_session
from taskboard.domain.entities import Tag
from taskboard.main import app
from taskboard.services.association import TaskTagAssociationService
from taskboard.services.tags import TagService
from taskboard.services.tasks import TaskService

from .fakes import FakeClock, InMemoryTagStore, InMemoryTaskStore


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def tag_store() -> InMemoryTagStore:
    return InMemoryTagStore(
        [
            Tag(id="tag-a", name="A", color="#ff0000"),
            Tag(id="tag-b", name="B", color="#00ff00"),
            Tag(id="tag-c", name="C", color="#0000ff"),
        ]
    )


@pytest.fixture()
def associations(
    task_store: InMemoryTaskStore, tag_store: InMemoryTagStore, clock: FakeClock
) -> TaskTagAssociationService:
    return TaskTagAssociationService(task_store, tag_store, clock=clock)


@pytest.fixture()
def task_service(
    task_store: InMemoryTaskStore, associations: TaskTagAssociationService, clock: FakeClock
) -> TaskService:
    return TaskService(task_store, associations, clock=clock)


@pytest.fixture()
def tag_service(
    tag_store: InMemoryTagStore, associations: TaskTagAssociationService
) -> TagService:
    return TagService(tag_store, associations)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """
    In-memory SQLite shared across connections (StaticPool), tables created
    fresh for each test.
    """
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    def _get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    # Not entered as a context manager: the lifespan would create tables on
    # the configured database instead of the test engine.
    yield TestClient(app)
    app.dependency_overrides.clear()
