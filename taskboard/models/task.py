from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime

from ..domain.entities import TaskStatus, new_id, utc_now


class TaskTagLink(SQLModel, table=True):
    """Join table for the task <-> tag many-to-many relation."""

    __tablename__ = "task_tags"

    task_id: str = Field(foreign_key="tasks.id", primary_key=True)
    tag_id: str = Field(foreign_key="tags.id", primary_key=True, index=True)


class TaskRecord(SQLModel, table=True):
    __tablename__ = "tasks"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.todo, index=True)
    due_date: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)

    tag_links: List[TaskTagLink] = Relationship(
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
