from sqlmodel import SQLModel, Field
from typing import List, Optional
from datetime import datetime

from ..domain.entities import Task, TaskStatus


class TaskBase(SQLModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    due_date: Optional[datetime] = None


class TaskCreate(TaskBase):
    tag_ids: List[str] = Field(default_factory=list)


class TaskRead(TaskBase):
    id: str
    tag_ids: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskRead":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            tag_ids=sorted(task.tag_ids),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None


class TagAttach(SQLModel):
    tag_ids: List[str]
