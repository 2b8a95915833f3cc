# This file ensures all tables are registered on SQLModel.metadata together
from .task import TaskRecord, TaskTagLink
from .tag import TagRecord

__all__ = ["TaskRecord", "TaskTagLink", "TagRecord"]
