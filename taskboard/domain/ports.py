"""
Storage ports used by the services.

Services depend on these Protocols rather than on concrete stores, so the SQL
stores can be swapped for in-memory ones in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .entities import Tag, Task


class TaskStore(Protocol):
    def get(self, task_id: str) -> Optional[Task]: ...
    def save(self, task: Task) -> Task: ...
    def list(self) -> list[Task]: ...
    def delete(self, task_id: str) -> None: ...


class TagStore(Protocol):
    def get(self, tag_id: str) -> Optional[Tag]: ...
    def get_by_name(self, name: str) -> Optional[Tag]: ...
    def exists(self, tag_id: str) -> bool: ...
    def save(self, tag: Tag) -> Tag: ...
    def list(self) -> list[Tag]: ...
    def delete(self, tag_id: str) -> None: ...
