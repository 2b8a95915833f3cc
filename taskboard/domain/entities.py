from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
_HEX_COLOR_RE = re.compile(HEX_COLOR_PATTERN)


class TaskStatus(str, Enum):
    todo = "TODO"
    in_progress = "IN_PROGRESS"
    done = "DONE"


def utc_now() -> datetime:
    # Naive UTC so values compare equal after a round trip through SQLite
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


def is_hex_color(value: str) -> bool:
    return bool(_HEX_COLOR_RE.match(value))


@dataclass
class Task:
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    due_date: Optional[datetime] = None
    tag_ids: set[str] = field(default_factory=set)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def has_tag(self, tag_id: str) -> bool:
        return tag_id in self.tag_ids

    def touch(self, now: datetime) -> None:
        self.updated_at = now


@dataclass
class Tag:
    name: str
    color: str
    id: str = field(default_factory=new_id)
