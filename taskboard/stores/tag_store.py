from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import ConflictError
from ..domain.entities import Tag
from ..models.tag import TagRecord


class SqlTagStore:
    """Tag store over a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_tag(record: TagRecord) -> Tag:
        return Tag(id=record.id, name=record.name, color=record.color)

    def get(self, tag_id: str) -> Optional[Tag]:
        record = self._session.get(TagRecord, tag_id)
        return self._to_tag(record) if record else None

    def get_by_name(self, name: str) -> Optional[Tag]:
        record = self._session.exec(select(TagRecord).where(TagRecord.name == name)).first()
        return self._to_tag(record) if record else None

    def exists(self, tag_id: str) -> bool:
        return self._session.get(TagRecord, tag_id) is not None

    def save(self, tag: Tag) -> Tag:
        record = self._session.get(TagRecord, tag.id)
        if record is None:
            record = TagRecord(id=tag.id)
        record.name = tag.name
        record.color = tag.color

        self._session.add(record)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise ConflictError(f"Tag name '{tag.name}' already exists") from exc
        self._session.refresh(record)
        return self._to_tag(record)

    def list(self) -> list[Tag]:
        records = self._session.exec(select(TagRecord).order_by(TagRecord.name)).all()
        return [self._to_tag(r) for r in records]

    def delete(self, tag_id: str) -> None:
        record = self._session.get(TagRecord, tag_id)
        if record is None:
            return
        self._session.delete(record)
        self._session.commit()
