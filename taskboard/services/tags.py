from __future__ import annotations

import logging
from typing import Optional

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..domain.entities import Tag, is_hex_color
from ..domain.ports import TagStore
from .association import TaskTagAssociationService

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("tag name must not be empty")
    return name.strip()


def _check_color(color: Optional[str]) -> str:
    if color is None or not is_hex_color(color):
        raise ValidationError(f"color must be #RRGGBB, got {color!r}")
    return color


class TagService:
    """
    Tag lifecycle. Deleting a tag first clears it from every task through the
    association service, then removes the tag row.
    """

    def __init__(self, tag_store: TagStore, associations: TaskTagAssociationService) -> None:
        self._tags = tag_store
        self._associations = associations

    def _ensure_unique_name(self, name: str, tag_id: Optional[str] = None) -> None:
        existing = self._tags.get_by_name(name)
        if existing is not None and existing.id != tag_id:
            raise ConflictError(f"Tag name '{name}' already exists")

    def create_tag(self, name: str, color: str) -> Tag:
        name = _clean_name(name)
        color = _check_color(color)
        self._ensure_unique_name(name)

        tag = self._tags.save(Tag(name=name, color=color))
        logger.info("Tag created id=%s name=%s", tag.id, tag.name)
        return tag

    def get_tag(self, tag_id: str) -> Tag:
        tag = self._tags.get(tag_id)
        if tag is None:
            raise NotFoundError.for_entity("Tag", tag_id)
        return tag

    def list_tags(self) -> list[Tag]:
        return sorted(self._tags.list(), key=lambda t: t.name)

    def update_tag(self, tag_id: str, name: Optional[str] = None, color: Optional[str] = None) -> Tag:
        tag = self.get_tag(tag_id)
        if name is not None:
            tag.name = _clean_name(name)
            self._ensure_unique_name(tag.name, tag_id=tag.id)
        if color is not None:
            tag.color = _check_color(color)
        return self._tags.save(tag)

    def delete_tag(self, tag_id: str) -> None:
        self.get_tag(tag_id)
        self._associations.on_tag_deleted(tag_id)
        self._tags.delete(tag_id)
        logger.info("Tag deleted id=%s", tag_id)
