from sqlmodel import SQLModel, Field
from typing import Annotated, Optional
from pydantic import StringConstraints

from ..domain.entities import HEX_COLOR_PATTERN, Tag

# Hex color, #RRGGBB
HexColor = Annotated[str, StringConstraints(max_length=7, pattern=HEX_COLOR_PATTERN)]


class TagBase(SQLModel):
    name: str = Field(min_length=1, max_length=50)
    color: HexColor


class TagCreate(TagBase):
    pass


class TagRead(TagBase):
    id: str

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagRead":
        return cls(id=tag.id, name=tag.name, color=tag.color)


class TagUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[HexColor] = None
