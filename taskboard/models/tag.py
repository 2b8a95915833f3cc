from sqlmodel import SQLModel, Field

from ..domain.entities import new_id


class TagRecord(SQLModel, table=True):
    __tablename__ = "tags"

    id: str = Field(default_factory=new_id, primary_key=True)
    # Case-sensitive uniqueness across all tags
    name: str = Field(unique=True, index=True, nullable=False)
    color: str = Field(max_length=7, nullable=False)
