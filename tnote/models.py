from __future__ import annotations
from datetime import UTC, date, datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, SQLModel


class Kind(str, Enum):
    ENTRY = "ENTRY"
    LINK = "LINK"
    DOC = "DOC"
    IMAGE = "IMAGE"

    @property
    def default_tag(self) -> str:
        # entries with no tags are filed under "none"
        if self is Kind.ENTRY:
            return "none"
        return self.value.lower()


class NoteBase(SQLModel):
    txt: str = ""
    dt: date = Field(default_factory=date.today, index=True)
    # link notes keep the url here; doc/image notes the path inside storage
    file: str = ""
    orig_file: str = ""
    kind: Kind = Kind.ENTRY
    created: datetime = Field(default_factory=lambda: datetime.now(UTC))


class NoteRecord(NoteBase, table=True):
    __tablename__ = "notes"

    id: Optional[int] = Field(default=None, primary_key=True)


class TagRecord(SQLModel, table=True):
    __tablename__ = "tags"

    id: Optional[int] = Field(default=None, primary_key=True)
    note_id: int
    tag: str = Field(index=True)


class Note(NoteBase):
    id: int
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, rec: NoteRecord, tags: list[str]) -> "Note":
        return cls(
            id=rec.id, txt=rec.txt, dt=rec.dt, file=rec.file,
            orig_file=rec.orig_file, kind=rec.kind, created=rec.created,
            tags=tags,
        )


class Todo(SQLModel, table=True):
    __tablename__ = "todo"

    id: Optional[int] = Field(default=None, primary_key=True)
    txt: str
    # always written as 1; nothing sorts on it
    priority: int = 1
    complete: bool = Field(default=False, index=True)
    created: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed: str = ""
