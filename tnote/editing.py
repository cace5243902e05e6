"""The key=value file a note is round-tripped through for `tn edit`."""
from __future__ import annotations
import tempfile
import uuid
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import BaseModel

from .errors import IOFailure, ValidationError
from .grammar import split_tags
from .models import Note


class NoteEdit(BaseModel):
    dt: date
    content: str
    tags: list[str]


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def edit_file_text(note: Note) -> str:
    return (
        f"date={note.dt.isoformat()}\n"
        f"content={_quote(note.txt)}\n"
        f"tags=[{','.join(note.tags)}]\n"
    )


def write_edit_file(note: Note, tmp_dir: Optional[Path] = None) -> Path:
    path = Path(tmp_dir or tempfile.gettempdir()) / f"{uuid.uuid4()}.properties"
    try:
        path.write_text(edit_file_text(note), encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"could not write {path}: {e}") from e
    return path


def read_edit_file(path: Path) -> NoteEdit:
    values = dotenv_values(path, interpolate=False)
    date_str = values.get("date")
    if date_str is None:
        raise ValidationError("date missing from file")
    content = values.get("content")
    if content is None:
        raise ValidationError("content missing from file")
    tags_str = values.get("tags")
    if tags_str is None:
        raise ValidationError("tags missing from file")
    tags_str = tags_str.strip()
    if not tags_str.startswith("[") or not tags_str.endswith("]"):
        raise ValidationError("tags improperly formatted")
    try:
        dt = date.fromisoformat(date_str.strip())
    except ValueError as e:
        raise ValidationError(f"bad date in file: {date_str}") from e
    return NoteEdit(dt=dt, content=content.strip(), tags=split_tags(tags_str[1:-1]))
