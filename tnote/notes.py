from __future__ import annotations
import logging
import shutil
import uuid
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from sqlmodel import Session, col, select

from .db import Storage
from .errors import IOFailure, NotFound, ValidationError
from .grammar import normalize_tags, with_tag
from .models import Kind, Note, NoteRecord, TagRecord

logger = logging.getLogger(__name__)

# kinds whose `file` points at a copy inside storage
MANAGED_KINDS = (Kind.DOC, Kind.IMAGE)


def _tags_for(s: Session, note_id: int) -> list[str]:
    stmt = select(TagRecord.tag).where(TagRecord.note_id == note_id).order_by(TagRecord.id)
    return list(s.exec(stmt))


def _insert_tags(s: Session, note_id: int, tags: Iterable[str]) -> None:
    for tag in tags:
        s.add(TagRecord(note_id=note_id, tag=tag))


def _delete_tags(s: Session, note_id: int) -> None:
    for row in list(s.exec(select(TagRecord).where(TagRecord.note_id == note_id))):
        s.delete(row)
    s.flush()


def _get_record(s: Session, note_id: int) -> NoteRecord:
    rec = s.get(NoteRecord, note_id)
    if rec is None:
        raise NotFound(f"Note with id {note_id} not found")
    return rec


class NoteRepository:
    """Notes and their tags, plus the files doc and image notes keep in storage."""

    def __init__(self, storage: Storage, storage_dir: Path):
        self.storage = storage
        self.storage_dir = storage_dir

    def path_of(self, note: Note) -> Path:
        return self.storage_dir / note.file

    def insert(
        self,
        file: str,
        orig_file: str,
        tags: Iterable[str],
        content: str,
        kind: Kind,
    ) -> Note:
        tag_list = normalize_tags(tags) or [kind.default_tag]

        def _insert(s: Session) -> Note:
            rec = NoteRecord(txt=content, file=file, orig_file=orig_file, kind=kind)
            s.add(rec)
            s.flush()  # get the ID assigned
            _insert_tags(s, rec.id, tag_list)
            return Note.from_record(rec, tag_list)

        note = self.storage.perform(_insert)
        logger.debug("inserted %s note %s", kind.value, note.id)
        return note

    def get_by_id(self, note_id: int) -> Note:
        with self.storage.session_scope() as s:
            rec = _get_record(s, note_id)
            return Note.from_record(rec, _tags_for(s, rec.id))

    def list_recent(self, n: int) -> list[Note]:
        """The n newest notes, oldest first."""
        with self.storage.session_scope() as s:
            stmt = select(NoteRecord).order_by(col(NoteRecord.id).desc()).limit(n)
            notes = [Note.from_record(r, _tags_for(s, r.id)) for r in s.exec(stmt)]
        notes.reverse()
        return notes

    def remove(self, note_id: int) -> None:
        """Delete the note and its tags; its managed file goes once that commits."""

        def _remove(s: Session) -> NoteRecord:
            rec = _get_record(s, note_id)
            _delete_tags(s, note_id)
            s.delete(rec)
            return rec

        rec = self.storage.perform(_remove)
        if rec.file and rec.kind in MANAGED_KINDS:
            path = self.storage_dir / rec.file
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise IOFailure(f"removed note {note_id} but could not delete {path}: {e}") from e
            logger.info("deleted %s", path)

    def update(self, note_id: int, content: str, dt: date, tags: Iterable[str]) -> bool:
        """
        Replace text, date and the whole tag set. Returns False without
        writing anything when all three already match the stored note.
        """
        note = self.get_by_id(note_id)
        tag_list = normalize_tags(tags) or [note.kind.default_tag]
        if content == note.txt and dt == note.dt and set(tag_list) == set(note.tags):
            return False

        def _update(s: Session) -> None:
            rec = _get_record(s, note_id)
            rec.txt = content
            rec.dt = dt
            s.add(rec)
            _delete_tags(s, note_id)
            _insert_tags(s, note_id, tag_list)

        self.storage.transact(_update)
        return True

    def list_distinct_tags(self) -> list[str]:
        with self.storage.session_scope() as s:
            stmt = select(TagRecord.tag).distinct().order_by(TagRecord.tag)
            return list(s.exec(stmt))

    def rename_tag(self, old: str, new: str) -> int:
        """
        Rename a tag on every note that carries it. Notes that already have
        the new tag just lose the old one. Returns the number of notes touched.
        """
        old, new = old.strip().lower(), new.strip().lower()
        if not old or not new:
            raise ValidationError("both the old and the new tag are required")
        if old == new:
            return 0

        def _rename(s: Session) -> int:
            has_new = set(s.exec(select(TagRecord.note_id).where(TagRecord.tag == new)))
            rows = list(s.exec(select(TagRecord).where(TagRecord.tag == old)))
            for row in rows:
                if row.note_id in has_new:
                    s.delete(row)
                else:
                    row.tag = new
                    s.add(row)
            return len(rows)

        return self.storage.perform(_rename)

    def search(
        self,
        text: str = "",
        tags: Iterable[str] = (),
        start: Optional[date] = None,
        end: Optional[date] = None,
        kinds: Iterable[Kind] = (),
    ) -> list[Note]:
        """
        Kind and date bounds go to SQL; the tag (all must match) and
        case-insensitive text filters are applied to the fetched rows.
        """
        wanted_tags = normalize_tags(tags)
        kinds = list(kinds)
        needle = text.strip().lower()

        stmt = select(NoteRecord)
        clauses = []
        if kinds:
            clauses.append(col(NoteRecord.kind).in_(kinds))
        if start is not None:
            clauses.append(col(NoteRecord.dt) >= start)
        if end is not None:
            clauses.append(col(NoteRecord.dt) <= end)
        if clauses:
            stmt = stmt.where(*clauses)
        stmt = stmt.order_by(NoteRecord.id)

        with self.storage.session_scope() as s:
            notes = [Note.from_record(r, _tags_for(s, r.id)) for r in s.exec(stmt)]
        return [
            n for n in notes
            if all(t in n.tags for t in wanted_tags)
            and (not needle or needle in n.txt.lower())
        ]

    # --- managed files ---

    def _copy_in(self, src: Path, kind: Kind) -> str:
        src = src.expanduser()
        if not src.exists():
            raise ValidationError(f"File does not exist: {src}")
        if src.is_dir():
            raise ValidationError(f"File is a directory: {src}")
        relative = f"{kind.value.lower()}s/{uuid.uuid4()}{src.suffix}"
        dest = self.storage_dir / relative
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
        except OSError as e:
            raise IOFailure(f"Error writing file from {src}: {e}") from e
        logger.info("copied %s to %s", src, dest)
        return relative

    def _insert_managed(self, relative: str, orig_file: str, tags, content, kind) -> Note:
        try:
            return self.insert(relative, orig_file, with_tag(list(tags), kind.default_tag), content, kind)
        except Exception:
            (self.storage_dir / relative).unlink(missing_ok=True)
            raise

    def add_file(self, kind: Kind, src: Path, tags: Iterable[str], content: str) -> Note:
        """Copy src into storage and record it as a doc or image note."""
        if kind not in MANAGED_KINDS:
            raise ValidationError(f"{kind.value} notes do not hold files")
        relative = self._copy_in(src, kind)
        return self._insert_managed(relative, src.name, tags, content, kind)

    def add_blank_doc(self, tags: Iterable[str], content: str) -> Note:
        relative = f"docs/{uuid.uuid4()}.md"
        dest = self.storage_dir / relative
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text("", encoding="utf-8")
        except OSError as e:
            raise IOFailure(f"could not create {dest}: {e}") from e
        return self._insert_managed(relative, dest.name, tags, content, Kind.DOC)
