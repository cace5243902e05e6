from __future__ import annotations
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from .errors import StorageFailure
# table classes must be imported before create_all sees the metadata
from .models import NoteRecord, TagRecord, Todo  # noqa: F401

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Storage:
    """One SQLite file, one engine, and scoped transactions over it."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)

    def create_schema(self) -> None:
        logger.info("creating schema in %s", self.db_path)
        SQLModel.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        # keep objects alive after commit so returned models retain values
        return Session(self.engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self.get_session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("storage failure, rolled back: %s", e)
            raise StorageFailure(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def perform(self, fn: Callable[[Session], R]) -> R:
        """Run fn in a transaction and return its result."""
        with self.session_scope() as s:
            return fn(s)

    def transact(self, fn: Callable[[Session], object]) -> None:
        """Run fn in a transaction for its side effects only."""
        with self.session_scope() as s:
            fn(s)

    def close(self) -> None:
        self.engine.dispose()


def init_db(db_path: Path) -> Storage:
    """Open the database at db_path, creating file and schema if absent."""
    fresh = not db_path.exists()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    storage = Storage(db_path)
    if fresh:
        try:
            storage.create_schema()
        except SQLAlchemyError as e:
            storage.close()
            raise StorageFailure(str(e)) from e
    return storage
