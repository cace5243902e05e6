from __future__ import annotations
import logging

from .config import AppConfig
from .db import init_db
from .errors import IOFailure
from .notes import NoteRepository
from .todos import TodoRepository

logger = logging.getLogger(__name__)


class Workspace:
    """Everything one invocation works against: config, storage, repositories."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.storage_dir = config.storage
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"could not create storage at {self.storage_dir}: {e}") from e
        self.storage = init_db(config.db_path)
        self.notes = NoteRepository(self.storage, self.storage_dir)
        self.todos = TodoRepository(self.storage)
        logger.debug("opened workspace at %s", self.storage_dir)

    def close(self) -> None:
        self.storage.close()

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
