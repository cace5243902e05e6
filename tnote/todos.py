from __future__ import annotations
import logging
from datetime import UTC, datetime

from sqlmodel import Session, col, select

from .db import Storage
from .errors import NotFound, ValidationError
from .models import Todo

logger = logging.getLogger(__name__)


def now_stamp() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


class TodoRepository:
    """
    Todo items. complete() and remove() take the 1-based position shown by
    list(), resolved against a fresh listing of incomplete items. The lookup
    and the write are two separate steps.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def add(self, text: str) -> Todo:
        text = text.strip()
        if not text:
            raise ValidationError("must supply todo text")

        def _add(s: Session) -> Todo:
            todo = Todo(txt=text, priority=1, complete=False, completed="")
            s.add(todo)
            s.flush()
            s.refresh(todo)
            return todo

        return self.storage.perform(_add)

    def list(self, incomplete_only: bool = True) -> list[Todo]:
        with self.storage.session_scope() as s:
            stmt = select(Todo)
            if incomplete_only:
                stmt = stmt.where(col(Todo.complete) == False)  # noqa: E712
            return list(s.exec(stmt.order_by(Todo.id)))

    def get_by_id(self, todo_id: int) -> Todo:
        with self.storage.session_scope() as s:
            todo = s.get(Todo, todo_id)
            if todo is None:
                raise NotFound(f"Todo with id {todo_id} not found")
            return todo

    def get_by_index(self, index: int) -> Todo:
        todos = self.list(incomplete_only=True)
        if index < 1 or index > len(todos):
            raise NotFound(f"no item for index {index}")
        return todos[index - 1]

    def complete(self, index: int) -> Todo:
        target = self.get_by_index(index)

        def _complete(s: Session) -> Todo:
            todo = s.get(Todo, target.id)
            if todo is None:
                raise NotFound(f"no item for index {index}")
            todo.complete = True
            todo.completed = now_stamp()
            s.add(todo)
            return todo

        todo = self.storage.perform(_complete)
        logger.debug("completed todo %s", todo.id)
        return todo

    def remove(self, index: int) -> Todo:
        target = self.get_by_index(index)

        def _remove(s: Session) -> None:
            todo = s.get(Todo, target.id)
            if todo is None:
                raise NotFound(f"no item for index {index}")
            s.delete(todo)

        self.storage.transact(_remove)
        return target
