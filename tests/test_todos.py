import pytest

from tnote.errors import NotFound, ValidationError


def test_add_then_complete(ws):
    ws.todos.add("buy milk")
    todos = ws.todos.list(incomplete_only=True)
    assert len(todos) == 1
    assert todos[0].complete is False
    assert todos[0].priority == 1
    assert todos[0].completed == ""

    done = ws.todos.complete(1)
    assert done.txt == "buy milk"
    assert ws.todos.list(incomplete_only=True) == []

    everything = ws.todos.list(incomplete_only=False)
    assert len(everything) == 1
    assert everything[0].complete is True
    assert everything[0].completed != ""


def test_index_refers_to_incomplete_list(ws):
    for txt in ("one", "two", "three"):
        ws.todos.add(txt)
    ws.todos.complete(1)
    # "two" is now first in the incomplete list
    assert ws.todos.get_by_index(1).txt == "two"
    removed = ws.todos.remove(2)
    assert removed.txt == "three"
    assert [t.txt for t in ws.todos.list(incomplete_only=False)] == ["one", "two"]


def test_index_out_of_range(ws):
    ws.todos.add("only")
    for bad in (0, 2):
        with pytest.raises(NotFound) as exc:
            ws.todos.complete(bad)
        assert str(exc.value) == f"no item for index {bad}"


def test_get_by_id(ws):
    todo = ws.todos.add("  padded  ")
    assert ws.todos.get_by_id(todo.id).txt == "padded"
    with pytest.raises(NotFound):
        ws.todos.get_by_id(999)


def test_empty_text_rejected(ws):
    with pytest.raises(ValidationError):
        ws.todos.add("   ")


def test_timestamps_are_utc(ws):
    ws.todos.add("stamp me")
    done = ws.todos.complete(1)
    assert done.completed.endswith("+00:00")
