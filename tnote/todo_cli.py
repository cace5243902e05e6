from __future__ import annotations
from typing import List

import typer
from rich.text import Text

from . import __version__
from .config import load_config
from .errors import ValidationError
from .logs import logging_setup
from .models import Todo
from .terminal import Group, console, reporting_errors, say
from .workspace import Workspace

BLANK_STAMP = " " * len("2024-01-01T00:00:00+00:00")

app = typer.Typer(
    help=f"td version {__version__}: a small todo list",
    cls=Group,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def _boot(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="debug logging on stderr"),
):
    logging_setup("DEBUG" if verbose else None)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _index(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValidationError(f"{raw} is not an integer")


def _workspace() -> Workspace:
    return Workspace(load_config())


def detail_line(todo: Todo) -> str:
    check = "[X]" if todo.complete else "[ ]"
    created = todo.created.isoformat(timespec="seconds")
    completed = todo.completed or BLANK_STAMP
    return f"{check} {todo.id:>10} [{created}] [{completed}] - {todo.txt}"


def _print_details(incomplete_only: bool) -> None:
    with reporting_errors(), _workspace() as ws:
        todos = ws.todos.list(incomplete_only=incomplete_only)
        if not todos:
            say("no incomplete todos" if incomplete_only else "no todos")
            return
        for todo in todos:
            style = "dim" if todo.complete else ""
            console.print(Text(detail_line(todo), style=style))


@app.command()
def add(text: List[str] = typer.Argument(..., help="todo text")):
    with reporting_errors(), _workspace() as ws:
        todo = ws.todos.add(" ".join(text))
        say(f'added "{todo.txt}"')


@app.command("list")
def _list():
    """Incomplete todos, numbered for complete and remove."""
    with reporting_errors(), _workspace() as ws:
        todos = ws.todos.list()
        if not todos:
            say("no incomplete todos")
            return
        for idx, todo in enumerate(todos, start=1):
            say(f"{idx} - {todo.txt}")


@app.command()
def complete(index: str = typer.Argument(..., help="item number from `td list`")):
    with reporting_errors(), _workspace() as ws:
        todo = ws.todos.complete(_index(index))
        say(f'completed "{todo.txt}"')


@app.command()
def remove(index: str = typer.Argument(..., help="item number from `td list`")):
    with reporting_errors(), _workspace() as ws:
        todo = ws.todos.remove(_index(index))
        say(f'removed "{todo.txt}"')


@app.command()
def details():
    """Incomplete todos with ids and timestamps."""
    _print_details(incomplete_only=True)


@app.command("all")
def _all():
    """Every todo, complete or not, with ids and timestamps."""
    _print_details(incomplete_only=False)


def main():
    app()


if __name__ == "__main__":
    main()
