from __future__ import annotations
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import typer

from . import __version__
from .config import load_config
from .editing import read_edit_file, write_edit_file
from .errors import ValidationError
from .grammar import parse_tags_and_content, with_tag
from .launch import run_command
from .logs import logging_setup
from .models import Kind
from .render import print_note
from .terminal import Command as TnCommand, console, reporting_errors, say
from .workspace import Workspace

DEFAULT_TAIL = 10

USAGE = f"""tn version {__version__}
usage:
tn note
tn [tags] note
tn add note
tn add [tags] note
tn blank note
tn blank [tags] note
tn doc filename
tn doc filename [tags] note
tn link url
tn link url [tags] note
tn image filename
tn image filename [tags] note
tn tail {{num recs}}
tn remove id
tn show id
tn edit id
tn tags
tn retag oldtag newtag"""


class Command(str, Enum):
    ADD = "ADD"
    BLANK = "BLANK"
    LINK = "LINK"
    DOC = "DOC"
    IMAGE = "IMAGE"
    TAIL = "TAIL"
    REMOVE = "REMOVE"
    SHOW = "SHOW"
    EDIT = "EDIT"
    TAGS = "TAGS"
    RETAG = "RETAG"


def resolve_command(args: list[str]) -> tuple[Command, list[str]]:
    """A leading command name selects it; anything else is note text for ADD."""
    first = args[0].upper()
    if first in Command.__members__:
        return Command[first], args[1:]
    return Command.ADD, args


def _int_arg(rest: list[str], usage: str) -> int:
    raw = " ".join(rest).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{raw} is not an integer. usage: tn {usage} id")


def _check_url(url: str) -> None:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"not a valid link: {url}")


def _show_added(note) -> None:
    print_note(console, note)


def add(ws: Workspace, rest: list[str]) -> None:
    tags, content = parse_tags_and_content(" ".join(rest), Kind.ENTRY.default_tag)
    _show_added(ws.notes.insert("", "", tags, content, Kind.ENTRY))


def add_link(ws: Workspace, rest: list[str]) -> None:
    if not rest:
        raise ValidationError("must supply a link")
    url = rest[0]
    _check_url(url)
    tags, content = parse_tags_and_content(" ".join(rest[1:]), Kind.LINK.default_tag)
    tags = with_tag(tags, Kind.LINK.default_tag)
    _show_added(ws.notes.insert(url, "", tags, content, Kind.LINK))


def add_file(ws: Workspace, kind: Kind, rest: list[str]) -> None:
    if not rest:
        raise ValidationError("must supply a filename")
    tags, content = parse_tags_and_content(" ".join(rest[1:]), kind.default_tag)
    _show_added(ws.notes.add_file(kind, Path(rest[0]), tags, content))


def add_blank(ws: Workspace, rest: list[str]) -> None:
    tags, content = parse_tags_and_content(" ".join(rest), Kind.DOC.default_tag)
    note = ws.notes.add_blank_doc(tags, content)
    _show_added(note)
    run_command(ws.config.editor, [str(ws.notes.path_of(note))])


def tail(ws: Workspace, rest: list[str]) -> None:
    try:
        num = int(" ".join(rest).strip())
    except ValueError:
        num = DEFAULT_TAIL
    for note in ws.notes.list_recent(num):
        say("")
        print_note(console, note)
    say("")


def remove(ws: Workspace, rest: list[str]) -> None:
    note_id = _int_arg(rest, "remove")
    ws.notes.remove(note_id)
    say(f"removed {note_id}")


def show(ws: Workspace, rest: list[str]) -> None:
    note = ws.notes.get_by_id(_int_arg(rest, "show"))
    print_note(console, note)
    match note.kind:
        case Kind.LINK:
            run_command(ws.config.browser, [note.file])
        case Kind.DOC:
            run_command(ws.config.editor, [str(ws.notes.path_of(note))])
        case Kind.IMAGE:
            run_command(ws.config.viewer, [str(ws.notes.path_of(note))])


def edit(ws: Workspace, rest: list[str]) -> None:
    editor = os.getenv("EDITOR") or ws.config.editor
    note = ws.notes.get_by_id(_int_arg(rest, "edit"))
    path = write_edit_file(note)
    try:
        say(f"running editor {editor}")
        code = run_command(editor, [str(path)], wait=True)
        say(f"done editing. exit code was {code}")
        if code != 0:
            return
        changes = read_edit_file(path)
    finally:
        path.unlink(missing_ok=True)
    if ws.notes.update(note.id, changes.content, changes.dt, changes.tags):
        say(f"updated note {note.id}")
    else:
        say("nothing changed. not writing")


def list_tags(ws: Workspace, rest: list[str]) -> None:
    for tag in ws.notes.list_distinct_tags():
        say(tag)


def retag(ws: Workspace, rest: list[str]) -> None:
    changes = " ".join(rest).split()
    if len(changes) != 2:
        raise ValidationError("usage: tn retag oldtag newtag")
    old, new = changes
    count = ws.notes.rename_tag(old, new)
    say(f"renamed {old.lower()} to {new.lower()} on {count} notes")


HANDLERS = {
    Command.ADD: add,
    Command.BLANK: add_blank,
    Command.LINK: add_link,
    Command.DOC: lambda ws, rest: add_file(ws, Kind.DOC, rest),
    Command.IMAGE: lambda ws, rest: add_file(ws, Kind.IMAGE, rest),
    Command.TAIL: tail,
    Command.REMOVE: remove,
    Command.SHOW: show,
    Command.EDIT: edit,
    Command.TAGS: list_tags,
    Command.RETAG: retag,
}


def _version(value: bool):
    if value:
        say(USAGE.splitlines()[0])
        raise typer.Exit()


app = typer.Typer(
    help="tn: command-line note taking",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command(
    cls=TnCommand,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    }
)
def tn(
    args: Optional[List[str]] = typer.Argument(None, help="[command] [tags] content"),
    verbose: bool = typer.Option(False, "--verbose", help="debug logging on stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version, is_eager=True, help="show the version"
    ),
):
    """Take a note. See `tn` with no arguments for the command list."""
    logging_setup("DEBUG" if verbose else None)
    if not args:
        say(USAGE)
        return
    with reporting_errors():
        command, rest = resolve_command(args)
        config = load_config()
        with Workspace(config) as ws:
            HANDLERS[command](ws, rest)


def main():
    app()


if __name__ == "__main__":
    main()
