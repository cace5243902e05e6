from __future__ import annotations
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .config import load_config
from .errors import ValidationError
from .logs import logging_setup
from .models import Kind
from .render import export_html, print_note
from .terminal import Command, console, reporting_errors, say
from .workspace import Workspace


def parse_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ValidationError(f"{raw} is not an ISO-8601 date")


def parse_kinds(raw: Optional[str]) -> list[Kind]:
    kinds = []
    for name in (raw or "").split(","):
        name = name.strip().upper()
        if not name:
            continue
        if name not in Kind.__members__:
            raise ValidationError(f"unknown kind {name}. kinds are ENTRY, DOC, IMAGE, LINK")
        kinds.append(Kind[name])
    return kinds


def parse_tag_filter(raw: Optional[str]) -> list[str]:
    return [t.strip().lower() for t in (raw or "").split(",") if t.strip()]


def _version(value: bool):
    if value:
        say(f"tnq version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command(cls=Command)
def tnq(
    text: Optional[str] = typer.Option(None, "--text", help="Notes whose content contains the text."),
    tags: Optional[str] = typer.Option(
        None, "--tags", help="Comma-separated tags; notes must carry all of them."
    ),
    start: Optional[str] = typer.Option(None, "--start", help="ISO-8601 starting date"),
    end: Optional[str] = typer.Option(None, "--end", help="ISO-8601 ending date"),
    kinds: Optional[str] = typer.Option(
        None, "--kinds", help="Comma-separated kinds: ENTRY, DOC, IMAGE, LINK"
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", help="Folder to write html to (otherwise lists to console)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="debug logging on stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version, is_eager=True, help="show the version"
    ),
):
    """Query notes, printing them or exporting them to a static html page."""
    logging_setup("DEBUG" if verbose else None)
    with reporting_errors():
        filters = dict(
            text=(text or "").strip(),
            tags=parse_tag_filter(tags),
            start=parse_date(start),
            end=parse_date(end),
            kinds=parse_kinds(kinds),
        )
        with Workspace(load_config()) as ws:
            notes = ws.notes.search(**filters)
            if not notes:
                say("no records found")
            elif out is not None:
                path = export_html(notes, out, ws.storage_dir, ws.config.stylesheet)
                say(f"exported {len(notes)} notes to {path}")
            else:
                for n in notes:
                    say("")
                    print_note(console, n)
                say("")


def main():
    app()


if __name__ == "__main__":
    main()
