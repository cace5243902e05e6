"""Terminal and HTML renderings of notes."""
from __future__ import annotations
import html
import logging
import shutil
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional

import marko
from rich.console import Console
from rich.text import Text

from .errors import IOFailure
from .models import Kind, Note

logger = logging.getLogger(__name__)

markdown = marko.Markdown(extensions=["gfm"])

HTML_FILE_NAME = "notes.html"
STYLESHEET_NAME = "styles.css"
IMAGES_DIR_NAME = "images"


def tag_list(note: Note) -> str:
    return "[" + ",".join(note.tags) + "]"


def console_lines(note: Note) -> list[str]:
    """
    id, date and tags first; doc, link and image notes then show their kind
    with the original filename, and the stored file; the text comes last.
    """
    lines = [f"{note.id} - {note.dt.isoformat()} - {tag_list(note)}"]
    if note.kind is not Kind.ENTRY:
        lines.append(f"{note.kind.value} ({note.orig_file})")
        lines.append(note.file)
    lines.append(note.txt)
    return lines


_LINE_STYLES = {0: "bold cyan"}


def print_note(console: Console, note: Note) -> None:
    lines = console_lines(note)
    styles = dict(_LINE_STYLES)
    if note.kind is not Kind.ENTRY:
        styles[1] = "magenta"
        styles[2] = "dim underline"
    for i, line in enumerate(lines):
        console.print(Text(line, style=styles.get(i, "")))


def _heading(note: Note) -> str:
    return f"<h3>{note.id} - {note.dt.isoformat()} - {html.escape(tag_list(note))}</h3>"


def note_to_html(note: Note, storage_dir: Path) -> str:
    e = html.escape
    head = _heading(note)
    match note.kind:
        case Kind.ENTRY:
            return f"{head}\n<p>{e(note.txt)}</p>"
        case Kind.LINK:
            label = note.txt or note.file
            return f'{head}\n<p><a href="{e(note.file)}">{e(label)}</a></p>'
        case Kind.IMAGE:
            name = Path(note.file).name
            alt = note.txt or note.file
            return f'{head}\n<img src="{IMAGES_DIR_NAME}/{e(name)}" alt="{e(alt)}">'
        case Kind.DOC:
            doc = storage_dir / note.file
            try:
                source = doc.read_text(encoding="utf-8", errors="replace")
            except OSError as ex:
                raise IOFailure(f"could not read {doc}: {ex}") from ex
            return f"{head}\n{markdown.convert(source)}"
    raise ValueError(f"unhandled kind {note.kind}")


def default_stylesheet() -> str:
    return resources.files("tnote").joinpath(STYLESHEET_NAME).read_text(encoding="utf-8")


def export_html(
    notes: Iterable[Note],
    dest_dir: Path,
    storage_dir: Path,
    stylesheet: Optional[Path] = None,
) -> Path:
    """
    Write dest_dir/notes.html holding every note, with the stylesheet next to
    it and image notes copied under dest_dir/images. Returns the html path.
    """
    dest_dir = dest_dir.expanduser()
    images = dest_dir / IMAGES_DIR_NAME
    out = dest_dir / HTML_FILE_NAME
    try:
        images.mkdir(parents=True, exist_ok=True)
        css = dest_dir / STYLESHEET_NAME
        if stylesheet:
            shutil.copyfile(stylesheet, css)
        else:
            css.write_text(default_stylesheet(), encoding="utf-8")

        parts = [
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f'<link rel="stylesheet" href="{STYLESHEET_NAME}">',
            "</head>",
            "<body>",
        ]
        for n in notes:
            if n.kind is Kind.IMAGE:
                src = storage_dir / n.file
                shutil.copyfile(src, images / src.name)
                logger.debug("copied %s into %s", src, images)
            parts.append(f'<div class="entry" id="entry-{n.id}">')
            parts.append(note_to_html(n, storage_dir))
            parts.append("</div>")
        parts += ["</body>", "</html>"]
        out.write_text("\n".join(parts) + "\n", encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"html export to {dest_dir} failed: {e}") from e
    logger.info("wrote %s", out)
    return out
