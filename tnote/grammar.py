"""Parsing of the `[tags] content` argument string the note commands accept."""
from __future__ import annotations
import re
from typing import Iterable

SPACE_OR_COMMA_RE = re.compile(r"[\s,]+")


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lowercase, trim, drop empties and duplicates; first occurrence wins."""
    out: list[str] = []
    for t in tags:
        t = t.strip().lower()
        if t and t not in out:
            out.append(t)
    return out


def split_tags(text: str) -> list[str]:
    return normalize_tags(SPACE_OR_COMMA_RE.split(text))


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def parse_tags_and_content(argstr: str, default_tag: str) -> tuple[list[str], str]:
    """
    `[foo, bar] "hello world"` -> (["foo", "bar"], "hello world")
    `hello world`              -> ([default_tag], "hello world")
    """
    argstr = argstr.lstrip()
    close = argstr.find("]")
    if argstr.startswith("[") and close > 0:
        tags = split_tags(argstr[1:close])
        content = argstr[close + 1:]
    else:
        tags = [default_tag]
        content = argstr
    return tags, strip_quotes(content.strip())


def with_tag(tags: list[str], tag: str) -> list[str]:
    return tags if tag in tags else [*tags, tag]
