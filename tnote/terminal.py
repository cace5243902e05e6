from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, NoReturn

import click
import typer
from rich.console import Console
from typer.core import TyperCommand, TyperGroup

from .errors import TnoteError

console = Console(highlight=False, soft_wrap=True, emoji=False)


def say(message: str) -> None:
    """Print plain text; brackets in notes and tags are not rich markup."""
    console.print(message, markup=False)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn a TnoteError into its message on stdout and exit status 1."""
    try:
        yield
    except TnoteError as e:
        say(str(e))
        raise typer.Exit(1)


def _usage_failed(e: click.UsageError) -> NoReturn:
    say(e.format_message())
    if e.ctx is not None:
        say(f"Try '{e.ctx.command_path} --help' for help.")
    raise typer.Exit(1)


class Command(TyperCommand):
    """A command whose bad arguments exit with 1 like every other failure."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _usage_failed(e)


class Group(TyperGroup):
    """Unknown subcommands and bad subcommand arguments exit with 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _usage_failed(e)

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            _usage_failed(e)
