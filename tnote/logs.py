from __future__ import annotations
import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "TNOTE_LOG_LEVEL"


def logging_setup(level: Optional[str] = None) -> None:
    """
    Install a single Rich handler on the root logger, writing to stderr so
    command output on stdout stays clean. Safe to call more than once.
    """
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, RichHandler):
            root.removeHandler(h)
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, name, logging.WARNING))
