from __future__ import annotations
import logging
import shlex
import subprocess
from typing import Sequence

from .errors import IOFailure

logger = logging.getLogger(__name__)


def run_command(cmd: str, args: Sequence[str] = (), wait: bool = False) -> int:
    """
    Start an editor, viewer or browser. When wait is set, block until it
    exits and return its status; otherwise return 0 right away.
    """
    argv = shlex.split(cmd) + list(args)
    logger.info("running %s", argv)
    try:
        proc = subprocess.Popen(argv)
    except OSError as e:
        raise IOFailure(f"could not run {cmd}: {e}") from e
    return proc.wait() if wait else 0
