from pathlib import Path

import pytest

from tnote.config import AppConfig
from tnote.workspace import Workspace


@pytest.fixture
def config(tmp_path) -> AppConfig:
    return AppConfig(
        storage=tmp_path / "store",
        editor="true",
        viewer="true",
        browser="true",
    )


@pytest.fixture
def ws(config):
    workspace = Workspace(config)
    yield workspace
    workspace.close()


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """A HOME holding a ~/.tnote that points storage into tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    (home / ".tnote").write_text(
        f"storage={tmp_path / 'store'}\n"
        "editor=true\n"
        "viewer=true\n"
        "browser=true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("EDITOR", raising=False)
    return home


class Launches:
    """Stands in for launch.run_command and remembers what it was asked to run."""

    def __init__(self, status: int = 0, on_run=None):
        self.calls = []
        self.status = status
        self.on_run = on_run

    def __call__(self, cmd, args=(), wait=False):
        self.calls.append((cmd, list(args), wait))
        if self.on_run:
            self.on_run(list(args))
        return self.status if wait else 0


@pytest.fixture
def launches(monkeypatch) -> Launches:
    recorder = Launches()
    monkeypatch.setattr("tnote.cli.run_command", recorder)
    return recorder
