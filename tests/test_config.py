from pathlib import Path

import pytest

from tnote.config import AppConfig, load_config
from tnote.errors import ConfigKeyMissing, ConfigMissing


def test_missing_file_explains_format(tmp_path):
    with pytest.raises(ConfigMissing) as exc:
        load_config(tmp_path / ".tnote")
    assert "storage={full path to storage location}" in str(exc.value)


def test_missing_key_is_named(tmp_path):
    cfg = tmp_path / ".tnote"
    cfg.write_text("storage=/tmp/x\neditor=vi\nviewer=feh\n", encoding="utf-8")
    with pytest.raises(ConfigKeyMissing) as exc:
        load_config(cfg)
    assert "'browser' key does not exist" in str(exc.value)


def test_loads_values_and_expands_tilde(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg = tmp_path / ".tnote"
    cfg.write_text(
        "# my notes\n"
        "storage=~/notes\n"
        "editor=code -w\n"
        "viewer=feh\n"
        "browser=firefox\n"
        "stylesheet=~/style.css\n",
        encoding="utf-8",
    )
    config = load_config(cfg)
    assert config.storage == tmp_path / "notes"
    assert config.editor == "code -w"
    assert config.stylesheet == tmp_path / "style.css"
    assert config.db_path == tmp_path / "notes" / "tnote.db"


def test_default_path_is_in_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / ".tnote").write_text(
        "storage=/s\neditor=e\nviewer=v\nbrowser=b\n", encoding="utf-8"
    )
    config = load_config()
    assert config == AppConfig(storage=Path("/s"), editor="e", viewer="v", browser="b")
