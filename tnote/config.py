"""Loads the ~/.tnote key=value file describing storage and helper programs."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import BaseModel

from .errors import ConfigKeyMissing, ConfigMissing

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".tnote"
DB_FILE_NAME = "tnote.db"
REQUIRED_KEYS = ("storage", "editor", "viewer", "browser")

CONFIG_HELP = """add a prop file at ~/.tnote
it should have:
storage={full path to storage location}
editor={text editor command}
viewer={image viewer command}
browser={web browser command}
and optionally:
stylesheet={css file used for html export}"""


class AppConfig(BaseModel):
    storage: Path
    editor: str
    viewer: str
    browser: str
    stylesheet: Optional[Path] = None

    @property
    def db_path(self) -> Path:
        return self.storage / DB_FILE_NAME


def default_config_path() -> Path:
    return Path.home() / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> AppConfig:
    path = path or default_config_path()
    if not path.is_file():
        raise ConfigMissing(CONFIG_HELP)
    values = dotenv_values(path, interpolate=False)
    found: dict[str, str] = {}
    for key in REQUIRED_KEYS:
        value = (values.get(key) or "").strip()
        if not value:
            raise ConfigKeyMissing(f"'{key}' key does not exist in config\n{CONFIG_HELP}")
        found[key] = value
    stylesheet = (values.get("stylesheet") or "").strip()
    logger.debug("loaded config from %s", path)
    return AppConfig(
        storage=Path(found["storage"]).expanduser(),
        editor=found["editor"],
        viewer=found["viewer"],
        browser=found["browser"],
        stylesheet=Path(stylesheet).expanduser() if stylesheet else None,
    )
