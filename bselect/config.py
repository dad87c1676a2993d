"""User configuration: theme selection and selector preferences.

The config file lives at ``<config home>/git-branch-selector/config.json``
(see :func:`bselect.constants.get_config_path`). A default file is written
on first use so users have something to edit.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from bselect.constants import DEFAULT_THEME
from bselect.errors import ConfigError
from bselect.theme import ConsoleTheme

COULD_NOT_PARSE = "could not parse config file"
COULD_NOT_READ = "could not read config file"
COULD_NOT_WRITE = "could not write config file"


class Config(BaseModel):
    """Contents of ``config.json``. Unknown keys are ignored."""

    theme: str = DEFAULT_THEME
    """Name of the active theme."""

    themes: list[ConsoleTheme] = Field(default_factory=lambda: [ConsoleTheme()])
    """Available themes; the built-in default is always present after loading."""

    use_gum: bool = False
    """Use ``gum choose`` for selection when it is installed."""

    def active_theme(self) -> ConsoleTheme:
        """Theme named by ``theme``, or the default theme if there is none."""
        for t in self.themes:
            if t.name == self.theme:
                return t
        return ConsoleTheme()

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> Config:
        """Parse a config document.

        Raises:
            ConfigError: If the text is not a valid config.
        """
        try:
            config = cls.model_validate_json(text)
        except ValidationError as exc:
            raise ConfigError(f"{COULD_NOT_PARSE}: {exc}") from exc
        if not any(t.name == DEFAULT_THEME for t in config.themes):
            config.themes.append(ConsoleTheme())
        return config


def read_config_file(path: Path) -> Config:
    """Load the config at *path*.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{COULD_NOT_READ} '{path}': {exc}") from exc
    return Config.from_json(text)


def write_config_file(path: Path, config: Config) -> None:
    """Write *config* atomically, creating parent directories as needed.

    Uses write-to-temp + rename to avoid truncated files on interruption.

    Raises:
        ConfigError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    except OSError as exc:
        raise ConfigError(f"{COULD_NOT_WRITE} '{path}': {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(config.to_json())
            f.write("\n")
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise ConfigError(f"{COULD_NOT_WRITE} '{path}': {exc}") from exc


def init_config(path: Path) -> Config:
    """Read the config at *path*, creating a default one if it is missing."""
    if not path.is_file():
        config = Config()
        write_config_file(path, config)
        return config
    return read_config_file(path)
