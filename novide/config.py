"""Loading of the TOML configuration file and exporting it to the environment."""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import MutableMapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

CONFIG_FILE = "config.toml"
_APP_DIR = "novide"


class ConfigError(Exception):
    """The config file exists but could not be read or parsed."""


def _config_dir() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / _APP_DIR
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".config"
    return base / _APP_DIR


def config_path() -> Path:
    """Return the location of the config file."""
    return _config_dir() / CONFIG_FILE


_BOOL_FIELDS = ("wsl", "no_multigrid", "maximized", "vsync", "srgb", "idle")
_STR_FIELDS = ("neovim_bin", "frame", "theme")

_ENV_NAMES = {
    "wsl": "NOVIDE_WSL",
    "no_multigrid": "NOVIDE_NO_MULTIGRID",
    "maximized": "NOVIDE_MAXIMIZED",
    "vsync": "NOVIDE_VSYNC",
    "srgb": "NOVIDE_SRGB",
    "idle": "NOVIDE_IDLE",
    "frame": "NOVIDE_FRAME",
    "neovim_bin": "NEOVIM_BIN",
    "theme": "NOVIDE_THEME",
}


@dataclass
class Config:
    wsl: bool | None = None
    no_multigrid: bool | None = None
    maximized: bool | None = None
    vsync: bool | None = None
    srgb: bool | None = None
    idle: bool | None = None
    neovim_bin: Path | None = None
    frame: str | None = None
    theme: str | None = None

    @classmethod
    def _from_mapping(cls, data: dict[str, Any]) -> Config:
        values: dict[str, Any] = {}
        for field in fields(cls):
            key = field.name.replace("_", "-")
            if key not in data:
                continue
            raw = data[key]
            if field.name in _BOOL_FIELDS:
                if not isinstance(raw, bool):
                    raise TypeError(f"invalid type for `{key}`: expected a boolean")
                values[field.name] = raw
            elif field.name in _STR_FIELDS:
                if not isinstance(raw, str):
                    raise TypeError(f"invalid type for `{key}`: expected a string")
                values[field.name] = Path(raw) if field.name == "neovim_bin" else raw
        return cls(**values)

    @classmethod
    def load_from_path(cls, path: str | os.PathLike[str]) -> Config | None:
        """Load the config at ``path``; ``None`` if there is no file."""
        path = Path(path)
        if not path.exists():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise ConfigError(
                f"Error while trying to open config file {path}:\n{error}\n"
                "Continuing with default config."
            ) from error
        try:
            return cls._from_mapping(tomllib.loads(text))
        except (tomllib.TOMLDecodeError, TypeError) as error:
            raise ConfigError(
                f"Error while parsing config file {path}:\n{error}\n"
                "Continuing with default config."
            ) from error

    def write_to_env(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Export every set option as an environment variable."""
        target = os.environ if environ is None else environ
        for name, env_name in _ENV_NAMES.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool):
                target[env_name] = "true" if value else "false"
            else:
                target[env_name] = str(value)

    @classmethod
    def init(
        cls,
        path: str | os.PathLike[str] | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> Config | None:
        """Load the config and export it; report errors on stderr."""
        try:
            config = cls.load_from_path(config_path() if path is None else path)
        except ConfigError as error:
            print(error, file=sys.stderr)
            return None
        if config is not None:
            config.write_to_env(environ)
        return config