"""
Runtime settings for dccseeder.

Precedence, lowest first: defaults, config file, environment, command line.
The config file uses dotenv syntax with the same keys as the environment:

    DCCSEEDER_OUTPUT=crawlers.csv
    DCCSEEDER_FORCE=yes
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

ENV_PREFIX = "DCCSEEDER_"
CONFIG_ENV = ENV_PREFIX + "CONFIG"
DEFAULT_CONFIG_FILE = ".dccseeder.env"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    pass


@dataclass
class Settings:
    output: Optional[str] = None
    debug: bool = False
    force: bool = False
    log_file: Optional[str] = None
    config_file: Optional[str] = None


def parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def find_config_file(explicit: Optional[str], environ: Mapping[str, str]) -> Optional[Path]:
    """Resolve which config file to read, if any."""
    chosen = explicit or environ.get(CONFIG_ENV)
    if chosen:
        path = Path(chosen)
        if not path.is_file():
            raise ConfigError(f"config file not found: {chosen}")
        return path

    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.is_file() else None


def _apply(settings: Settings, values: Mapping[str, Optional[str]]) -> None:
    for field in ("output", "log_file"):
        key = ENV_PREFIX + field.upper()
        if values.get(key):
            setattr(settings, field, values[key])

    for field in ("debug", "force"):
        key = ENV_PREFIX + field.upper()
        if values.get(key) is not None:
            setattr(settings, field, parse_bool(key, values[key]))


def load_settings(
    output: Optional[str] = None,
    debug: Optional[bool] = None,
    force: Optional[bool] = None,
    log_file: Optional[str] = None,
    config_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Merge config file, environment and explicit values (None means unset)."""
    if environ is None:
        environ = os.environ

    settings = Settings()

    path = find_config_file(config_file, environ)
    if path is not None:
        file_values: Dict[str, Optional[str]] = dict(dotenv_values(path))
        _apply(settings, file_values)
        settings.config_file = str(path)

    _apply(settings, {k: v for k, v in environ.items() if k.startswith(ENV_PREFIX)})

    if output is not None:
        settings.output = output
    if log_file is not None:
        settings.log_file = log_file
    if debug is not None:
        settings.debug = debug
    if force is not None:
        settings.force = force

    return settings
