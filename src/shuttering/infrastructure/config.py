"""Application configuration.

Values come from, in increasing precedence: built-in defaults, an
optional TOML file, and environment variables.

    [app]
    data_dir = "/var/lib/shuttering"
    log_level = "INFO"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_ENV = "SHUTTERING_CONFIG"
DATA_DIR_ENV = "SHUTTERING_DATA_DIR"
LOG_LEVEL_ENV = "SHUTTERING_LOG_LEVEL"

DEFAULT_DATA_DIR = Path("data")
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Build the effective configuration.

    *path* falls back to ``$SHUTTERING_CONFIG``; with neither set only
    defaults and environment overrides apply.
    """
    env = os.environ if environ is None else environ
    path = path or env.get(CONFIG_ENV)

    app: dict = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"Config file not found: {p.resolve()}")
        try:
            data = tomllib.loads(p.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to read config TOML: {e}") from e
        app = data.get("app", {})
        if not isinstance(app, dict):
            raise ConfigError("[app] must be a table")

    data_dir = env.get(DATA_DIR_ENV) or app.get("data_dir") or DEFAULT_DATA_DIR
    log_level = env.get(LOG_LEVEL_ENV) or app.get("log_level") or DEFAULT_LOG_LEVEL

    return AppConfig(
        data_dir=Path(data_dir).expanduser(),
        log_level=str(log_level).upper(),
    )
