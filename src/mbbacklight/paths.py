from __future__ import annotations

import os
from pathlib import Path

CONFIG_ENV = "MBBACKLIGHT_CONFIG"


def default_config_path(app_name: str = "mbbacklight") -> Path:
    """Return the per-user config file location.

    Uses XDG_CONFIG_HOME when available, else ~/.config.
    """

    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        root = Path(base)
    else:
        root = Path.home() / ".config"
    return root / app_name / "config.yaml"


def resolve_config_path(explicit: str | Path | None = None) -> tuple[Path | None, bool]:
    """Pick the config file to load.

    Returns (path, required). An explicitly named file (argument or
    MBBACKLIGHT_CONFIG) is required to exist; the XDG default is optional.
    """

    if explicit:
        return Path(explicit), True
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env), True
    default = default_config_path()
    if default.is_file():
        return default, False
    return None, False
