from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from mbbacklight.model import Subsystem
from mbbacklight.paths import resolve_config_path

_logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class DeviceConfig:
    brightness: Path
    max_brightness: Path
    step: int

    @classmethod
    def from_sysfs(cls, sysfs_dir: str | Path, step: int) -> DeviceConfig:
        d = Path(sysfs_dir)
        return cls(brightness=d / "brightness", max_brightness=d / "max_brightness", step=step)


DEFAULT_DEVICES: Mapping[Subsystem, DeviceConfig] = MappingProxyType(
    {
        Subsystem.KBD: DeviceConfig.from_sysfs("/sys/class/leds/spi::kbd_backlight", step=25),
        Subsystem.SCREEN: DeviceConfig.from_sysfs("/sys/class/backlight/gmux_backlight", step=25),
    }
)


@dataclass(frozen=True)
class Settings:
    devices: Mapping[Subsystem, DeviceConfig] = field(default_factory=lambda: DEFAULT_DEVICES)
    source: Path | None = None

    def device(self, subsystem: Subsystem) -> DeviceConfig:
        return self.devices[subsystem]


def _require_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping")
    return value


def _step(raw: Any, where: str) -> int:
    # bool is an int subclass.
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"{where}.step must be an integer: {raw!r}")
    if raw < 0:
        raise ConfigError(f"{where}.step must be >= 0: {raw}")
    return raw


def _path(section: dict[str, Any], key: str, where: str) -> str:
    raw = section[key]
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(f"{where}.{key} must be a non-empty path: {raw!r}")
    return raw.strip()


def _apply_section(base: DeviceConfig, section: dict[str, Any], where: str) -> DeviceConfig:
    unknown = set(section) - {"sysfs", "brightness", "max_brightness", "step"}
    if unknown:
        raise ConfigError(f"{where} has unknown keys: {', '.join(sorted(unknown))}")

    dev = base
    if "sysfs" in section:
        dev = DeviceConfig.from_sysfs(_path(section, "sysfs", where), step=dev.step)
    if "brightness" in section:
        dev = replace(dev, brightness=Path(_path(section, "brightness", where)))
    if "max_brightness" in section:
        dev = replace(dev, max_brightness=Path(_path(section, "max_brightness", where)))
    if "step" in section:
        dev = replace(dev, step=_step(section["step"], where))
    return dev


def validate(cfg: dict[str, Any]) -> Settings:
    """Turn a parsed config mapping into Settings layered over the defaults."""

    known = {s.value for s in Subsystem}
    unknown = set(cfg) - known
    if unknown:
        raise ConfigError(f"unknown systems in config: {', '.join(sorted(map(str, unknown)))}")

    devices = dict(DEFAULT_DEVICES)
    for subsystem in Subsystem:
        if subsystem.value not in cfg:
            continue
        section = _require_mapping(cfg[subsystem.value], subsystem.value)
        devices[subsystem] = _apply_section(devices[subsystem], section, subsystem.value)
    return Settings(devices=MappingProxyType(devices))


def load(path: str | Path) -> Settings:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config {p}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"cannot read config {p}: not valid UTF-8 ({e.reason})") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {p}: {e}") from e
    # An empty file keeps every default.
    if data is None:
        data = {}
    settings = validate(_require_mapping(data, "Top-level config"))
    return replace(settings, source=p)


def resolve(explicit: str | Path | None = None) -> Settings:
    """Load settings once at startup: explicit path, env var, XDG default, else built-ins."""

    path, required = resolve_config_path(explicit)
    if path is None:
        _logger.debug("no config file, using built-in device paths")
        return Settings()
    if not required and not path.is_file():
        return Settings()
    _logger.debug("loading config from %s", path)
    return load(path)
