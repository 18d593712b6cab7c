from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mbbacklight.config import DeviceConfig
from mbbacklight.model import BacklightError, ParseError, parse_int

_logger = logging.getLogger(__name__)


class DeviceError(BacklightError):
    pass


@dataclass(frozen=True)
class Reading:
    raw: str
    value: int


@dataclass(frozen=True)
class Backlight:
    brightness_file: Path
    max_brightness_file: Path

    @classmethod
    def from_config(cls, dev: DeviceConfig) -> Backlight:
        return cls(brightness_file=dev.brightness, max_brightness_file=dev.max_brightness)

    def _read(self, path: Path, what: str) -> Reading:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DeviceError(f"error getting {what}: {path}: {e.strerror or e}") from e
        try:
            text = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise ParseError(
                f"error parsing {what} value in {path}: non-ASCII byte at offset {e.start}"
            ) from e

        raw = text.strip()
        value = parse_int(raw, f"{what} value")
        if value < 0:
            raise DeviceError(f"{what} in {path} is negative: {value}")
        _logger.debug("read %s=%d from %s", what, value, path)
        return Reading(raw=raw, value=value)

    def read_current(self) -> Reading:
        return self._read(self.brightness_file, "brightness")

    def read_max(self) -> Reading:
        return self._read(self.max_brightness_file, "max brightness")

    def write(self, value: int) -> None:
        # No O_CREAT: a missing sysfs attribute must not become a regular file.
        try:
            fd = os.open(self.brightness_file, os.O_WRONLY | os.O_TRUNC)
        except OSError as e:
            raise DeviceError(
                f"error opening brightness file: {self.brightness_file}: {e.strerror or e}"
            ) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(f"{int(value)}\n")
        except OSError as e:
            raise DeviceError(
                f"error writing brightness value to {self.brightness_file}: {e.strerror or e}"
            ) from e
        _logger.debug("wrote brightness=%d to %s", value, self.brightness_file)
