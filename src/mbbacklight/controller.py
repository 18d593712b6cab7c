from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO, assert_never

from mbbacklight.config import Settings
from mbbacklight.model import Command, Operation, parse_int
from mbbacklight.system.backlight import Backlight

_logger = logging.getLogger(__name__)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def step_up(current: int, step: int, maximum: int) -> int:
    return min(current + step, maximum)


def step_down(current: int, step: int) -> int:
    return max(current - step, 0)


@dataclass(frozen=True)
class Controller:
    settings: Settings = field(default_factory=Settings)

    def backlight_for(self, command: Command) -> Backlight:
        return Backlight.from_config(self.settings.device(command.subsystem))

    def step_for(self, command: Command) -> int:
        # A step of 0 falls back to the default as well.
        if command.step:
            return command.step
        return self.settings.device(command.subsystem).step

    def execute(self, command: Command, out: TextIO | None = None) -> int | None:
        """Run one command against the subsystem's device files.

        Both files are read on every call so the bounds always reflect the
        device. Returns the value written, or None for get/max.
        """

        out = sys.stdout if out is None else out
        bl = self.backlight_for(command)
        _logger.debug(
            "%s %s via %s (max %s)",
            command.subsystem.value,
            command.operation.value,
            bl.brightness_file,
            bl.max_brightness_file,
        )

        current = bl.read_current()
        maximum = bl.read_max()
        op = command.operation

        if op is Operation.GET:
            out.write(f"{current.raw}\n")
            return None
        elif op is Operation.MAX:
            out.write(f"{maximum.raw}\n")
            return None
        elif op is Operation.SET:
            new = clamp(parse_int(command.value, "brightness value"), 0, maximum.value)
        elif op is Operation.UP:
            new = step_up(current.value, self.step_for(command), maximum.value)
        elif op is Operation.DOWN:
            new = step_down(current.value, self.step_for(command))
        else:
            assert_never(op)

        bl.write(new)
        return new
