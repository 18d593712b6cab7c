from __future__ import annotations

import io
from pathlib import Path

import pytest

from mbbacklight.config import DeviceConfig, Settings
from mbbacklight.controller import Controller, clamp, step_down, step_up
from mbbacklight.model import Command, Operation, ParseError, Subsystem
from mbbacklight.system.backlight import Backlight


def _controller(root: Path, step: int = 25) -> Controller:
    return Controller(
        Settings(
            devices={
                Subsystem.KBD: DeviceConfig.from_sysfs(root / "kbd", step=step),
                Subsystem.SCREEN: DeviceConfig.from_sysfs(root / "screen", step=step),
            }
        )
    )


def _stored(root: Path, name: str) -> str:
    return (root / name / "brightness").read_text(encoding="utf-8")


@pytest.mark.parametrize(
    ("current", "step", "maximum"),
    [(0, 0, 0), (0, 25, 100), (50, 25, 100), (90, 25, 100), (100, 25, 100), (3, 1000, 7)],
)
def test_step_bounds(current: int, step: int, maximum: int) -> None:
    assert step_up(current, step, maximum) == min(current + step, maximum)
    assert step_down(current, step) == max(current - step, 0)


@pytest.mark.parametrize(("value", "expected"), [(-5, 0), (0, 0), (42, 42), (100, 100), (500, 100)])
def test_clamp(value: int, expected: int) -> None:
    assert clamp(value, 0, 100) == expected


def test_screen_up_sequence_clamps(sysfs) -> None:
    root = sysfs("50\n", "100\n")
    ctl = _controller(root)
    cmd = Command(Subsystem.SCREEN, Operation.UP)
    assert ctl.execute(cmd) == 75
    assert ctl.execute(cmd) == 100
    assert ctl.execute(cmd) == 100
    assert _stored(root, "screen") == "100\n"
    assert _stored(root, "kbd") == "50\n"


def test_down_floors_at_zero(sysfs) -> None:
    root = sysfs("30\n", "100\n")
    ctl = _controller(root)
    cmd = Command(Subsystem.KBD, Operation.DOWN)
    assert ctl.execute(cmd) == 5
    assert ctl.execute(cmd) == 0
    assert _stored(root, "kbd") == "0\n"


def test_step_override(sysfs) -> None:
    ctl = _controller(sysfs("10\n", "100\n"))
    assert ctl.execute(Command(Subsystem.KBD, Operation.UP, step=7)) == 17


def test_zero_step_uses_default(sysfs) -> None:
    ctl = _controller(sysfs("10\n", "100\n"), step=5)
    assert ctl.execute(Command(Subsystem.KBD, Operation.UP, step=0)) == 15


@pytest.mark.parametrize(("value", "expected"), [("-5", 0), ("500", 100), ("60", 60)])
def test_set_clamps(sysfs, value: str, expected: int) -> None:
    root = sysfs("10\n", "100\n")
    assert _controller(root).execute(Command(Subsystem.KBD, Operation.SET, value=value)) == expected
    assert _stored(root, "kbd") == f"{expected}\n"


def test_set_is_idempotent_and_round_trips(sysfs) -> None:
    root = sysfs("10\n", "100\n")
    ctl = _controller(root)
    cmd = Command(Subsystem.SCREEN, Operation.SET, value="33")
    ctl.execute(cmd)
    once = _stored(root, "screen")
    ctl.execute(cmd)
    assert _stored(root, "screen") == once

    out = io.StringIO()
    ctl.execute(Command(Subsystem.SCREEN, Operation.GET), out=out)
    assert out.getvalue() == "33\n"


@pytest.mark.parametrize("value", [None, "", "abc", "1.0"])
def test_set_rejects_bad_value(sysfs, value: str | None) -> None:
    root = sysfs("10\n", "100\n")
    with pytest.raises(ParseError):
        _controller(root).execute(Command(Subsystem.KBD, Operation.SET, value=value))
    assert _stored(root, "kbd") == "10\n"


@pytest.mark.parametrize(("op", "expected"), [(Operation.GET, "042\n"), (Operation.MAX, "0255\n")])
def test_reads_print_raw_and_never_write(
    sysfs, monkeypatch: pytest.MonkeyPatch, op: Operation, expected: str
) -> None:
    ctl = _controller(sysfs("  042 \n", "0255\n"))

    def _no_write(self: Backlight, value: int) -> None:
        raise AssertionError("read-only operation wrote to the device")

    monkeypatch.setattr(Backlight, "write", _no_write)
    out = io.StringIO()
    assert ctl.execute(Command(Subsystem.KBD, op), out=out) is None
    assert out.getvalue() == expected


@pytest.mark.parametrize("op", list(Operation))
def test_every_operation_is_handled(sysfs, op: Operation) -> None:
    root = sysfs("10\n", "100\n")
    result = _controller(root).execute(Command(Subsystem.KBD, op, value="5"), out=io.StringIO())
    assert (result is None) == (op in (Operation.GET, Operation.MAX))
