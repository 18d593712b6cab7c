from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_INT_RE = re.compile(r"[+-]?[0-9]+")


class BacklightError(Exception):
    """Base class for every error that ends an invocation with status 1."""


class UsageError(BacklightError):
    pass


class ParseError(BacklightError, ValueError):
    pass


class Subsystem(str, enum.Enum):
    KBD = "kbd"
    SCREEN = "screen"

    @classmethod
    def parse(cls, name: str) -> Subsystem:
        try:
            return cls(name)
        except ValueError:
            raise UsageError(f"unknown system: {name!r}") from None


class Operation(str, enum.Enum):
    GET = "get"
    MAX = "max"
    SET = "set"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, name: str) -> Operation:
        try:
            return cls(name)
        except ValueError:
            raise UsageError(f"unknown command: {name!r}") from None


@dataclass(frozen=True)
class Command:
    subsystem: Subsystem
    operation: Operation
    value: str | None = None
    # None means the subsystem's configured default.
    step: int | None = None

    def __post_init__(self) -> None:
        if self.step is not None and self.step < 0:
            raise UsageError(f"step must be >= 0: {self.step}")


def parse_int(text: str | None, what: str) -> int:
    """Parse a base-10 integer, allowing surrounding whitespace and a sign.

    Anything else (empty input, underscores, floats, hex) raises ParseError.
    """

    raw = "" if text is None else text.strip()
    if not _INT_RE.fullmatch(raw):
        raise ParseError(f"error parsing {what} ({raw!r}): not a base-10 integer")
    return int(raw)
