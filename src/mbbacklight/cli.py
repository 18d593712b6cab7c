from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from mbbacklight import __version__
from mbbacklight.config import ConfigError, resolve
from mbbacklight.controller import Controller
from mbbacklight.model import BacklightError, Command, Operation, Subsystem, UsageError

_USAGE = "%(prog)s [flags] <system> <operation> [value]"

_EPILOG = """\
systems:
  kbd
  screen

operations:
  get
  up
  down
  max
  set [value]
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="mbbacklight",
        usage=_USAGE,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("--step", type=int, default=0, help="step value for up/down")
    ap.add_argument("-c", "--config", help="YAML file overriding device paths and steps")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")

    ap.add_argument("system", help=argparse.SUPPRESS)
    ap.add_argument("operation", help=argparse.SUPPRESS)
    ap.add_argument("value", nargs="?", help=argparse.SUPPRESS)
    return ap


def parse_command(
    ap: argparse.ArgumentParser, argv: list[str] | None
) -> tuple[Command, argparse.Namespace]:
    args = ap.parse_args(argv)
    cmd = Command(
        subsystem=Subsystem.parse(args.system),
        operation=Operation.parse(args.operation),
        value=args.value,
        step=args.step or None,
    )
    return cmd, args


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    ap = _build_parser()
    try:
        cmd, args = parse_command(ap, argv)
        _configure_logging(args.verbose)
        settings = resolve(args.config)
        Controller(settings).execute(cmd)
    except UsageError as e:
        print(e, file=sys.stderr)
        ap.print_help(sys.stderr)
        return 1
    except (BacklightError, ConfigError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0
