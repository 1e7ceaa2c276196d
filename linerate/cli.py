"""Command line entry point: `linerate lines [FILE]` and `linerate numbers [FILE]`."""

from __future__ import annotations

import argparse
import logging
import os
import stat
import sys
from collections.abc import Sequence

from linerate import __version__
from linerate.core.counter import LineRateCounter
from linerate.core.differentiator import ValueRateDifferentiator
from linerate.errors import InputValidationError
from linerate.source.reader import STDIN_PATH, open_source

logger = logging.getLogger(__name__)

MODES = {
    "lines": LineRateCounter,
    "numbers": ValueRateDifferentiator,
}


def validate_file(path: str) -> str:
    """Accept "-" or an existing regular file; raise InputValidationError otherwise."""
    if path == STDIN_PATH:
        return path
    try:
        mode = os.stat(path).st_mode
    except FileNotFoundError:
        raise InputValidationError(path, f"{path}: file not found")
    except OSError as e:
        raise InputValidationError(path, e.strerror or f"{path}: unable to read file")
    if not stat.S_ISREG(mode):
        raise InputValidationError(path, f"{path} is not a file")
    return path


def _file_argument(path: str) -> str:
    try:
        return validate_file(path)
    except InputValidationError as e:
        raise argparse.ArgumentTypeError(e.reason)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linerate",
        description="Reads input from stdin and calculates the rate of lines or values seen over time",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="{lines,numbers}")

    lines = sub.add_parser("lines", help="Count each line as it appears")
    lines.add_argument(
        "file",
        nargs="?",
        default=STDIN_PATH,
        metavar="FILE",
        help="With no FILE or if FILE is -, read from standard input",
    )

    numbers = sub.add_parser(
        "numbers",
        help="Parse the input line as a number and use its value in the rate calculation",
    )
    numbers.add_argument(
        "file",
        nargs="?",
        default=STDIN_PATH,
        type=_file_argument,
        metavar="FILE",
        help="With no FILE or if FILE is -, read from standard input",
    )
    return parser


def infer_subcommand(argv: Sequence[str]) -> list[str]:
    """Expand an unambiguous prefix of a subcommand name ("l" -> "lines")."""
    args = list(argv)
    for i, arg in enumerate(args):
        if arg.startswith("-"):
            continue
        matches = [name for name in MODES if name.startswith(arg)]
        if len(matches) == 1:
            args[i] = matches[0]
        break
    return args


def resolve_log_level(name: str) -> int | None:
    """Numeric level for a level name such as "debug", or None if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def main(argv: Sequence[str] | None = None) -> int:
    level_name = os.getenv("LINERATE_LOG_LEVEL", "WARNING")
    level = resolve_log_level(level_name)
    logging.basicConfig(
        level=logging.WARNING if level is None else level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if level is None:
        logger.warning("Unknown LINERATE_LOG_LEVEL %r, using WARNING", level_name)

    parser = build_parser()
    args = parser.parse_args(infer_subcommand(sys.argv[1:] if argv is None else argv))
    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    try:
        source = open_source(args.file)
    except OSError as e:
        logger.error("%s: %s", args.file, e.strerror or e)
        return 1

    mode = MODES[args.command]()
    try:
        with source:
            stats = mode.run(source, sink=lambda text: print(text, flush=True))
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        # stdout went away; keep the interpreter from complaining on exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0

    logger.debug(
        "%s: processed=%d emitted=%d errors=%d duration=%.6fs",
        args.command, stats.processed, stats.emitted, stats.errors, stats.duration,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
