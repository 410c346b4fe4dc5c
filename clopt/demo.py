"""Demonstration program: options with no, required and optional arguments."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from clopt.options import (
    ArgRequirement,
    OptionBlock,
    OptionContext,
    OptionParseError,
    format_option_list,
)
from clopt.parser import parse_options, parse_options_at

__all__ = [
    "DEFAULT_LOGFILE",
    "DemoData",
    "build_option_list",
    "main",
    "read_integer",
    "run_classic",
    "run_mixed",
]

DEFAULT_LOGFILE = "/var/log/myDefaultLogfile"
FLAG_NAMES = "abc"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

_INTEGER_PREFIX = re.compile(r"[+-]?[0-9]+")


@dataclass
class DemoData:
    """Program settings changed by the demo options."""

    logfile_name: str | None = None
    flags: int = 0
    integer: int = 0
    err: TextIO | None = field(default=None, repr=False, compare=False)


class _HelpRequested(Exception):
    """Raised by the help option to stop parsing and show the help text."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


def _print_help(ctx: OptionContext) -> int:
    text = (
        f"Usage: {ctx.program_name} [options] [argunents]\nOptions:\n"
        + format_option_list(ctx.blocks)
    )
    raise _HelpRequested(text)


def _log_file(ctx: OptionContext) -> int:
    ctx.user.logfile_name = ctx.opt_arg if ctx.opt_arg is not None else DEFAULT_LOGFILE
    return 0


def _set_flag(ctx: OptionContext) -> int:
    ctx.user.flags |= 1 << ctx.current_block.id
    return 0


def _error_stream(ctx: OptionContext) -> TextIO:
    err = getattr(ctx.user, "err", None)
    return err if err is not None else sys.stderr


def read_integer(ctx: OptionContext) -> int:
    """Store the decimal integer given as option argument; return -1 if it is malformed."""
    arg = ctx.opt_arg if ctx.opt_arg is not None else ""
    stream = _error_stream(ctx)
    option = ctx.current_block.format() if ctx.current_block is not None else ""

    first = arg[:1]
    starts_ok = first.isascii() and first.isdigit() if first not in ("-", "+") else (
        arg[1:2].isascii() and arg[1:2].isdigit()
    )
    if not starts_ok:
        stream.write(
            f'{ctx.program_name}: Argument no: {ctx.argv_index} option: "{option}"'
            f' expects a decimal number and not: "{arg}"\n'
        )
        return -1

    match = _INTEGER_PREFIX.match(arg)
    ctx.user.integer = int(match.group())
    if match.end() == len(arg):
        return 0

    stream.write(
        f"{ctx.program_name}: Argument no: {ctx.argv_index} invalid format of"
        f' integer number "{arg}" for option: "{option}"\n'
    )
    return -1


def build_option_list() -> list[OptionBlock]:
    """Return the option blocks of the demo program."""
    flag_blocks = [
        OptionBlock(
            function=_set_flag,
            has_arg=ArgRequirement.NO_ARG,
            short_opt=name,
            id=index,
            help_text=f"Set flag '{name}'",
        )
        for index, name in enumerate(FLAG_NAMES)
    ]
    return [
        OptionBlock(
            function=_print_help,
            short_opt="h",
            long_opt="help",
            help_text="Print this help and exit",
        ),
        OptionBlock(
            function=_log_file,
            has_arg=ArgRequirement.OPTIONAL_ARG,
            short_opt="l",
            long_opt="logfile",
            help_text="Logfile. If set logging is enabled.\n"
            "You can name a explicit logfile in PARAM",
        ),
        *flag_blocks,
        OptionBlock(
            function=read_integer,
            has_arg=ArgRequirement.REQUIRED_ARG,
            short_opt="i",
            long_opt="integer",
            help_text="Read a integer number in PARAM",
        ),
    ]


def _write_report(data: DemoData, out: TextIO) -> None:
    if data.logfile_name is not None:
        out.write(f"Logfile will used: {data.logfile_name}\n")
    else:
        out.write("No logfile will used\n")
    out.write("Flags:\n")
    for index, name in enumerate(FLAG_NAMES):
        state = "set" if data.flags & (1 << index) else "not set"
        out.write(f"Flag {name} is {state}\n")
    out.write(f"Integer value = {data.integer}\n\n")


def run_classic(
    argv: Sequence[str], out: TextIO | None = None, err: TextIO | None = None
) -> int:
    """Parse options first and non-option arguments after them; return an exit code."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    data = DemoData(err=err)
    try:
        first = parse_options(argv, build_option_list(), data, err)
    except _HelpRequested as help_request:
        out.write(help_request.text)
        return EXIT_SUCCESS
    except OptionParseError:
        return EXIT_FAILURE

    out.write("\n")
    for number, index in enumerate(range(first, len(argv)), start=1):
        out.write(f'Non option argument {number} in ppArgv[{index}]: "{argv[index]}"\n')
    _write_report(data, out)
    return EXIT_SUCCESS


def run_mixed(
    argv: Sequence[str], out: TextIO | None = None, err: TextIO | None = None
) -> int:
    """Parse options and non-option arguments in any order; return an exit code."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    data = DemoData(err=err)
    blocks = build_option_list()
    out.write("\n")
    index = 1
    try:
        while index < len(argv):
            index = parse_options_at(index, argv, blocks, data, err)
            if index < len(argv):
                out.write(f'Non option argument in ppArgv[{index}]: "{argv[index]}"\n')
            index += 1
    except _HelpRequested as help_request:
        out.write(help_request.text)
        return EXIT_SUCCESS
    except OptionParseError:
        return EXIT_FAILURE

    _write_report(data, out)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """Run the demo on the command line with options and arguments in mixed order."""
    if argv is None:
        argv = sys.argv
    return run_mixed(list(argv), sys.stdout, sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())