"""Option blocks, the context handed to option callbacks, and help formatting."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO, Union

__all__ = [
    "ArgRequirement",
    "OptionBlock",
    "OptionCallback",
    "OptionContext",
    "OptionParseError",
    "format_option",
    "format_option_list",
    "print_option",
    "print_option_list",
]


class ArgRequirement(Enum):
    """Whether an option takes an argument."""

    NO_ARG = 0
    REQUIRED_ARG = 1
    OPTIONAL_ARG = 2

    @property
    def placeholder(self) -> str:
        """The parameter text shown after the option in help output."""
        return _PLACEHOLDERS[self]


_PLACEHOLDERS = {
    ArgRequirement.NO_ARG: "",
    ArgRequirement.REQUIRED_ARG: " PARAM",
    ArgRequirement.OPTIONAL_ARG: " [=PARAM]",
}


class OptionParseError(ValueError):
    """Raised when a command line cannot be parsed."""


OptionCallback = Callable[["OptionContext"], Union[int, None]]
"""Callback of an option.

Returning ``None`` or ``0`` means success. A negative value stops parsing at
once; a positive value lets parsing continue but marks the whole parse as
failed.
"""


@dataclass(frozen=True)
class OptionBlock:
    """One option: its callback, its short and long names and its help text."""

    function: OptionCallback
    has_arg: ArgRequirement = ArgRequirement.NO_ARG
    id: int = 0
    short_opt: str | None = None
    long_opt: str | None = None
    help_text: str | None = None

    def __post_init__(self) -> None:
        if not callable(self.function):
            raise TypeError("option callback must be callable")
        if not isinstance(self.has_arg, ArgRequirement):
            raise TypeError("has_arg must be an ArgRequirement")
        if self.short_opt is None and self.long_opt is None:
            raise ValueError("an option needs a short or a long name")
        if self.short_opt is not None and len(self.short_opt) != 1:
            raise ValueError(
                f"short option must be a single character, not {self.short_opt!r}"
            )
        if self.long_opt is not None and not self.long_opt:
            raise ValueError("long option must not be empty")

    def format(self) -> str:
        """Return the option as shown in help text, e.g. ``-i PARAM, --integer PARAM``."""
        param = self.has_arg.placeholder
        parts = []
        if self.short_opt is not None:
            parts.append(f"-{self.short_opt}{param}")
        if self.long_opt is not None:
            parts.append(f"--{self.long_opt}{param}")
        return ", ".join(parts)

    def __str__(self) -> str:
        return self.format()


@dataclass
class OptionContext:
    """State handed to an option callback while the command line is parsed."""

    argv: Sequence[str]
    blocks: Sequence[OptionBlock]
    user: Any = None
    argv_index: int = 0
    opt_arg: str | None = None
    current_block: OptionBlock | None = field(default=None)

    @property
    def argc(self) -> int:
        """Number of entries in the argument vector."""
        return len(self.argv)

    @property
    def program_name(self) -> str:
        """The program name, taken from the first argument vector entry."""
        return self.argv[0] if self.argv else ""


def format_option(block: OptionBlock) -> str:
    """Return the short and long form of an option as shown in help text."""
    return block.format()


def format_option_list(blocks: Iterable[OptionBlock]) -> str:
    """Return the formatted help entry of every option block."""
    entries = []
    for block in blocks:
        help_text = (block.help_text or "").replace("\n", "\n\t")
        entries.append(f"  {block.format()}\n\t{help_text}\n\n")
    return "".join(entries)


def print_option(block: OptionBlock, stream: TextIO | None = None) -> None:
    """Write the short and long form of an option to *stream* (default stdout)."""
    (stream if stream is not None else sys.stdout).write(format_option(block))


def print_option_list(
    blocks: Iterable[OptionBlock], stream: TextIO | None = None
) -> None:
    """Write the help entry of every option block to *stream* (default stdout)."""
    (stream if stream is not None else sys.stdout).write(format_option_list(blocks))