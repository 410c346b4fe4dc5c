"""Command line parsing driven by a list of option blocks."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from clopt.options import ArgRequirement, OptionBlock, OptionContext, OptionParseError

__all__ = ["parse_options", "parse_options_at"]

_ESC_ERROR = "\033[1m\033[31m"
_ESC_END = "\033[0m"


class _Parser:
    """Parsing state for one call of :func:`parse_options_at`."""

    def __init__(
        self,
        argv: Sequence[str],
        blocks: Sequence[OptionBlock],
        user: Any,
        stream: TextIO,
    ) -> None:
        self.argv = argv
        self.blocks = blocks
        self.stream = stream
        self.ctx = OptionContext(argv=argv, blocks=blocks, user=user)
        self.errors: list[str] = []

    @property
    def prog(self) -> str:
        return self.ctx.program_name

    @property
    def argc(self) -> int:
        return len(self.argv)

    def _emit(self, message: str) -> None:
        isatty = getattr(self.stream, "isatty", None)
        if callable(isatty) and isatty():
            self.stream.write(f"{_ESC_ERROR}{message}\n{_ESC_END}")
        else:
            self.stream.write(f"{message}\n")

    def fail(self, message: str) -> OptionParseError:
        """Report a fatal error and return the exception to raise."""
        self._emit(message)
        return OptionParseError(message)

    def report(self, message: str) -> None:
        """Report an error after which parsing goes on."""
        self._emit(message)
        self.errors.append(message)

    def call(self, block: OptionBlock) -> None:
        self.ctx.current_block = block
        ret = block.function(self.ctx) or 0
        if ret < 0:
            raise OptionParseError(
                f"{self.prog}: option {block.format()} failed with status {ret}"
            )
        if ret > 0:
            self.errors.append(
                f"{self.prog}: option {block.format()} reported status {ret}"
            )

    def _find_long(self, name: str) -> OptionBlock | None:
        return next((b for b in self.blocks if b.long_opt == name), None)

    def _find_short(self, char: str) -> OptionBlock | None:
        return next((b for b in self.blocks if b.short_opt == char), None)

    def _next_arg(self) -> str:
        self.ctx.argv_index += 1
        return self.argv[self.ctx.argv_index]

    def _has_next(self) -> bool:
        return self.ctx.argv_index + 1 < self.argc

    def _missing_long_optional(self, block: OptionBlock) -> OptionParseError:
        return self.fail(
            f"{self.prog}: missing argument after '=' of long option --{block.long_opt}"
        )

    def _missing_short_optional(self, block: OptionBlock) -> OptionParseError:
        return self.fail(
            f"{self.prog}: missing argument after '=' of short option -{block.short_opt}"
        )

    def parse_long(self, rest: str) -> None:
        ctx = self.ctx
        if not rest:
            raise self.fail(f"{self.prog}: missing long option --???")
        name, sep, value = rest.partition("=")
        block = self._find_long(name)
        if block is None:
            self.report(f"{self.prog}: unrecognized long option --{rest}")
            return

        if block.has_arg is ArgRequirement.NO_ARG:
            self.call(block)
        elif block.has_arg is ArgRequirement.REQUIRED_ARG:
            if not self._has_next():
                raise self.fail(
                    f"{self.prog}: missing argument of long option --{block.long_opt}"
                )
            ctx.opt_arg = self._next_arg()
            self.call(block)
        elif not sep:
            if not self._has_next() or not self.argv[ctx.argv_index + 1].startswith("="):
                self.call(block)
                return
            following = self._next_arg()
            if len(following) > 1:
                ctx.opt_arg = following[1:]  # "--OPTION =ARGUMENT"
            elif self._has_next():
                ctx.opt_arg = self._next_arg()  # "--OPTION = ARGUMENT"
            else:
                raise self._missing_long_optional(block)
            self.call(block)
        else:
            if value:
                ctx.opt_arg = value  # "--OPTION=ARGUMENT"
            elif self._has_next():
                ctx.opt_arg = self._next_arg()  # "--OPTION= ARGUMENT"
            else:
                raise self._missing_long_optional(block)
            self.call(block)

    def parse_short(self, arg: str) -> None:
        ctx = self.ctx
        pos = 1
        while pos < len(arg):
            char = arg[pos]
            block = self._find_short(char)
            if block is None:
                self.report(f"{self.prog}: unrecognized option -{char}")
                pos += 1
                continue

            tail = arg[pos + 1:]
            if block.has_arg is ArgRequirement.NO_ARG:
                self.call(block)
            elif block.has_arg is ArgRequirement.REQUIRED_ARG:
                if not tail and not self._has_next():
                    raise self.fail(f"{self.prog}: missing argument for option '{char}'")
                if tail:
                    ctx.opt_arg = tail
                    self.call(block)
                    pos = len(arg) - 1
                else:
                    ctx.opt_arg = self._next_arg()
                    self.call(block)
            else:
                if tail.startswith("="):
                    pos += 1
                    if len(tail) > 1:
                        ctx.opt_arg = tail[1:]  # "-O=ARGUMENT"
                    elif self._has_next():
                        ctx.opt_arg = self._next_arg()  # "-O= ARGUMENT"
                    else:
                        raise self._missing_short_optional(block)
                elif not tail and self._has_next():
                    if self.argv[ctx.argv_index + 1].startswith("="):
                        following = self._next_arg()
                        if len(following) > 1:
                            ctx.opt_arg = following[1:]  # "-O =ARGUMENT"
                        elif self._has_next():
                            ctx.opt_arg = self._next_arg()  # "-O = ARGUMENT"
                        else:
                            raise self._missing_short_optional(block)
                self.call(block)
                if ctx.opt_arg is not None:
                    pos = len(arg) - 1
            pos += 1

    def run(self, offset: int) -> int:
        ctx = self.ctx
        ctx.argv_index = offset
        while ctx.argv_index < self.argc:
            arg = self.argv[ctx.argv_index]
            if not arg.startswith("-"):
                break
            if len(arg) == 1:
                raise self.fail(f"{self.prog}: missing option -?")
            if "0" <= arg[1] <= "9":
                break  # a negative number, not an option
            ctx.opt_arg = None
            if arg[1] == "-":
                self.parse_long(arg[2:])
            else:
                self.parse_short(arg)
            ctx.argv_index += 1
        if self.errors:
            raise OptionParseError("\n".join(self.errors))
        return ctx.argv_index


def parse_options_at(
    offset: int,
    argv: Sequence[str],
    blocks: Sequence[OptionBlock],
    user: Any = None,
    stderr: TextIO | None = None,
) -> int:
    """Parse options in *argv* from *offset* on, calling each block's callback.

    Returns the index of the first non-option argument, or ``len(argv)`` when
    there is none. Error messages go to *stderr* (default ``sys.stderr``) and
    :class:`OptionParseError` is raised when parsing failed.
    """
    if offset < 0:
        raise ValueError(f"offset must not be negative, not {offset}")
    stream = stderr if stderr is not None else sys.stderr
    return _Parser(argv, blocks, user, stream).run(offset)


def parse_options(
    argv: Sequence[str],
    blocks: Sequence[OptionBlock],
    user: Any = None,
    stderr: TextIO | None = None,
) -> int:
    """Parse options that come before all non-option arguments."""
    return parse_options_at(1, argv, blocks, user, stderr)