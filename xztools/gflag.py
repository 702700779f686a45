"""GNU-style command line flag parsing.

Flags have long names (--name), single-character shorthands (-n) or
both. Short flags may be combined (-vvv). A flag argument is either
required, optional or not supported; optional arguments are consumed
only if they parse, otherwise the flag is updated as if given alone.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, TextIO

from .flagvalues import (
    BoolValue,
    IntValue,
    PresetValue,
    StringValue,
    UsageLine,
    Value,
    line_flags,
    write_lines,
)


class ErrorHandling(IntEnum):
    """How FlagSet.parse reacts to a parsing error."""

    CONTINUE_ON_ERROR = 0
    EXIT_ON_ERROR = 1
    PANIC_ON_ERROR = 2


class HasArg(IntEnum):
    """Whether a flag argument is required, not supported or optional."""

    REQUIRED = 0
    NO = 1
    OPTIONAL = 2


class FlagError(ValueError):
    """Raised for errors in the command line arguments."""


@dataclass
class Flag:
    """A single flag with its long name, shorthands and value."""

    name: str
    shorthands: str
    has_arg: HasArg
    value: Value


class FlagSet:
    """A set of flags and the arguments left over after parsing."""

    def __init__(
        self,
        name: str = "",
        error_handling: ErrorHandling = ErrorHandling.CONTINUE_ON_ERROR,
    ) -> None:
        self.name = name
        self.error_handling = ErrorHandling(error_handling)
        self.usage_func: Optional[Callable[[], None]] = None
        self._parsed = False
        self._formal: dict[str, Flag] = {}
        self._lines: list[UsageLine] = []
        self._args: list[str] = []
        self._output: Optional[TextIO] = None
        self._has_preset = False

    # ----- results -----

    def arg(self, i: int) -> str:
        """Return remaining argument i or "" if there is none."""
        if not 0 <= i < len(self._args):
            return ""
        return self._args[i]

    def args(self) -> list[str]:
        """Return the arguments that are not flags."""
        return list(self._args)

    def narg(self) -> int:
        """Return the number of remaining arguments."""
        return len(self._args)

    def parsed(self) -> bool:
        """Return whether parse has been called."""
        return self._parsed

    # ----- output -----

    def _out(self) -> TextIO:
        return self._output if self._output is not None else sys.stderr

    def set_output(self, out: Optional[TextIO]) -> None:
        """Set the stream for messages; None means standard error."""
        self._output = out

    def _panicf(self, fmt: str, *args: object) -> None:
        msg = fmt % args if args else fmt
        if self.name:
            msg = f"{self.name} {msg}"
        self._out().write(msg + "\n")
        raise ValueError(msg)

    def print_defaults(self) -> None:
        """Write the usage lines of all flags."""
        write_lines(self._out(), self._lines)

    def usage(self) -> None:
        """Print usage information, using usage_func if it is set."""
        if self.usage_func is not None:
            self.usage_func()
            return
        out = self._out()
        if self.name:
            out.write(f"Usage of {self.name}:\n")
        else:
            out.write("Usage:\n")
        self.print_defaults()

    # ----- definition -----

    def _set_formal(self, name: str, flag: Flag) -> None:
        if not name:
            self._panicf("no support for empty name strings")
        if name in self._formal:
            self._panicf("flag redefined: %s", flag.name)
        self._formal[name] = flag

    def var_p(
        self, value: Value, name: str, shorthands: str, has_arg: HasArg
    ) -> None:
        """Define a flag with a long name and shorthand characters."""
        flag = Flag(name, shorthands, HasArg(has_arg), value)
        if not name and not shorthands:
            self._panicf("flag with no name or shorthands")
        if len(name) == 1:
            self._panicf(
                "flag has single character name %r; use shorthands", name
            )
        if name:
            self._set_formal(name, flag)
        for c in shorthands:
            self._set_formal(c, flag)

    def var(self, value: Value, name: str, has_arg: HasArg) -> None:
        """Define a flag; a one-character name becomes a shorthand."""
        if len(name) == 1:
            self.var_p(value, "", name, has_arg)
        else:
            self.var_p(value, name, "", has_arg)

    def _add_line(self, line: UsageLine) -> None:
        if not line.flags:
            self._panicf("no flags for %r", line.usage)
        self._lines.append(line)

    def _define(
        self,
        value: Value,
        name: str,
        shorthands: str,
        default_text: str,
        usage: str,
        has_arg: HasArg,
    ) -> None:
        self._add_line(UsageLine(line_flags(name, shorthands, default_text), usage))
        if shorthands:
            self.var_p(value, name, shorthands, has_arg)
        else:
            self.var(value, name, has_arg)

    def bool_flag(
        self, name: str, shorthands: str = "", value: bool = False, usage: str = ""
    ) -> BoolValue:
        """Define a boolean flag; its value is in the returned object."""
        v = BoolValue(value)
        self._define(
            v, name, shorthands, "true" if value else "", usage, HasArg.OPTIONAL
        )
        return v

    def counter(
        self, name: str, shorthands: str = "", value: int = 0, usage: str = ""
    ) -> IntValue:
        """Define a counter flag; each bare occurrence increments it."""
        v = IntValue(value)
        self._define(v, name, shorthands, "", usage, HasArg.OPTIONAL)
        return v

    def int_flag(
        self, name: str, shorthands: str = "", value: int = 0, usage: str = ""
    ) -> IntValue:
        """Define an integer flag with a required argument."""
        v = IntValue(value)
        default_text = str(value) if value != 0 else ""
        self._define(v, name, shorthands, default_text, usage, HasArg.REQUIRED)
        return v

    def string(
        self, name: str, shorthands: str = "", value: str = "", usage: str = ""
    ) -> StringValue:
        """Define a string flag with a required argument."""
        v = StringValue(value)
        self._define(v, name, shorthands, value, usage, HasArg.REQUIRED)
        return v

    def preset(
        self, start: int, end: int, value: int, usage: str = ""
    ) -> IntValue:
        """Define the preset flags -start ... -end sharing one value."""
        if self._has_preset:
            self._panicf("flagset %s has already a preset", self.name)
        self._add_line(UsageLine(f"-{start} ... -{end}", usage))
        self._has_preset = True
        target = IntValue(value)
        for i in range(start, end + 1):
            self.var(PresetValue(target, i), str(i), HasArg.NO)
        return target

    # ----- parsing -----

    def _lookup_long(self, name: str) -> Flag:
        if len(name) < 2:
            self._panicf("%s is not a long option", name)
        flag = self._formal.get(name)
        if flag is None:
            raise FlagError(f"long option {name} is unsupported")
        if flag.name != name:
            self._panicf("got %s flag; want %s flag", flag.name, name)
        return flag

    def _lookup_short(self, c: str) -> Flag:
        flag = self._formal.get(c)
        if flag is None:
            raise FlagError(f"short option {c} is unsupported")
        if c not in flag.shorthands:
            self._panicf(
                "flag supports shorthands %r; but doesn't contain %s",
                flag.shorthands,
                c,
            )
        return flag

    @staticmethod
    def _set_value(flag: Flag, s: str) -> None:
        try:
            flag.value.set(s)
        except ValueError as err:
            raise FlagError(str(err)) from err

    def _process_extra_arg(self, flag: Flag, i: int) -> None:
        if flag.has_arg == HasArg.NO:
            flag.value.update()
            return
        if i < len(self._args):
            arg = self._args[i]
            if not arg.startswith("-"):
                if flag.has_arg == HasArg.REQUIRED:
                    del self._args[i]
                    self._set_value(flag, arg)
                    return
                try:
                    flag.value.set(arg)
                except ValueError:
                    flag.value.update()
                    return
                del self._args[i]
                return
        if flag.has_arg == HasArg.REQUIRED:
            raise FlagError("no argument present")
        flag.value.update()

    def _parse_arg(self, i: int) -> int:
        arg = self._args[i]
        if len(arg) < 2 or arg[0] != "-":
            return i + 1
        del self._args[i]
        if arg[1] == "-":
            if len(arg) == 2:
                return len(self._args)
            body = arg[2:]
            name, sep, value = body.partition("=")
            flag = self._lookup_long(name)
            if not sep:
                self._process_extra_arg(flag, i)
                return i
            if flag.has_arg == HasArg.NO:
                raise FlagError(f"option {body} doesn't support argument")
            self._set_value(flag, value)
            return i
        for c in arg[1:]:
            flag = self._lookup_short(c)
            self._process_extra_arg(flag, i)
        return i

    def parse(self, arguments: list[str]) -> None:
        """Parse the arguments; flags are removed, the rest kept in args().

        On error the message and the usage are written; then FlagError is
        raised, the program exits with status 2 or RuntimeError is raised,
        depending on the error handling of the set.
        """
        self._parsed = True
        self._args = list(arguments)
        i = 0
        while i < len(self._args):
            try:
                i = self._parse_arg(i)
            except FlagError as err:
                self._out().write(f"{self.name}: {err}\n")
                self.usage()
                if self.error_handling == ErrorHandling.EXIT_ON_ERROR:
                    raise SystemExit(2) from err
                if self.error_handling == ErrorHandling.PANIC_ON_ERROR:
                    raise RuntimeError(str(err)) from err
                raise