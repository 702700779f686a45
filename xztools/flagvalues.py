"""Flag values and usage lines for GNU-style command line parsing."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, TextIO

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_DIGITS = {
    2: re.compile(r"[01]+"),
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}
_UNDERSCORED = re.compile(r"[0-9a-zA-Z]+(_[0-9a-zA-Z]+)*")


def parse_bool(s: str) -> bool:
    """Parse a boolean written as 1, t, true, 0, f, false and similar."""
    if s in _TRUE_WORDS:
        return True
    if s in _FALSE_WORDS:
        return False
    raise ValueError(f'parsing "{s}": invalid syntax')


def _syntax_error(s: str) -> ValueError:
    return ValueError(f'parsing "{s}": invalid syntax')


def parse_int(s: str) -> int:
    """Parse a signed 64-bit integer; the base follows from its prefix.

    0x selects hexadecimal, 0b binary, 0o or a leading 0 octal, anything
    else decimal. Underscores may separate digits.
    """
    body = s
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    lower = body.lower()
    if lower.startswith("0x"):
        base, digits, prefixed = 16, body[2:], True
    elif lower.startswith("0b"):
        base, digits, prefixed = 2, body[2:], True
    elif lower.startswith("0o"):
        base, digits, prefixed = 8, body[2:], True
    elif body.startswith("0") and len(body) > 1:
        base, digits, prefixed = 8, body[1:], True
    else:
        base, digits, prefixed = 10, body, False

    if "_" in digits:
        groups = digits[1:] if prefixed and digits.startswith("_") else digits
        if not _UNDERSCORED.fullmatch(groups):
            raise _syntax_error(s)
        digits = groups.replace("_", "")
    if not digits or not _DIGITS[base].fullmatch(digits):
        raise _syntax_error(s)

    value = int(digits, base)
    if negative:
        value = -value
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{s}": value out of range')
    return value


class Value(ABC):
    """The value behind a flag.

    set() assigns a value from an argument string; update() is called when
    the flag appears without an argument.
    """

    value: Any

    @abstractmethod
    def set(self, s: str) -> None:
        """Set the value from an argument string."""

    @abstractmethod
    def update(self) -> None:
        """Change the value for a flag given without an argument."""

    def __str__(self) -> str:
        return str(self.value)


class BoolValue(Value):
    """Boolean flag value; a bare flag sets it to True."""

    def __init__(self, value: bool = False) -> None:
        self.value = value

    def set(self, s: str) -> None:
        """Parse s as boolean; on failure the value becomes False."""
        try:
            self.value = parse_bool(s)
        except ValueError:
            self.value = False
            raise

    def update(self) -> None:
        self.value = True

    def __str__(self) -> str:
        return "true" if self.value else "false"


class IntValue(Value):
    """Integer flag value; a bare flag increments it."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def set(self, s: str) -> None:
        """Parse s as integer; the value is unchanged on failure."""
        self.value = parse_int(s)

    def update(self) -> None:
        self.value += 1


class StringValue(Value):
    """String flag value; a bare flag restores the default."""

    def __init__(self, value: str = "") -> None:
        self.default = value
        self.value = value

    def set(self, s: str) -> None:
        self.value = s

    def update(self) -> None:
        self.value = self.default


class PresetValue(Value):
    """One of a range of preset flags such as -0 ... -9.

    All presets of a range share the target value; a bare flag stores its
    own preset number there.
    """

    def __init__(self, target: IntValue, preset: int) -> None:
        self.target = target
        self.preset = preset

    @property
    def value(self) -> int:
        return self.target.value

    def set(self, s: str) -> None:
        """Parse s as integer into the target; failure stores zero."""
        try:
            self.target.value = parse_int(s)
        except ValueError:
            self.target.value = 0
            raise

    def update(self) -> None:
        self.target.value = self.preset


@dataclass(frozen=True)
class UsageLine:
    """One line of usage information: the flags and their description."""

    flags: str
    usage: str


def line_flags(name: str, shorthands: str, default_value: str) -> str:
    """Return the flags column of a usage line, e.g. "-a, --all=x"."""
    parts = [f"-{c}" for c in shorthands]
    if name:
        long_flag = f"--{name}"
        if default_value:
            long_flag += f"={default_value}"
        parts.append(long_flag)
    return ", ".join(parts)


def write_lines(out: TextIO, lines: Iterable[UsageLine]) -> int:
    """Write usage lines sorted by flags in aligned columns.

    Returns the number of characters written.
    """
    ordered = sorted(lines, key=lambda line: line.flags)
    width = max((len(line.flags) for line in ordered), default=0)
    written = 0
    for line in ordered:
        text = f"  {line.flags:<{width}}  {line.usage}\n"
        out.write(text)
        written += len(text)
    return written