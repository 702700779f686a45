"""Small logger whose message categories can be switched off by flags.

A Logger writes one line per message to a text stream. Flags choose what
goes in front of each message (date, time, source file) and which
categories (print, warn, debug, fatal, panic) are suppressed. The fatal
functions exit with status 1 and the panic functions raise LoggerPanic
even when their output is suppressed.
"""

from __future__ import annotations

import inspect
import os
import re
import sys
import threading
from datetime import datetime
from enum import IntFlag
from typing import Any, Optional, TextIO


class LogFlag(IntFlag):
    """Flags that control the header and the suppressed categories."""

    DATE = 1 << 0
    TIME = 1 << 1
    MICROSECONDS = 1 << 2
    LONGFILE = 1 << 3
    SHORTFILE = 1 << 4
    NOPANIC = 1 << 5
    NOFATAL = 1 << 6
    NOWARN = 1 << 7
    NOPRINT = 1 << 8
    NODEBUG = 1 << 9
    STDFLAGS = DATE | TIME | NODEBUG


class LoggerPanic(RuntimeError):
    """Raised by the panic methods after the message has been logged."""


def _is_str(value: Any) -> bool:
    return isinstance(value, (str, bytes))


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, adding a space between two that are not strings."""
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i > 0 and not _is_str(arg) and not _is_str(args[i - 1]):
            parts.append(" ")
        parts.append(str(arg))
    return "".join(parts)


def _sprintln(args: tuple[Any, ...]) -> str:
    """Join operands with spaces and append a newline."""
    return " ".join(str(arg) for arg in args) + "\n"


_VERB = re.compile(r"%(%|v)")


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    """Format printf style; %v is accepted as a synonym for %s."""
    fmt = _VERB.sub(lambda m: "%%" if m.group(1) == "%" else "%s", fmt)
    if not args:
        return fmt.replace("%%", "%")
    return fmt % args


def _caller() -> tuple[str, int]:
    """Return file name and line of the first frame outside this module."""
    here = os.path.abspath(__file__)
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if os.path.abspath(filename) != here:
                return filename, frame.f_lineno
            frame = frame.f_back
        return "???", 0
    finally:
        del frame


class Logger:
    """Logger writing serialized lines to a text stream.

    If out is None the logger writes to the current sys.stderr.
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        prefix: str = "",
        flags: int = LogFlag.STDFLAGS,
    ) -> None:
        self.out = out
        self.prefix = prefix
        self.flags = LogFlag(flags)
        self._lock = threading.Lock()

    def _header(self, now: datetime, file: str, line: int) -> str:
        parts = [self.prefix]
        flags = self.flags
        if flags & LogFlag.DATE:
            parts.append(f"{now.year:04d}-{now.month:02d}-{now.day:02d} ")
        if flags & (LogFlag.TIME | LogFlag.MICROSECONDS):
            parts.append(f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}")
            if flags & LogFlag.MICROSECONDS:
                parts.append(f".{now.microsecond:06d}")
            parts.append(" ")
        if flags & (LogFlag.SHORTFILE | LogFlag.LONGFILE):
            if flags & LogFlag.SHORTFILE:
                file = file.rsplit("/", 1)[-1]
                file = os.path.basename(file)
            parts.append(f"{file}:{line}: ")
        return "".join(parts)

    def output(self, noflag: int, message: str) -> None:
        """Write message with its header unless noflag is set in the flags."""
        now = datetime.now()
        with self._lock:
            if self.flags & noflag:
                return
            file, line = "???", 0
            if self.flags & (LogFlag.SHORTFILE | LogFlag.LONGFILE):
                file, line = _caller()
            text = self._header(now, file, line) + message
            if not message.endswith("\n"):
                text += "\n"
            out = self.out if self.out is not None else sys.stderr
            out.write(text)
            flush = getattr(out, "flush", None)
            if flush is not None:
                flush()

    def print(self, *args: Any) -> None:
        """Log like print; suppressed by NOPRINT."""
        self.output(LogFlag.NOPRINT, _sprint(args))

    def printf(self, fmt: str, *args: Any) -> None:
        """Log a formatted message; suppressed by NOPRINT."""
        self.output(LogFlag.NOPRINT, _sprintf(fmt, args))

    def println(self, *args: Any) -> None:
        """Log space-separated operands; suppressed by NOPRINT."""
        self.output(LogFlag.NOPRINT, _sprintln(args))

    def warn(self, *args: Any) -> None:
        """Log a warning; suppressed by NOWARN."""
        self.output(LogFlag.NOWARN, _sprint(args))

    def warnf(self, fmt: str, *args: Any) -> None:
        """Log a formatted warning; suppressed by NOWARN."""
        self.output(LogFlag.NOWARN, _sprintf(fmt, args))

    def warnln(self, *args: Any) -> None:
        """Log a warning of space-separated operands; suppressed by NOWARN."""
        self.output(LogFlag.NOWARN, _sprintln(args))

    def debug(self, *args: Any) -> None:
        """Log a debug message; suppressed by NODEBUG."""
        self.output(LogFlag.NODEBUG, _sprint(args))

    def debugf(self, fmt: str, *args: Any) -> None:
        """Log a formatted debug message; suppressed by NODEBUG."""
        self.output(LogFlag.NODEBUG, _sprintf(fmt, args))

    def debugln(self, *args: Any) -> None:
        """Log space-separated operands; suppressed by NODEBUG."""
        self.output(LogFlag.NODEBUG, _sprintln(args))

    def fatal(self, *args: Any) -> None:
        """Log and exit with status 1; output suppressed by NOFATAL."""
        self.output(LogFlag.NOFATAL, _sprint(args))
        raise SystemExit(1)

    def fatalf(self, fmt: str, *args: Any) -> None:
        """Log a formatted message and exit with status 1."""
        self.output(LogFlag.NOFATAL, _sprintf(fmt, args))
        raise SystemExit(1)

    def fatalln(self, *args: Any) -> None:
        """Log space-separated operands and exit with status 1."""
        self.output(LogFlag.NOFATAL, _sprintln(args))
        raise SystemExit(1)

    def panic(self, *args: Any) -> None:
        """Log and raise LoggerPanic; output suppressed by NOPANIC."""
        message = _sprint(args)
        self.output(LogFlag.NOPANIC, message)
        raise LoggerPanic(message)

    def panicf(self, fmt: str, *args: Any) -> None:
        """Log a formatted message and raise LoggerPanic."""
        message = _sprintf(fmt, args)
        self.output(LogFlag.NOPANIC, message)
        raise LoggerPanic(message)

    def panicln(self, *args: Any) -> None:
        """Log space-separated operands and raise LoggerPanic."""
        message = _sprintln(args)
        self.output(LogFlag.NOPANIC, message)
        raise LoggerPanic(message)


_std = Logger(None, "", LogFlag.STDFLAGS)


def standard_logger() -> Logger:
    """Return the logger used by the module-level functions."""
    return _std


def warn(*args: Any) -> None:
    """Log a warning with the standard logger."""
    _std.output(LogFlag.NOWARN, _sprint(args))


def warnf(fmt: str, *args: Any) -> None:
    """Log a formatted warning with the standard logger."""
    _std.output(LogFlag.NOWARN, _sprintf(fmt, args))


def printf(fmt: str, *args: Any) -> None:
    """Log a formatted message with the standard logger."""
    _std.output(LogFlag.NOPRINT, _sprintf(fmt, args))


def debugf(fmt: str, *args: Any) -> None:
    """Log a formatted debug message with the standard logger."""
    _std.output(LogFlag.NODEBUG, _sprintf(fmt, args))


def fatal(*args: Any) -> None:
    """Log with the standard logger and exit with status 1."""
    _std.output(LogFlag.NOFATAL, _sprint(args))
    raise SystemExit(1)


def fatalf(fmt: str, *args: Any) -> None:
    """Log a formatted message with the standard logger and exit with 1."""
    _std.output(LogFlag.NOFATAL, _sprintf(fmt, args))
    raise SystemExit(1)


def panicf(fmt: str, *args: Any) -> None:
    """Log a formatted message with the standard logger and raise."""
    message = _sprintf(fmt, args)
    _std.output(LogFlag.NOPANIC, message)
    raise LoggerPanic(message)


def set_flags(flags: int) -> None:
    """Set the flags of the standard logger."""
    with _std._lock:
        _std.flags = LogFlag(flags)


def get_flags() -> LogFlag:
    """Return the flags of the standard logger."""
    with _std._lock:
        return _std.flags


def set_prefix(prefix: str) -> None:
    """Set the prefix of the standard logger."""
    with _std._lock:
        _std.prefix = prefix


def get_prefix() -> str:
    """Return the prefix of the standard logger."""
    with _std._lock:
        return _std.prefix


def set_output(out: Optional[TextIO]) -> None:
    """Set the output stream of the standard logger; None means stderr."""
    with _std._lock:
        _std.out = out