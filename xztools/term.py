"""Detection of terminals."""

from __future__ import annotations

import os
from typing import Protocol, Union


class _HasFileno(Protocol):
    def fileno(self) -> int: ...


def is_terminal(fd: Union[int, _HasFileno]) -> bool:
    """Return whether the file descriptor (or file object) is a terminal."""
    try:
        if not isinstance(fd, int):
            fd = fd.fileno()
        return os.isatty(fd)
    except (OSError, ValueError):
        return False