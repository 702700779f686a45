"""Reader that formats text in groups of five characters."""

from __future__ import annotations

from typing import BinaryIO

_DEFAULT_GROUPS_PER_LINE = 8
_CHUNK = 4096


class GroupReader:
    """Format the bytes of a stream in groups of five characters.

    Groups are separated by spaces and lines hold groups_per_line groups;
    values below one select eight groups per line. Spaces in the input
    become underscores and non-printable characters become hyphens.
    """

    def __init__(self, stream: BinaryIO, groups_per_line: int = 0) -> None:
        self.stream = stream
        self.groups_per_line = groups_per_line
        self._off = 0
        self._eof = False

    def _line_len(self) -> int:
        groups = self.groups_per_line
        if groups < 1:
            groups = _DEFAULT_GROUPS_PER_LINE
        return groups * 6

    def read(self, size: int = -1) -> bytes:
        """Return up to size formatted bytes; b"" once the input is done.

        A negative size reads everything that is left.
        """
        if size is None or size < 0:
            parts = []
            while chunk := self.read(_CHUNK):
                parts.append(chunk)
            return b"".join(parts)
        if self._eof:
            return b""
        line_len = self._line_len()
        out = bytearray()
        while len(out) < size:
            last_slot = len(out) + 1 == size and size > 1
            if self._off % line_len == line_len - 1:
                if last_slot:
                    break
                c = 0x0A
            elif self._off % 6 == 5:
                if last_slot:
                    break
                c = 0x20
            else:
                chunk = self.stream.read(1)
                if not chunk:
                    self._eof = True
                    if out and out[-1] == 0x20:
                        out[-1] = 0x0A
                        return bytes(out)
                    if out and out[-1] == 0x0A:
                        return bytes(out)
                    out.append(0x0A)
                    return bytes(out)
                c = chunk[0]
                if c == 0x20:
                    c = ord("_")
                elif not chr(c).isprintable():
                    c = ord("-")
            out.append(c)
            self._off += 1
        return bytes(out)