"""CRC-32 (IEEE) and CRC-64 (ECMA) checksums with little-endian digests."""

from __future__ import annotations

import zlib

from .bits import put_uint32_le, put_uint64_le

_CRC64_POLY = 0xC96C5795D7870F42
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _make_crc64_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ _CRC64_POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC64_TABLE = _make_crc64_table()


def _crc64_update(crc: int, data: bytes) -> int:
    crc = ~crc & _MASK64
    table = _CRC64_TABLE
    for b in data:
        crc = table[(crc ^ b) & 0xFF] ^ (crc >> 8)
    return ~crc & _MASK64


class CRC32:
    """Running CRC-32 using the IEEE polynomial."""

    name = "crc32"
    digest_size = 4

    def __init__(self, data: bytes = b"") -> None:
        self._crc = zlib.crc32(data)

    def update(self, data: bytes) -> None:
        """Feed more data into the checksum."""
        self._crc = zlib.crc32(data, self._crc)

    def digest(self) -> bytes:
        """Return the checksum as four little-endian bytes."""
        return put_uint32_le(self._crc)

    def value(self) -> int:
        """Return the checksum as an integer."""
        return self._crc

    def copy(self) -> "CRC32":
        clone = CRC32()
        clone._crc = self._crc
        return clone


class CRC64:
    """Running CRC-64 using the ECMA polynomial."""

    name = "crc64"
    digest_size = 8

    def __init__(self, data: bytes = b"") -> None:
        self._crc = _crc64_update(0, data) if data else 0

    def update(self, data: bytes) -> None:
        """Feed more data into the checksum."""
        self._crc = _crc64_update(self._crc, data)

    def digest(self) -> bytes:
        """Return the checksum as eight little-endian bytes."""
        return put_uint64_le(self._crc)

    def value(self) -> int:
        """Return the checksum as an integer."""
        return self._crc

    def copy(self) -> "CRC64":
        clone = CRC64()
        clone._crc = self._crc
        return clone


def crc64(data: bytes) -> int:
    """Return the CRC-64 (ECMA) of data."""
    return _crc64_update(0, data)