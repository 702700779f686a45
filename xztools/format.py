"""Structures of the xz file format: stream header, footer and index."""

from __future__ import annotations

import hashlib
import io
import zlib
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Callable, Iterable

from .bits import put_uint32_le, put_uvarint, read_uvarint, uint32_le
from .checksums import CRC32, CRC64

HEADER_LEN = 12
FOOTER_LEN = 12

_HEADER_MAGIC = b"\xfd7zXZ\x00"
_FOOTER_MAGIC = b"YZ"

MIN_INDEX_SIZE = 4
MAX_INDEX_SIZE = (1 << 32) * 4

_INT64_LIMIT = 1 << 63


class FormatError(ValueError):
    """Raised for malformed or invalid xz format structures."""


class Check(IntEnum):
    """Checksum methods supported by the xz format."""

    NONE = 0x0
    CRC32 = 0x1
    CRC64 = 0x4
    SHA256 = 0xA


_FLAG_STRINGS = {
    Check.NONE: "None",
    Check.CRC32: "CRC-32",
    Check.CRC64: "CRC-64",
    Check.SHA256: "SHA-256",
}


def verify_flags(flags: int) -> Check:
    """Return the Check for flags or raise FormatError if it is invalid."""
    try:
        return Check(flags)
    except ValueError:
        raise FormatError("xz: invalid flags") from None


def flag_string(flags: int) -> str:
    """Return the name of the checksum method encoded in flags."""
    try:
        return _FLAG_STRINGS[Check(flags)]
    except ValueError:
        return "invalid"


class _NoneHash:
    """Hash object for the None check: it has an empty digest.

    It only counts the bytes it has been fed.
    """

    digest_size = 0

    def __init__(self) -> None:
        self.size = 0

    def update(self, data: bytes) -> None:
        self.size += len(memoryview(data))

    def digest(self) -> bytes:
        return b""


def _new_hash_factory(flags: int) -> Callable[[], object]:
    check = verify_flags(flags)
    return {
        Check.NONE: _NoneHash,
        Check.CRC32: CRC32,
        Check.CRC64: CRC64,
        Check.SHA256: hashlib.sha256,
    }[check]


def pad_len(n: int) -> int:
    """Return the number of padding bytes that align n to four bytes."""
    return (-n) % 4


def all_zeros(data: bytes) -> bool:
    """Return whether data consists of zero bytes only."""
    return not any(data)


def _crc32(data: bytes) -> int:
    return zlib.crc32(data)


@dataclass(frozen=True)
class Header:
    """The xz stream header; it carries the check flags."""

    flags: int = Check.NONE

    def __str__(self) -> str:
        return flag_string(self.flags)

    def to_bytes(self) -> bytes:
        """Encode the stream header."""
        flags = verify_flags(self.flags)
        body = bytes([0, flags])
        return _HEADER_MAGIC + body + put_uint32_le(_crc32(body))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        """Decode a stream header, raising FormatError if it is invalid."""
        if len(data) != HEADER_LEN:
            raise FormatError("xz: wrong file header length")
        if bytes(data[:6]) != _HEADER_MAGIC:
            raise FormatError("xz: invalid header magic bytes")
        if uint32_le(data[8:]) != _crc32(bytes(data[6:8])):
            raise FormatError("xz: invalid checksum for file header")
        if data[6] != 0:
            raise FormatError("xz: invalid flags")
        return cls(verify_flags(data[7]))


def valid_header(data: bytes) -> bool:
    """Return whether data is a correct xz stream header."""
    try:
        Header.from_bytes(data)
    except FormatError:
        return False
    return True


@dataclass(frozen=True)
class Footer:
    """The xz stream footer: the index size and the check flags."""

    index_size: int
    flags: int

    def __str__(self) -> str:
        return f"{flag_string(self.flags)} index size {self.index_size}"

    def to_bytes(self) -> bytes:
        """Encode the stream footer after validating its values."""
        flags = verify_flags(self.flags)
        if not MIN_INDEX_SIZE <= self.index_size <= MAX_INDEX_SIZE:
            raise FormatError("xz: index size out of range")
        if self.index_size % 4 != 0:
            raise FormatError("xz: index size not aligned to four bytes")
        body = put_uint32_le(self.index_size // 4 - 1) + bytes([0, flags])
        return put_uint32_le(_crc32(body)) + body + _FOOTER_MAGIC

    @classmethod
    def from_bytes(cls, data: bytes) -> "Footer":
        """Decode a stream footer, raising FormatError if it is invalid."""
        if len(data) != FOOTER_LEN:
            raise FormatError("xz: wrong footer length")
        if bytes(data[10:]) != _FOOTER_MAGIC:
            raise FormatError("xz: footer magic invalid")
        if uint32_le(data) != _crc32(bytes(data[4:10])):
            raise FormatError("xz: footer checksum error")
        index_size = (uint32_le(data[4:]) + 1) * 4
        if data[8] != 0:
            raise FormatError("xz: invalid flags")
        return cls(index_size, verify_flags(data[9]))


@dataclass(frozen=True)
class Record:
    """An index record describing one block."""

    unpadded_size: int
    uncompressed_size: int

    def to_bytes(self) -> bytes:
        """Encode the record as two uvarints."""
        return put_uvarint(self.unpadded_size) + put_uvarint(
            self.uncompressed_size
        )


def read_record(stream: BinaryIO) -> tuple[Record, int]:
    """Read an index record; return it and the number of bytes consumed."""
    unpadded, k1 = read_uvarint(stream)
    if unpadded >= _INT64_LIMIT:
        raise FormatError("xz: unpadded size negative")
    uncompressed, k2 = read_uvarint(stream)
    if uncompressed >= _INT64_LIMIT:
        raise FormatError("xz: uncompressed size negative")
    return Record(unpadded, uncompressed), k1 + k2


def write_index(stream: BinaryIO, records: Iterable[Record]) -> int:
    """Write the index including its indicator; return the bytes written."""
    records = list(records)
    data = bytearray(b"\x00")
    data += put_uvarint(len(records))
    for rec in records:
        data += rec.to_bytes()
    data += bytes(pad_len(len(data)))
    data += put_uint32_le(_crc32(bytes(data)))
    stream.write(bytes(data))
    return len(data)


class _ChecksummingReader(io.RawIOBase):
    """Reader that feeds everything it reads into a CRC-32."""

    def __init__(self, stream: BinaryIO, crc: CRC32) -> None:
        super().__init__()
        self._stream = stream
        self._crc = crc

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        if data:
            self._crc.update(data)
        return data


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    parts = bytearray()
    while len(parts) < size:
        chunk = stream.read(size - len(parts))
        if not chunk:
            raise EOFError("unexpected end of data")
        parts += chunk
    return bytes(parts)


def read_index_body(
    stream: BinaryIO, expected_record_len: int
) -> tuple[list[Record], int]:
    """Read the index after its indicator byte.

    Returns the records and the number of bytes consumed.
    """
    crc = CRC32(b"\x00")
    reader = _ChecksummingReader(stream, crc)

    count, n = read_uvarint(reader)
    if count >= _INT64_LIMIT:
        raise FormatError("xz: record number overflow")
    if count != expected_record_len:
        raise FormatError(
            f"xz: index length is {count}; want {expected_record_len}"
        )

    records = []
    for _ in range(count):
        rec, k = read_record(reader)
        n += k
        records.append(rec)

    padding = _read_exact(reader, pad_len(n + 1))
    n += len(padding)
    if not all_zeros(padding):
        raise FormatError("xz: non-zero byte in index padding")

    expected = crc.value()
    checksum = _read_exact(reader, 4)
    n += 4
    if uint32_le(checksum) != expected:
        raise FormatError("xz: wrong checksum for index")
    return records, n