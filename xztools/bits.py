"""Little-endian integer packing and variable-length unsigned integers."""

from __future__ import annotations

from typing import BinaryIO

_MAX_UVARINT_LEN = 10
_UINT64_LIMIT = 1 << 64


class UvarintOverflowError(ValueError):
    """Raised when a uvarint does not fit into 64 unsigned bits."""

    def __init__(self) -> None:
        super().__init__("xz: uvarint overflows 64-bit unsigned integer")


def put_uint32_le(x: int) -> bytes:
    """Return the four-byte little-endian encoding of x (taken mod 2**32)."""
    return (x & 0xFFFFFFFF).to_bytes(4, "little")


def put_uint64_le(x: int) -> bytes:
    """Return the eight-byte little-endian encoding of x (taken mod 2**64)."""
    return (x & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little")


def uint32_le(data: bytes) -> int:
    """Decode the first four bytes of data as a little-endian integer."""
    if len(data) < 4:
        raise ValueError("need at least four bytes")
    return int.from_bytes(data[:4], "little")


def put_uvarint(x: int) -> bytes:
    """Encode an unsigned 64-bit integer as a uvarint."""
    if not 0 <= x < _UINT64_LIMIT:
        raise ValueError(f"value {x} is not an unsigned 64-bit integer")
    out = bytearray()
    while x >= 0x80:
        out.append((x & 0x7F) | 0x80)
        x >>= 7
    out.append(x)
    return bytes(out)


def read_uvarint(stream: BinaryIO) -> tuple[int, int]:
    """Read a uvarint from stream; return the value and the bytes consumed.

    Raises EOFError if the stream ends before the uvarint is complete and
    UvarintOverflowError if the value exceeds 64 bits.
    """
    x = 0
    shift = 0
    count = 0
    while True:
        chunk = stream.read(1)
        if not chunk:
            raise EOFError("unexpected end of data while reading uvarint")
        b = chunk[0]
        count += 1
        if count > _MAX_UVARINT_LEN:
            raise UvarintOverflowError()
        if b < 0x80:
            if count == _MAX_UVARINT_LEN and b > 1:
                raise UvarintOverflowError()
            return x | (b << shift), count
        x |= (b & 0x7F) << shift
        shift += 7