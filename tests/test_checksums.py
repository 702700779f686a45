import zlib

from xztools.checksums import CRC32, CRC64, crc64

CHECK_INPUT = b"123456789"


def test_crc32_check_value():
    h = CRC32()
    h.update(CHECK_INPUT)
    assert h.value() == 0xCBF43926


def test_crc32_digest_is_little_endian():
    h = CRC32(CHECK_INPUT)
    assert h.digest() == h.value().to_bytes(4, "little")
    assert len(h.digest()) == 4


def test_crc32_matches_zlib():
    data = bytes(range(256)) * 3
    assert CRC32(data).value() == zlib.crc32(data)


def test_crc64_check_value():
    assert crc64(CHECK_INPUT) == 0x995DC9BBDF1939FA


def test_crc64_empty_is_zero():
    assert crc64(b"") == 0
    assert CRC64().value() == 0
    assert CRC32().value() == 0


def test_crc64_incremental_matches_one_shot():
    data = b"The quick brown fox jumps over the lazy dog.\n" * 5
    h = CRC64()
    for start in range(0, len(data), 7):
        h.update(data[start:start + 7])
    assert h.value() == crc64(data)
    assert CRC64(data).value() == crc64(data)


def test_crc64_digest_is_little_endian():
    h = CRC64(CHECK_INPUT)
    assert h.digest() == h.value().to_bytes(8, "little")
    assert len(h.digest()) == 8


def test_copy_is_independent():
    h = CRC64(b"abc")
    clone = h.copy()
    clone.update(b"def")
    assert h.value() == crc64(b"abc")
    assert clone.value() == crc64(b"abcdef")
    c = CRC32(b"abc")
    c2 = c.copy()
    c2.update(b"def")
    assert c.value() == zlib.crc32(b"abc")
    assert c2.value() == zlib.crc32(b"abcdef")