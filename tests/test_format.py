import io

import pytest

from xztools.format import (
    Check,
    Footer,
    FormatError,
    Header,
    Record,
    all_zeros,
    flag_string,
    pad_len,
    read_index_body,
    read_record,
    valid_header,
    verify_flags,
    write_index,
)


def test_header_round_trip():
    h = Header(Check.CRC32)
    data = h.to_bytes()
    assert len(data) == 12
    assert Header.from_bytes(data) == h


def test_header_known_bytes():
    data = bytes([253, 55, 122, 88, 90, 0, 0, 0, 255, 18, 217, 65])
    assert valid_header(data)
    assert Header.from_bytes(data).flags == Check.NONE
    assert Header(Check.NONE).to_bytes() == data


def test_header_crc64_bytes():
    assert Header(Check.CRC64).to_bytes() == bytes.fromhex(
        "fd377a585a000004e6d6b446"
    )


def test_header_errors():
    good = Header(Check.CRC64).to_bytes()
    with pytest.raises(FormatError, match="length"):
        Header.from_bytes(good[:11])
    with pytest.raises(FormatError, match="magic"):
        Header.from_bytes(b"\x00" + good[1:])
    with pytest.raises(FormatError, match="checksum"):
        Header.from_bytes(good[:8] + b"\x00\x00\x00\x00")
    with pytest.raises(FormatError):
        Header(5).to_bytes()
    assert not valid_header(good[:11])


def test_truncated_panic_stream_header_is_valid():
    data = bytes([253, 55, 122, 88, 90, 0, 0, 0, 255, 18, 217, 65, 0, 189,
                  191, 239, 189, 191, 239, 48])
    assert valid_header(data[:12])
    assert not valid_header(data)


def test_footer_round_trip():
    f = Footer(index_size=64, flags=Check.CRC32)
    data = f.to_bytes()
    assert len(data) == 12
    assert data[10:] == b"YZ"
    assert Footer.from_bytes(data) == f


def test_footer_errors():
    with pytest.raises(FormatError, match="out of range"):
        Footer(0, Check.CRC32).to_bytes()
    with pytest.raises(FormatError, match="out of range"):
        Footer((1 << 34) + 4, Check.CRC32).to_bytes()
    with pytest.raises(FormatError, match="aligned"):
        Footer(6, Check.CRC32).to_bytes()
    with pytest.raises(FormatError):
        Footer(8, 3).to_bytes()
    good = Footer(8, Check.CRC64).to_bytes()
    with pytest.raises(FormatError, match="length"):
        Footer.from_bytes(good[:-1])
    with pytest.raises(FormatError, match="magic"):
        Footer.from_bytes(good[:10] + b"ZY")
    with pytest.raises(FormatError, match="checksum"):
        Footer.from_bytes(b"\x00\x00\x00\x00" + good[4:])


def test_footer_str():
    assert str(Footer(64, Check.CRC32)) == "CRC-32 index size 64"


def test_record_round_trip():
    r = Record(1234567, 10000)
    data = r.to_bytes()
    g, m = read_record(io.BytesIO(data))
    assert m == len(data)
    assert g == r


def test_index_round_trip():
    records = [Record(1234, 1), Record(2345, 2)]
    buf = io.BytesIO()
    n = write_index(buf, records)
    assert n == len(buf.getvalue())
    assert n % 4 == 0
    buf.seek(0)
    assert buf.read(1) == b"\x00"
    g, m = read_index_body(buf, len(records))
    assert m == n - 1
    assert g == records


def _single_record_index():
    buf = io.BytesIO()
    write_index(buf, [Record(1234, 1)])
    return bytearray(buf.getvalue())


def test_index_wrong_count():
    data = _single_record_index()
    with pytest.raises(FormatError, match="index length"):
        read_index_body(io.BytesIO(bytes(data[1:])), 3)


def test_index_nonzero_padding():
    data = _single_record_index()
    assert len(data) == 12
    data[5] = 1
    with pytest.raises(FormatError, match="padding"):
        read_index_body(io.BytesIO(bytes(data[1:])), 1)


def test_index_bad_checksum():
    data = _single_record_index()
    data[-1] ^= 0xFF
    with pytest.raises(FormatError, match="checksum"):
        read_index_body(io.BytesIO(bytes(data[1:])), 1)


def test_index_truncated():
    data = _single_record_index()
    with pytest.raises(EOFError):
        read_index_body(io.BytesIO(bytes(data[1:-2])), 1)


def test_flags_helpers():
    assert flag_string(Check.CRC64) == "CRC-64"
    assert flag_string(Check.SHA256) == "SHA-256"
    assert flag_string(Check.NONE) == "None"
    assert flag_string(7) == "invalid"
    assert verify_flags(0xA) is Check.SHA256
    with pytest.raises(FormatError):
        verify_flags(2)
    assert str(Header(Check.CRC32)) == "CRC-32"


def test_pad_len_and_all_zeros():
    assert [pad_len(n) for n in range(8)] == [0, 3, 2, 1, 0, 3, 2, 1]
    assert all_zeros(b"\x00\x00")
    assert all_zeros(b"")
    assert not all_zeros(b"\x00\x01")