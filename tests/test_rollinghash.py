import random

import pytest

from xztools.rollinghash import (
    DEFAULT_A,
    CyclicPoly,
    RabinKarp,
    hashes,
)


def _random_bytes(n, seed=42):
    rnd = random.Random(seed)
    return bytes(rnd.getrandbits(8) for _ in range(n))


class _SumRoller:
    """Minimal roller: the hash is the sum of the bytes in the window."""

    def __init__(self, n):
        self._n = n
        self._window = []

    def __len__(self):
        return self._n

    def roll_byte(self, x):
        self._window.append(x)
        if len(self._window) > self._n:
            self._window.pop(0)
        return sum(self._window)


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
def test_simple_rolling_matches_window_hash(factory):
    p = b"abcde"
    r = factory(4)
    h2 = hashes(r, p)
    assert len(h2) == 2
    for i, h in enumerate(h2):
        w = hashes(r, p[i : i + 4])[0]
        assert h == w


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
def test_rolling_matches_fresh_roller(factory):
    data = _random_bytes(200)
    rolled = hashes(factory(4), data)
    assert len(rolled) == len(data) - 3
    for i, h in enumerate(rolled):
        assert h == hashes(factory(4), data[i : i + 4])[0]


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
def test_hashes_short_data_returns_empty(factory):
    assert hashes(factory(4), b"abc") == []


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
def test_len_is_window_size(factory):
    assert len(factory(7)) == 7


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
@pytest.mark.parametrize("n", [0, -3])
def test_non_positive_window_rejected(factory, n):
    with pytest.raises(ValueError):
        factory(n)


@pytest.mark.parametrize("factory", [CyclicPoly, RabinKarp])
def test_values_fit_in_64_bits(factory):
    for h in hashes(factory(5), _random_bytes(300, seed=7)):
        assert 0 <= h < 1 << 64


def test_cyclic_poly_single_byte_window():
    r = CyclicPoly(1)
    assert r.roll_byte(0) == 0x2E4FC3F904065142
    assert r.roll_byte(1) == 0xC790984CFBC99527


def test_rabin_karp_single_byte_window():
    r = RabinKarp(1)
    assert r.roll_byte(1) == DEFAULT_A
    assert r.roll_byte(0) == 0


def test_rabin_karp_custom_constant():
    r = RabinKarp(2, 3)
    assert r.a == 3
    assert r.roll_byte(1) == 3
    data = b"xyzxyz"
    hs = hashes(RabinKarp(3, 3), data)
    assert hs[0] == hs[3]


def test_same_windows_have_same_hash():
    data = b"hello world hello"
    hs = hashes(CyclicPoly(5), data)
    assert hs[0] == hs[-1]
    assert hs[0] != hs[1]


def test_hashes_works_with_any_roller():
    assert hashes(_SumRoller(2), b"\x01\x02\x03\x04") == [3, 5, 7]