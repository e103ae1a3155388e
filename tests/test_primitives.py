"""Tests for the random primitive library."""

import hashlib
import logging
import re

import pytest

from blaster.generators import primitives
from blaster.generators.source import RandomSource
from tests.helpers import BrokenEntropySource

HEX64 = re.compile(r"^[0-9a-f]{64}$")
BECH32_CHARS = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"


def test_rand_int_stays_in_half_open_range(source):
    values = [primitives.rand_int(source, -3, 4) for _ in range(2000)]
    assert all(-3 <= v < 4 for v in values)
    assert set(values) == set(range(-3, 4))


def test_rand_int_rejects_empty_range(source):
    with pytest.raises(ValueError):
        primitives.rand_int(source, 5, 5)
    with pytest.raises(ValueError):
        primitives.rand_int(source, 6, 5)


def test_rand_float_stays_in_range(source):
    values = [primitives.rand_float(source, 1.5, 2.5) for _ in range(1000)]
    assert all(1.5 <= v < 2.5 for v in values)


def test_rand_float_rejects_inverted_range(source):
    with pytest.raises(ValueError):
        primitives.rand_float(source, 2.0, 1.0)


@pytest.mark.parametrize("length", [0, 1, 8, 100])
def test_rand_string_length_and_alphabet(source, length):
    value = primitives.rand_string(source, length)
    assert len(value) == length
    assert re.fullmatch(r"[a-zA-Z]*", value)


def test_rand_string_negative_length(source):
    with pytest.raises(ValueError):
        primitives.rand_string(source, -1)


def test_rand_hex_string_alphabet(source):
    value = primitives.rand_hex_string(source, 500)
    assert len(value) == 500
    assert set(value) <= set("abcdefABCDEF0123456789")


def test_blake2b256_hex_is_64_lowercase_hex(source):
    for _ in range(20):
        assert HEX64.match(primitives.rand_blake2b256_hex(source))


def test_blake2b256_same_seed_same_digest():
    a = primitives.rand_blake2b256_hex(RandomSource(seed=99))
    b = primitives.rand_blake2b256_hex(RandomSource(seed=99))
    assert a == b


def test_blake2b256_falls_back_to_zero_buffer(caplog):
    expected = hashlib.blake2b(bytes(128), digest_size=32).hexdigest()
    with caplog.at_level(logging.WARNING):
        value = primitives.rand_blake2b256_hex(BrokenEntropySource(seed=1))
    assert value == expected
    assert "entropy source unavailable" in caplog.text


def test_blake2b256_bech32_shape(source):
    value = primitives.rand_blake2b256_bech32(source)
    hrp, _, data = value.rpartition("1")
    assert hrp == "ed25519_pk"
    # 52 data characters for 32 bytes plus a 6 character checksum
    assert len(data) == 58
    assert set(data) <= set(BECH32_CHARS)


def test_rand_string_length_is_capped(source):
    with pytest.raises(ValueError):
        primitives.rand_string(source, primitives.MAX_STRING_LENGTH + 1)
    assert len(primitives.rand_hex_string(source, primitives.MAX_STRING_LENGTH)) == primitives.MAX_STRING_LENGTH
