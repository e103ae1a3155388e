"""Random primitive library.

Every function takes the RandomSource as its first argument; the
namespace binds them to a concrete source before templates see them.
"""

import hashlib
import logging

from bech32 import bech32_encode, convertbits

from blaster.config import MAX_STRING_LENGTH

from .source import RandomSource

logger = logging.getLogger(__name__)

LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
HEX_CHARS = "abcdefABCDEF0123456789"

HASH_INPUT_SIZE = 128  # bytes fed into the hash
HASH_DIGEST_SIZE = 32  # BLAKE2b-256

DEFAULT_KEY_HRP = "ed25519_pk"


def rand_int(source: RandomSource, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi).

    Raises:
        ValueError: If hi <= lo
    """
    if hi <= lo:
        raise ValueError(f"rand_int: upper bound {hi} must be greater than {lo}")
    return source.randrange(hi - lo) + lo


def rand_float(source: RandomSource, lo: float, hi: float) -> float:
    """Uniform float in [lo, hi).

    Raises:
        ValueError: If hi < lo
    """
    if hi < lo:
        raise ValueError(f"rand_float: upper bound {hi} must not be below {lo}")
    return source.random() * (hi - lo) + lo


def rand_string_with_alphabet(source: RandomSource, alphabet: str, length: int) -> str:
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    if length > MAX_STRING_LENGTH:
        raise ValueError(f"length {length} exceeds the limit of {MAX_STRING_LENGTH}")
    return "".join(source.choice(alphabet) for _ in range(length))


def rand_string(source: RandomSource, length: int) -> str:
    """String of `length` characters drawn from [a-zA-Z]."""
    return rand_string_with_alphabet(source, LETTERS, length)


def rand_hex_string(source: RandomSource, length: int) -> str:
    """String of `length` characters drawn from [a-fA-F0-9]."""
    return rand_string_with_alphabet(source, HEX_CHARS, length)


def rand_blake2b256(source: RandomSource) -> bytes:
    """BLAKE2b-256 digest of 128 random bytes.

    If the source fails to produce bytes, the failure is logged and a
    zero-filled buffer is hashed instead so rendering keeps going.
    """
    try:
        buf = source.read_bytes(HASH_INPUT_SIZE)
    except OSError as e:
        logger.warning(f"Error while generating random bytes, using zero buffer: {e}")
        buf = bytes(HASH_INPUT_SIZE)
    return hashlib.blake2b(buf, digest_size=HASH_DIGEST_SIZE).digest()


def rand_blake2b256_hex(source: RandomSource) -> str:
    """64 lowercase hex characters."""
    return rand_blake2b256(source).hex()


def rand_blake2b256_bech32(source: RandomSource, hrp: str = DEFAULT_KEY_HRP) -> str:
    """Digest encoded as bech32 with the given human-readable prefix."""
    data = convertbits(rand_blake2b256(source), 8, 5)
    return bech32_encode(hrp, data)
