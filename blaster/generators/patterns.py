"""Kupo pattern generators.

Compose the random primitives into the query shapes a Kupo indexer
accepts: address patterns, credential patterns, asset patterns,
output references and metadata tags. Most shapes alternate between
one or more concrete forms and the wildcard "*".
"""

from typing import Callable, Sequence

from .primitives import rand_blake2b256_bech32, rand_hex_string
from .source import RandomSource

WILDCARD = "*"

CREDENTIAL_HASH_SIZES = (64, 56)
POLICY_ID_SIZE = 56
MAX_ASSET_NAME_SIZE = 64
TRANSACTION_ID_SIZE = 64
METADATA_TAG_LIMIT = 9999


def _wildcard() -> str:
    return WILDCARD


def alternate(source: RandomSource, candidates: Sequence[Callable[[], str]]) -> str:
    """Pick one candidate uniformly and evaluate only that one.

    Candidates that are not picked are never called, so they may consume
    randomness freely without skewing other draws.
    """
    if not candidates:
        return ""
    pool = list(candidates)
    source.shuffle(pool)
    return pool[0]()


def rand_address(source: RandomSource) -> str:
    return alternate(source, [
        lambda: "addr1" + rand_blake2b256_bech32(source),
        lambda: "stake1" + rand_blake2b256_bech32(source),
        _wildcard,
    ])


def rand_credential(source: RandomSource) -> str:
    """Two credential fragments joined by "/"."""
    candidates = [
        lambda size=size: rand_hex_string(source, size)
        for size in CREDENTIAL_HASH_SIZES
    ]
    candidates.append(_wildcard)
    return alternate(source, candidates) + "/" + alternate(source, candidates)


def rand_policy_id(source: RandomSource) -> str:
    return alternate(source, [
        lambda: rand_hex_string(source, POLICY_ID_SIZE),
        _wildcard,
    ])


def rand_asset_name(source: RandomSource) -> str:
    """Wildcard or hex of any length from 0 to 64."""
    candidates: list[Callable[[], str]] = [_wildcard]
    candidates.extend(
        lambda size=size: rand_hex_string(source, size)
        for size in range(MAX_ASSET_NAME_SIZE + 1)
    )
    return alternate(source, candidates)


def rand_asset(source: RandomSource) -> str:
    return rand_policy_id(source) + "." + rand_asset_name(source)


def _three_digit_index(source: RandomSource) -> str:
    # Digits are drawn one by one; leading zeros collapse ("007" -> "7").
    hundreds = source.randrange(10)
    tens = source.randrange(10)
    ones = source.randrange(10)
    return str(hundreds * 100 + tens * 10 + ones)


def rand_output_index(source: RandomSource) -> str:
    return alternate(source, [
        lambda: _three_digit_index(source),
        _wildcard,
    ])


def rand_transaction_id(source: RandomSource) -> str:
    return rand_hex_string(source, TRANSACTION_ID_SIZE)


def rand_output_ref(source: RandomSource) -> str:
    """Output reference pattern: <index>@<transaction id>."""
    return rand_output_index(source) + "@" + rand_transaction_id(source)


def rand_metadata_tag(source: RandomSource) -> str:
    return "{" + str(source.randrange(METADATA_TAG_LIMIT)) + "}"
