"""Random value generators bound into the template namespace.

- source.py     - RandomSource, the shared lock-guarded generator
- primitives.py - ints, floats, alphabet strings, BLAKE2b-256 digests
- patterns.py   - Kupo pattern shapes (addresses, credentials, assets, ...)
- namespace.py  - FunctionNamespace registry exposed to templates
"""

from .source import RandomSource, get_random_source
from .namespace import FunctionNamespace, build_default_namespace, get_default_namespace

__all__ = [
    "RandomSource",
    "get_random_source",
    "FunctionNamespace",
    "build_default_namespace",
    "get_default_namespace",
]
