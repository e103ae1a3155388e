"""Function namespace - the names callable from template text."""

import logging
from functools import partial
from typing import Callable, Optional

from . import patterns, primitives
from .source import RandomSource, get_random_source

logger = logging.getLogger(__name__)


class FunctionNamespace:
    """Registry of template-callable functions keyed by name.

    The namespace is bound into the Jinja2 environment when a template is
    compiled, so every function must already be bound to its random source.
    """

    def __init__(self, functions: Optional[dict[str, Callable]] = None):
        self._functions: dict[str, Callable] = {}
        for name, fn in (functions or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: Callable) -> None:
        """Register a function under a template-visible name.

        Raises:
            ValueError: If the name is not a valid identifier or fn is not callable
        """
        if not name.isidentifier():
            raise ValueError(f"Invalid function name: {name!r}")
        if not callable(fn):
            raise ValueError(f"Function {name!r} is not callable")
        if name in self._functions:
            logger.debug(f"Replacing namespace function: {name}")
        self._functions[name] = fn

    def get(self, name: str) -> Optional[Callable]:
        return self._functions.get(name)

    def names(self) -> list[str]:
        """List registered names, sorted."""
        return sorted(self._functions)

    def as_globals(self) -> dict[str, Callable]:
        """Copy of the mapping for use as Jinja2 globals."""
        return dict(self._functions)

    def count(self) -> int:
        return len(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions


def build_default_namespace(source: RandomSource) -> FunctionNamespace:
    """Build the standard namespace with every generator bound to `source`."""
    return FunctionNamespace({
        "rand_int": partial(primitives.rand_int, source),
        "rand_float": partial(primitives.rand_float, source),
        "rand_string": partial(primitives.rand_string, source),
        "rand_hex_string": partial(primitives.rand_hex_string, source),
        "rand_blake2b256": partial(primitives.rand_blake2b256_hex, source),
        "rand_datum_hash": partial(primitives.rand_blake2b256_hex, source),
        "rand_address": partial(patterns.rand_address, source),
        "rand_credential": partial(patterns.rand_credential, source),
        "rand_policy_id": partial(patterns.rand_policy_id, source),
        "rand_asset_name": partial(patterns.rand_asset_name, source),
        "rand_asset": partial(patterns.rand_asset, source),
        "rand_output_index": partial(patterns.rand_output_index, source),
        "rand_transaction_id": partial(patterns.rand_transaction_id, source),
        "rand_output_ref": partial(patterns.rand_output_ref, source),
        "rand_metadata_tag": partial(patterns.rand_metadata_tag, source),
    })


# Global namespace instance
_namespace: Optional[FunctionNamespace] = None


def get_default_namespace() -> FunctionNamespace:
    """Get the global namespace bound to the process-wide random source."""
    global _namespace
    if _namespace is None:
        _namespace = build_default_namespace(get_random_source())
        logger.info(f"Function namespace ready with {_namespace.count()} functions")
    return _namespace
