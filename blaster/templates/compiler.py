"""Payload compiler.

Turns an untyped payload tree (as parsed from YAML or JSON) into an
immutable renderer tree. Every string leaf becomes a Jinja2 template
with the function namespace available as globals.

Usage:
    compiler = PayloadCompiler()
    tree = compiler.compile({"to": "addr1{{rand_string 8}}", "amount": 42})
    body = tree.render({})
"""

import logging
import numbers
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from jinja2 import BaseLoader, StrictUndefined, TemplateSyntaxError, nodes
from jinja2.sandbox import SandboxedEnvironment

from blaster.generators.namespace import FunctionNamespace, get_default_namespace

from .dialect import expand_shorthand
from .errors import CompileError
from .nodes import (
    MapRenderer,
    NativeRenderer,
    Passthrough,
    RendererNode,
    SequenceRenderer,
    TemplateRenderer,
)

logger = logging.getLogger(__name__)

# Bare names with this prefix are taken to be misspelled namespace calls
FUNCTION_PREFIX = "rand_"


class RawKind(str, Enum):
    """Shape of a raw payload value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


def decode(value: Any) -> RawKind:
    """Classify a raw value. bool is checked before numbers."""
    if value is None:
        return RawKind.NULL
    if isinstance(value, bool):
        return RawKind.BOOL
    if isinstance(value, numbers.Number):
        return RawKind.NUMBER
    if isinstance(value, str):
        return RawKind.STRING
    if isinstance(value, Mapping):
        return RawKind.MAPPING
    if isinstance(value, (list, tuple)):
        return RawKind.SEQUENCE
    return RawKind.OTHER


def _child_path(parent: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{parent}[{key}]"
    return f"{parent}.{key}" if parent else str(key)


class PayloadCompiler:
    """Compiles raw payload trees against one function namespace."""

    def __init__(self, namespace: Optional[FunctionNamespace] = None):
        """Initialize the compiler.

        Args:
            namespace: Functions callable from templates (default: global namespace)
        """
        self.namespace = namespace or get_default_namespace()

        # Payload strings are emitted verbatim, so no block trimming.
        # Templates may come from API clients: sandboxed, and the only
        # globals are the namespace functions.
        self.env = SandboxedEnvironment(
            loader=BaseLoader(),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.env.globals.clear()
        self.env.globals.update(self.namespace.as_globals())

    def compile(self, raw: Any, path: str = "") -> RendererNode:
        """Compile a raw value into a renderer node.

        Args:
            raw: Payload tree (dicts, lists, strings, scalars)
            path: Location of `raw` inside the enclosing payload

        Returns:
            Renderer node; null and unsupported values become Passthrough

        Raises:
            CompileError: On the first string with invalid template syntax
                or a call to a function outside the namespace
        """
        kind = decode(raw)

        if kind == RawKind.MAPPING:
            return MapRenderer(tuple(
                (str(key), self.compile(value, _child_path(path, str(key))))
                for key, value in raw.items()
            ))
        elif kind == RawKind.SEQUENCE:
            return SequenceRenderer(tuple(
                self.compile(value, _child_path(path, index))
                for index, value in enumerate(raw)
            ))
        elif kind == RawKind.STRING:
            return self._compile_template(raw, path)
        elif kind in (RawKind.BOOL, RawKind.NUMBER):
            return NativeRenderer(raw)
        else:
            return Passthrough(raw)

    def _compile_template(self, source: str, path: str) -> TemplateRenderer:
        expanded = expand_shorthand(source, self.namespace)
        try:
            ast = self.env.parse(expanded)
            self._check_functions(ast, source, path)
            template = self.env.from_string(ast)
        except TemplateSyntaxError as e:
            raise CompileError(
                f"invalid template syntax: {e.message}",
                path=path,
                lineno=e.lineno,
                source=source,
            ) from e
        return TemplateRenderer(template=template, source=source, path=path)

    def _check_functions(self, ast: nodes.Template, source: str, path: str) -> None:
        """Reject calls to names outside the namespace.

        Raises:
            CompileError: On an unknown function, called or bare
        """
        for call in ast.find_all(nodes.Call):
            if isinstance(call.node, nodes.Name) and call.node.name not in self.namespace:
                raise CompileError(
                    f"unknown function: {call.node.name}",
                    path=path,
                    lineno=call.lineno,
                    source=source,
                )
        for name in ast.find_all(nodes.Name):
            if (
                name.ctx == "load"
                and name.name.startswith(FUNCTION_PREFIX)
                and name.name not in self.namespace
            ):
                raise CompileError(
                    f"unknown function: {name.name}",
                    path=path,
                    lineno=name.lineno,
                    source=source,
                )


def compile_renderer(raw: Any, namespace: Optional[FunctionNamespace] = None) -> RendererNode:
    """Compile a payload tree (convenience function).

    Raises:
        CompileError: If any string field has invalid template syntax or
            calls an unknown function
    """
    return PayloadCompiler(namespace).compile(raw)
