"""Payload template compilation and rendering.

- errors.py   - CompileError and RenderError
- dialect.py  - pipe-style command shorthand on top of Jinja2
- nodes.py    - immutable renderer tree nodes
- compiler.py - raw payload tree -> renderer tree
"""

from .errors import CompileError, RenderError, TemplateFailure
from .nodes import (
    MapRenderer,
    NativeRenderer,
    Passthrough,
    RendererNode,
    SequenceRenderer,
    TemplateRenderer,
    render,
)
from .compiler import PayloadCompiler, RawKind, compile_renderer, decode

__all__ = [
    "CompileError",
    "RenderError",
    "TemplateFailure",
    "MapRenderer",
    "NativeRenderer",
    "Passthrough",
    "RendererNode",
    "SequenceRenderer",
    "TemplateRenderer",
    "render",
    "PayloadCompiler",
    "RawKind",
    "compile_renderer",
    "decode",
]
