"""Renderer tree nodes.

A compiled payload is a tree of these nodes. Nodes are frozen and hold
only tuples, so one tree can be rendered concurrently from many workers.
Rendering is the only step that consumes randomness.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from jinja2 import Template

from .errors import RenderError

logger = logging.getLogger(__name__)

RenderContext = Mapping[str, str]


@dataclass(frozen=True)
class Passthrough:
    """A value with no renderer (null or unsupported type), returned as is."""

    value: Any

    def render(self, context: Optional[RenderContext] = None) -> Any:
        return self.value


@dataclass(frozen=True)
class NativeRenderer:
    """A bool or numeric scalar that needs no rendering."""

    value: Union[bool, int, float, complex]

    def render(self, context: Optional[RenderContext] = None) -> Any:
        return self.value


@dataclass(frozen=True)
class TemplateRenderer:
    """A compiled Jinja2 template with the function namespace bound in."""

    template: Template
    source: str
    path: str = ""

    def render(self, context: Optional[RenderContext] = None) -> str:
        """Execute the template against the context.

        Raises:
            RenderError: On undefined variables or failing namespace calls
        """
        try:
            return self.template.render(dict(context or {}))
        except Exception as e:
            logger.debug(f"Template render failed at {self.path or '<root>'}: {e}")
            raise RenderError(f"{type(e).__name__}: {e}", self.path) from e


@dataclass(frozen=True)
class MapRenderer:
    entries: tuple[tuple[str, "RendererNode"], ...]

    def render(self, context: Optional[RenderContext] = None) -> dict[str, Any]:
        return {key: node.render(context) for key, node in self.entries}


@dataclass(frozen=True)
class SequenceRenderer:
    items: tuple["RendererNode", ...]

    def render(self, context: Optional[RenderContext] = None) -> list[Any]:
        return [node.render(context) for node in self.items]


RendererNode = Union[MapRenderer, SequenceRenderer, TemplateRenderer, NativeRenderer, Passthrough]


def render(node: RendererNode, context: Optional[RenderContext] = None) -> Any:
    """Render a compiled tree into plain dicts, lists, strings and scalars.

    Raises:
        RenderError: If any template in the tree fails; no partial result is returned
    """
    return node.render(context)
