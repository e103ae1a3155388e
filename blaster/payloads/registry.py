"""Payload registry - loads payload definitions and compiles them once.

Follows the definitions-directory pattern:
- YAML or JSON file per payload in definitions/
- Lazy loading with _loaded guard
- In-memory dict keyed by payload_key
- Global singleton via get_payload_registry()

Unreadable or invalid files are logged and skipped. A template syntax
error is logged and re-raised: a broken payload must stop the run
before any traffic is generated.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from blaster.config import PAYLOADS_DIR
from blaster.templates.compiler import PayloadCompiler
from blaster.templates.errors import CompileError
from blaster.templates.nodes import RenderContext, RendererNode

from .schemas import PayloadDefinition, PayloadSummary, RenderedPayload

logger = logging.getLogger(__name__)

DEFINITION_PATTERNS = ("*.yaml", "*.yml", "*.json")


@dataclass(frozen=True)
class CompiledPayload:
    """A payload definition with its compiled path and body."""

    definition: PayloadDefinition
    path: RendererNode
    body: RendererNode

    def render(self, context: Optional[RenderContext] = None) -> RenderedPayload:
        """Render path and body once.

        Raises:
            RenderError: If any template fails
        """
        return RenderedPayload(
            path=self.path.render(context),
            body=self.body.render(context),
        )


class PayloadRegistry:
    """Registry of compiled payloads loaded from definition files."""

    def __init__(
        self,
        definitions_dir: Optional[Path] = None,
        compiler: Optional[PayloadCompiler] = None,
    ):
        if definitions_dir is None:
            definitions_dir = PAYLOADS_DIR
        self.definitions_dir = definitions_dir
        self.compiler = compiler or PayloadCompiler()
        self._payloads: dict[str, CompiledPayload] = {}
        self._file_map: dict[str, Path] = {}
        self._loaded = False

    def _definition_files(self) -> list[Path]:
        files: list[Path] = []
        for pattern in DEFINITION_PATTERNS:
            files.extend(self.definitions_dir.glob(pattern))
        return sorted(files)

    def load(self) -> None:
        """Load and compile all payload definitions.

        Raises:
            CompileError: If a definition contains invalid template syntax
        """
        if self._loaded:
            return

        self._payloads, self._file_map = self._read_definitions()
        self._loaded = True
        logger.info(f"Loaded {len(self._payloads)} payload definitions")

    def _read_definitions(self) -> tuple[dict[str, CompiledPayload], dict[str, Path]]:
        """Read and compile every definition file without touching loaded state.

        Raises:
            CompileError: If a definition contains invalid template syntax
        """
        payloads: dict[str, CompiledPayload] = {}
        file_map: dict[str, Path] = {}

        if not self.definitions_dir.exists():
            logger.warning(f"Payload definitions directory not found: {self.definitions_dir}")
            return payloads, file_map

        for definition_file in self._definition_files():
            try:
                with open(definition_file, "r") as f:
                    data = yaml.safe_load(f)
                definition = PayloadDefinition.model_validate(data)
            except (OSError, yaml.YAMLError, ValidationError) as e:
                logger.error(f"Failed to load payload from {definition_file}: {e}")
                continue

            try:
                compiled = self.compile(definition)
            except CompileError as e:
                logger.error(f"Invalid template in {definition_file}: {e}")
                raise

            if definition.payload_key in payloads:
                logger.warning(
                    f"Duplicate payload key {definition.payload_key} in {definition_file}, "
                    f"replacing {file_map[definition.payload_key]}"
                )
            payloads[definition.payload_key] = compiled
            file_map[definition.payload_key] = definition_file
            logger.debug(f"Loaded payload: {definition.payload_key}")

        return payloads, file_map

    def compile(self, definition: PayloadDefinition) -> CompiledPayload:
        """Compile a definition's path and body.

        Raises:
            CompileError: If either contains invalid template syntax
        """
        return CompiledPayload(
            definition=definition,
            path=self.compiler.compile(definition.path, "path"),
            body=self.compiler.compile(definition.body, "body"),
        )

    def get(self, payload_key: str) -> Optional[CompiledPayload]:
        """Get a compiled payload by key."""
        self.load()
        return self._payloads.get(payload_key)

    def list_all(self) -> list[PayloadDefinition]:
        """List all payload definitions."""
        self.load()
        return [p.definition for p in self._payloads.values()]

    def list_summaries(self) -> list[PayloadSummary]:
        """List lightweight payload summaries."""
        self.load()
        return [
            PayloadSummary(
                payload_key=d.payload_key,
                name=d.name,
                description=d.description,
                target=d.target,
                method=d.method,
                path=d.path,
                variables=d.variables,
                tags=d.tags,
            )
            for d in self.list_all()
        ]

    def render(
        self,
        payload_key: str,
        context: Optional[RenderContext] = None,
    ) -> RenderedPayload:
        """Render a payload once.

        Raises:
            KeyError: If the payload is unknown
            RenderError: If any template fails
        """
        payload = self.get(payload_key)
        if payload is None:
            raise KeyError(payload_key)
        return payload.render(context)

    def count(self) -> int:
        """Get total number of payloads."""
        self.load()
        return len(self._payloads)

    def reload(self) -> None:
        """Force reload all definitions.

        The new set replaces the current one only if every file compiles;
        on CompileError the previously loaded payloads stay in service.

        Raises:
            CompileError: If a definition contains invalid template syntax
        """
        payloads, file_map = self._read_definitions()
        self._payloads, self._file_map = payloads, file_map
        self._loaded = True
        logger.info(f"Reloaded {len(self._payloads)} payload definitions")


# Global registry instance
_registry: Optional[PayloadRegistry] = None


def get_payload_registry() -> PayloadRegistry:
    """Get the global payload registry instance."""
    global _registry
    if _registry is None:
        _registry = PayloadRegistry()
        _registry.load()
    return _registry
