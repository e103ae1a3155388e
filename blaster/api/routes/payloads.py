"""Payload API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from blaster.payloads.registry import get_payload_registry
from blaster.payloads.schemas import (
    PayloadDefinition,
    PayloadSummary,
    PreviewRequest,
    RenderedPayload,
    RenderRequest,
    RenderResponse,
)
from blaster.templates.compiler import PayloadCompiler
from blaster.templates.errors import CompileError, RenderError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payloads", tags=["payloads"])

# Lazy-loaded compiler for ad hoc previews
_compiler: Optional[PayloadCompiler] = None


def _get_compiler() -> PayloadCompiler:
    global _compiler
    if _compiler is None:
        _compiler = PayloadCompiler()
    return _compiler


@router.get("", response_model=list[PayloadSummary])
async def list_payloads(
    tag: Optional[str] = Query(None, description="Filter by tag"),
) -> list[PayloadSummary]:
    """List all payload definitions."""
    summaries = get_payload_registry().list_summaries()
    if tag:
        summaries = [s for s in summaries if tag in s.tags]
    return summaries


@router.post("/preview", response_model=RenderResponse)
async def preview_payload(request: PreviewRequest) -> RenderResponse:
    """Compile an ad hoc payload tree and render it."""
    try:
        tree = _get_compiler().compile(request.body, "body")
    except CompileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        results = [
            RenderedPayload(body=tree.render(request.context))
            for _ in range(request.count)
        ]
    except RenderError as e:
        logger.warning(f"Preview render failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return RenderResponse(count=len(results), results=results)


@router.post("/reload")
async def reload_payloads() -> dict[str, str]:
    """Force reload all payload definitions from disk."""
    registry = get_payload_registry()
    try:
        registry.reload()
    except CompileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "reloaded", "count": str(registry.count())}


@router.get("/{payload_key}", response_model=PayloadDefinition)
async def get_payload(payload_key: str) -> PayloadDefinition:
    """Get a full payload definition."""
    payload = get_payload_registry().get(payload_key)
    if payload is None:
        raise HTTPException(
            status_code=404,
            detail=f"Payload not found: {payload_key}",
        )
    return payload.definition


@router.post("/{payload_key}/render", response_model=RenderResponse)
async def render_payload(payload_key: str, request: RenderRequest) -> RenderResponse:
    """Render a stored payload `count` times."""
    payload = get_payload_registry().get(payload_key)
    if payload is None:
        raise HTTPException(
            status_code=404,
            detail=f"Payload not found: {payload_key}",
        )

    try:
        results = [payload.render(request.context) for _ in range(request.count)]
    except RenderError as e:
        logger.warning(f"Render failed for {payload_key}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return RenderResponse(
        payload_key=payload_key,
        method=payload.definition.method,
        count=len(results),
        results=results,
    )
