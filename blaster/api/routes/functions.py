"""Template function API routes."""

from fastapi import APIRouter

from blaster.generators.namespace import get_default_namespace

router = APIRouter(prefix="/functions", tags=["functions"])


@router.get("", response_model=list[str])
async def list_functions() -> list[str]:
    """List function names callable from payload templates."""
    return get_default_namespace().names()
