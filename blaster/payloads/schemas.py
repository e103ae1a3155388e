"""Payload definition schemas.

A payload definition names one request body template together with the
request line it is meant for. The body is an arbitrary tree of maps,
lists and scalars whose strings are templates.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class PayloadTarget(str, Enum):
    """Worker type the payload is written for (informational only)."""

    HTTP = "http"
    DUMMY = "dummy"


class PayloadDefinition(BaseModel):
    """A request body template loaded from definitions/."""

    payload_key: str = Field(
        ...,
        description="Unique key used to look up the payload",
        examples=["match_address", "metadata_by_tag"],
    )
    name: str = Field(..., description="Human-readable name")
    description: str = Field(default="")
    target: PayloadTarget = Field(default=PayloadTarget.HTTP)
    method: str = Field(default="GET", description="HTTP method for the request")
    path: str = Field(
        default="",
        description="Request path; may itself be a template",
        examples=["/matches/{{rand_address}}"],
    )
    body: Any = Field(
        default=None,
        description="Payload tree; string leaves are templates",
    )
    variables: list[str] = Field(
        default_factory=list,
        description="Context variables the templates expect at render time",
    )
    tags: list[str] = Field(default_factory=list)


class PayloadSummary(BaseModel):
    """Lightweight payload listing entry."""

    payload_key: str
    name: str
    description: str = ""
    target: PayloadTarget
    method: str
    path: str
    variables: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class RenderRequest(BaseModel):
    """Render a stored payload one or more times."""

    context: dict[str, str] = Field(
        default_factory=dict,
        description="Template variables for this render",
    )
    count: int = Field(default=1, ge=1, le=100, description="Number of bodies to render")


class PreviewRequest(BaseModel):
    """Compile and render an ad hoc payload tree."""

    body: Any = Field(..., description="Payload tree to compile")
    context: dict[str, str] = Field(default_factory=dict)
    count: int = Field(default=1, ge=1, le=100)


class RenderedPayload(BaseModel):
    """One rendered request."""

    path: str = ""
    body: Any = None


class RenderResponse(BaseModel):
    payload_key: Optional[str] = None
    method: str = "GET"
    count: int
    results: list[RenderedPayload]
