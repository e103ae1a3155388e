"""Blaster preview API.

Serves the payload definitions used by the load generator and renders
sample request bodies, so templates can be checked before a run.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blaster.api.routes import functions, payloads
from blaster.config import LOG_LEVEL
from blaster.generators.namespace import get_default_namespace
from blaster.payloads.registry import get_payload_registry

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: compile every payload so template errors fail the boot
    logger.info("Loading function namespace...")
    namespace = get_default_namespace()
    logger.info(f"Loaded {namespace.count()} template functions")

    logger.info("Loading payload definitions...")
    payload_registry = get_payload_registry()
    logger.info(f"Loaded {payload_registry.count()} payloads")

    logger.info("Blaster API ready")
    yield
    logger.info("Shutting down Blaster API")


app = FastAPI(
    title="Blaster API",
    description="""
## Payload Preview Service

Compiles payload templates and renders randomized request bodies.

### Key Endpoints

- `GET /v1/payloads` - List payload definitions
- `GET /v1/payloads/{key}` - Get a payload definition
- `POST /v1/payloads/{key}/render` - Render a payload
- `POST /v1/payloads/preview` - Compile and render an ad hoc body
- `GET /v1/functions` - List template functions
""",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(payloads.router, prefix="/v1")
app.include_router(functions.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "Blaster API",
        "version": "0.1.0",
        "docs": "/docs",
        "endpoints": {
            "payloads": "/v1/payloads",
            "functions": "/v1/functions",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "payloads_loaded": get_payload_registry().count(),
        "functions_loaded": get_default_namespace().count(),
    }
