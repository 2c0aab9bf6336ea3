"""
Edge Router
Public entry point: API proxy, static assets and render fallback
"""

from fastapi import FastAPI
import os
from contextlib import asynccontextmanager

from shared.utils.logger import init_logging, get_logger
from edge_router.utils.config import get_edge_config
from edge_router.utils.upstream_client import get_api_upstream, get_render_upstream
from edge_router.routes import proxy

if os.getenv('ENVIRONMENT') != 'testing':
    init_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config = get_edge_config()
    logger.info("🚀 Edge Router starting up...")
    config.log_config()

    upstreams = [get_api_upstream(), get_render_upstream()]
    for upstream in upstreams:
        await upstream.start()

    yield

    for upstream in upstreams:
        await upstream.stop()
    logger.info("🌐 Edge Router shutting down...")


# Docs routes are disabled so every path goes through the router
app = FastAPI(
    title="Record Showcase - Edge Router",
    description="Routes requests to the API service, static assets or the render service",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None
)

app.include_router(proxy.router, tags=["Edge"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "edge_router.main:app",
        host="0.0.0.0",
        port=get_edge_config().port,
        proxy_headers=False,
    )
