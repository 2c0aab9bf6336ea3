"""
Render Service
Server-side composition of the record list into an HTML fragment
"""

from fastapi import FastAPI
import os
from contextlib import asynccontextmanager

from shared.utils.logger import init_logging, get_logger
from render_service.utils.config import get_render_config
from render_service.utils.api_client import get_api_client
from render_service.routes import render

if os.getenv('ENVIRONMENT') != 'testing':
    init_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config = get_render_config()
    logger.info("🚀 Render Service starting up...")
    config.log_config()

    api_client = get_api_client()
    await api_client.start()

    yield

    await api_client.stop()
    logger.info("🖼️ Render Service shutting down...")


# Docs routes are disabled so the catch-all owns every path
app = FastAPI(
    title="Record Showcase - Render Service",
    description="HTML fragment rendering of the record list",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None
)

app.include_router(render.router, tags=["Render"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "render_service.main:app",
        host="0.0.0.0",
        port=get_render_config().port,
    )
