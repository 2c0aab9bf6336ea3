"""
API Service
Serves the fixed record list as JSON
"""

from fastapi import FastAPI
import os
from contextlib import asynccontextmanager

from shared.utils.logger import init_logging, get_logger
from api_service.utils.config import get_api_config
from api_service.services.record_store import get_record_store
from api_service.routes import records, health

if os.getenv('ENVIRONMENT') != 'testing':
    init_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config = get_api_config()
    logger.info("🚀 API Service starting up...")
    config.log_config()

    # Load the record list once; a bad records file fails startup
    store = get_record_store()
    logger.info(f"📦 Serving {len(store)} records at {config.api_path}")

    yield

    logger.info("📦 API Service shutting down...")


app = FastAPI(
    title="Record Showcase - API Service",
    description="Fixed record list served as JSON",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(records.router, prefix=get_api_config().api_path.rstrip('/'), tags=["Records"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api_service.main:app",
        host="0.0.0.0",
        port=get_api_config().port,
    )
