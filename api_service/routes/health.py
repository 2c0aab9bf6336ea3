"""
Health Check Routes
Service health monitoring endpoints
"""

from fastapi import APIRouter
from datetime import datetime, timezone

from api_service.services.record_store import get_record_store
from api_service.utils.config import get_api_config

router = APIRouter()


@router.get("")
async def health_check():
    """Basic health check"""
    config = get_api_config()
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.service_version,
        "records": len(get_record_store())
    }
