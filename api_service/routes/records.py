"""
Record Routes
Fixed record list endpoint
"""

from fastapi import APIRouter, Response

from api_service.services.record_store import get_record_store

router = APIRouter()


@router.get("/")
async def list_records():
    """Return the stored record list as a JSON array"""
    store = get_record_store()
    return Response(content=store.payload, media_type="application/json")
