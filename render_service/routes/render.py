"""
Render Routes
Catch-all route composing the record list fragment
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse
import logging

from render_service.utils.api_client import ApiServiceError, get_api_client
from render_service.services.fragment_renderer import get_fragment_renderer

router = APIRouter()
logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS, response_class=HTMLResponse)
async def render_records(path: str):
    """
    Fetch the record list and render it as a <ul> fragment.

    Every path and method is handled the same way. Upstream failures render
    an error paragraph and still answer 200.
    """
    renderer = get_fragment_renderer()

    try:
        records = await get_api_client().fetch_records()
    except ApiServiceError as e:
        logger.warning(f"Rendering error fragment for /{path}: {e}")
        return HTMLResponse(content=renderer.render_error(), status_code=200)

    return HTMLResponse(content=renderer.render_record_list(records), status_code=200)
