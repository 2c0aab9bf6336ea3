"""
Edge Routes
Catch-all dispatch to the API service, the static root or the render service
"""

import time
import logging
from pathlib import Path

import httpx
from fastapi import APIRouter, Request, Response
from fastapi.responses import FileResponse, PlainTextResponse

from shared.utils.logger import get_request_logger
from edge_router.services.routing import RouteStage, route_request
from edge_router.utils.config import get_edge_config
from edge_router.utils.upstream_client import (
    UpstreamClient,
    get_api_upstream,
    get_render_upstream,
    raw_request_path,
    relay_headers,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def relay(upstream: UpstreamClient, request: Request, target: str) -> Response:
    """Forward to the backend and relay status, headers and body unchanged"""
    try:
        upstream_response, body = await upstream.forward(request, target)
    except httpx.TimeoutException as e:
        logger.warning(f"{upstream.service_name} timed out for {request.method} {target}: {e!r}")
        return PlainTextResponse("Gateway Timeout", status_code=504)
    except httpx.RequestError as e:
        logger.warning(f"{upstream.service_name} unreachable for {request.method} {target}: {e!r}")
        return PlainTextResponse("Bad Gateway", status_code=502)

    response = Response(content=body, status_code=upstream_response.status_code)
    headers = relay_headers(upstream_response)
    if request.method != "HEAD":
        # Length of the relayed bytes replaces the upstream value
        headers = [(name, value) for name, value in headers if name.lower() != b"content-length"]
        headers.append((b"content-length", str(len(body)).encode("latin-1")))
    response.raw_headers = [(name.lower(), value) for name, value in headers]
    return response


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def dispatch(request: Request):
    """Route by path: API prefix first, then an existing static file, then the render service"""
    config = get_edge_config()
    started = time.perf_counter()

    decision = route_request(
        request.method,
        request.url.path,
        config.api_prefix,
        Path(config.static_root),
        raw_path=raw_request_path(request)
    )

    if decision.stage is RouteStage.API:
        upstream = get_api_upstream()
        response = await relay(upstream, request, decision.target)
        target = upstream.service_name
    elif decision.stage is RouteStage.STATIC:
        response = FileResponse(decision.static_file)
        target = "static"
    else:
        upstream = get_render_upstream()
        response = await relay(upstream, request, decision.target)
        target = upstream.service_name

    get_request_logger().log_request(
        method=request.method,
        path=request.url.path,
        upstream=target,
        status_code=response.status_code,
        response_time=time.perf_counter() - started,
        ip_address=request.client.host if request.client else None
    )
    return response
