"""
Upstream HTTP Client
Forwards requests from the edge router to a backend service
"""

import httpx
import logging
from typing import List, Optional, Tuple
from urllib.parse import quote, quote_from_bytes

from starlette.requests import Request

from shared.utils.http_client import ServiceClient
from edge_router.utils.config import get_edge_config

logger = logging.getLogger(__name__)

# Connection-scoped headers, never forwarded in either direction
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
})

# Replaced by the edge router on every forwarded request
FORWARDING_HEADERS = frozenset({
    "host",
    "x-real-ip",
    "x-forwarded-for",
    "x-forwarded-proto",
    "x-forwarded-host",
})

# Characters left as-is when re-quoting a raw request path
RAW_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def raw_request_path(request: Request) -> str:
    """
    The request path as the client sent it, percent escapes intact.

    Falls back to quoting the decoded path when the server gives no raw path.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return quote(request.url.path, safe=RAW_PATH_SAFE)
    raw_path = raw_path.split(b"?", 1)[0]
    return quote_from_bytes(raw_path, safe=RAW_PATH_SAFE)


def build_forward_headers(request: Request) -> List[Tuple[bytes, bytes]]:
    """
    Copy the client's headers, repeats included, and set the forwarding headers.

    Host keeps the original client host. X-Forwarded-For gets the client IP
    appended to the whole incoming chain.
    """
    headers = [
        (name, value)
        for name, value in request.headers.raw
        if name.lower().decode("latin-1") not in HOP_BY_HOP_HEADERS | FORWARDING_HEADERS
        and name.lower() != b"content-length"
    ]

    client_ip = request.client.host if request.client else ""
    original_host = request.headers.get("host", request.url.netloc)
    incoming_chain = ", ".join(request.headers.getlist("x-forwarded-for"))

    forwarding = [
        ("host", original_host),
        ("x-real-ip", client_ip),
        ("x-forwarded-for", f"{incoming_chain}, {client_ip}" if incoming_chain else client_ip),
        ("x-forwarded-proto", request.url.scheme),
        ("x-forwarded-host", original_host),
    ]
    headers.extend((name.encode("latin-1"), value.encode("latin-1")) for name, value in forwarding)
    return headers


def relay_headers(response: httpx.Response) -> List[Tuple[bytes, bytes]]:
    """Upstream response headers as raw bytes minus hop-by-hop ones, duplicates kept"""
    return [
        (name, value)
        for name, value in response.headers.raw
        if name.lower().decode("latin-1") not in HOP_BY_HOP_HEADERS
    ]


class UpstreamClient(ServiceClient):
    """HTTP client for one edge router backend"""

    def __init__(
        self,
        service_name: str,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(
            base_url,
            timeout=timeout or get_edge_config().upstream_timeout_seconds,
            transport=transport
        )
        self.service_name = service_name

    async def forward(self, request: Request, target: str) -> Tuple[httpx.Response, bytes]:
        """
        Forward method, headers, body and query string to `target` on the backend

        Args:
            request: Inbound request
            target: Raw (still percent-encoded) path to request on the backend

        Returns:
            The upstream response and its body exactly as received

        Raises:
            httpx.TimeoutException: Backend did not answer in time
            httpx.RequestError: Backend unreachable
        """
        body = await request.body()
        headers = build_forward_headers(request)

        raw_target = target.encode("ascii")
        query_string = request.scope.get("query_string", b"")
        if query_string:
            raw_target += b"?" + quote_from_bytes(query_string, safe=RAW_PATH_SAFE + "?").encode("ascii")

        def build(client: httpx.AsyncClient) -> httpx.Request:
            # raw_path keeps httpx from decoding or normalizing the path again
            base = client.base_url
            url = base.copy_with(raw_path=base.raw_path.rstrip(b"/") + raw_target)
            return client.build_request(request.method, url, headers=headers, content=body or None)

        return await self.send_raw(build)


_api_upstream: Optional[UpstreamClient] = None
_render_upstream: Optional[UpstreamClient] = None


def get_api_upstream() -> UpstreamClient:
    """Get the API service upstream client"""
    global _api_upstream
    if _api_upstream is None:
        _api_upstream = UpstreamClient("api-service", get_edge_config().api_service_url)
    return _api_upstream


def get_render_upstream() -> UpstreamClient:
    """Get the render service upstream client"""
    global _render_upstream
    if _render_upstream is None:
        _render_upstream = UpstreamClient("render-service", get_edge_config().render_service_url)
    return _render_upstream
