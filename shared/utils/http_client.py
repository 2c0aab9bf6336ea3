"""
Service HTTP Client
Base client for calling a sibling service over HTTP

Connection pooling follows the same lifecycle in every service:
- Single shared AsyncClient initialized at app startup
- Limits to prevent connection exhaustion
- Bounded timeouts on every call
"""

import httpx
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

RequestBuilder = Callable[[httpx.AsyncClient], httpx.Request]


class ServiceClient:
    """
    HTTP client for one upstream service.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
        - If not initialized, falls back to per-request client
    """

    # Connection pool settings (per worker)
    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def started(self) -> bool:
        return self._client is not None

    def _build_client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
            **kwargs
        )

    async def start(self):
        """
        Initialize the shared HTTP client.
        Call this during FastAPI app startup via lifespan.
        """
        if self._client is not None:
            logger.warning(f"{self.__class__.__name__} already started")
            return

        limits = httpx.Limits(
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE,
            keepalive_expiry=self.KEEPALIVE_EXPIRY
        )
        self._client = self._build_client(limits=limits)

        logger.info(
            f"{self.__class__.__name__} started: base_url={self.base_url}, "
            f"max_connections={self.MAX_CONNECTIONS}, timeout={self.timeout}s"
        )

    async def stop(self):
        """
        Close the HTTP client and release resources.
        Call this during FastAPI app shutdown via lifespan.
        """
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info(f"{self.__class__.__name__} stopped")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        # Shared client if initialized (preferred)
        if self._client:
            yield self._client
            return

        logger.warning(f"{self.__class__.__name__} not initialized, using per-request client")
        async with self._build_client() as client:
            yield client

    async def send(self, build_request: RequestBuilder) -> httpx.Response:
        """Send a request and read the full, decoded body"""
        async with self._session() as client:
            return await client.send(build_request(client))

    async def send_raw(self, build_request: RequestBuilder) -> Tuple[httpx.Response, bytes]:
        """Send a request and return the response with its body bytes exactly as received"""
        async with self._session() as client:
            response = await client.send(build_request(client), stream=True)
            try:
                if response.is_stream_consumed:
                    # Transport handed back an already loaded body
                    body = response.content
                else:
                    body = b"".join([chunk async for chunk in response.aiter_raw()])
            finally:
                await response.aclose()
            return response, body
