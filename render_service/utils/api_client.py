"""
API Service HTTP Client
Fetches the record list from the API service for server-side rendering
"""

import httpx
import logging
from typing import List, Optional

from shared.schemas.record import Record, RecordPayloadError, parse_records
from shared.utils.http_client import ServiceClient
from render_service.utils.config import get_render_config

logger = logging.getLogger(__name__)


class ApiServiceError(Exception):
    """Raised when the record list cannot be obtained from the API service"""


class ApiServiceClient(ServiceClient):
    """HTTP client for the API service. One attempt per call, no retry."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        config = get_render_config()
        super().__init__(
            base_url or config.api_service_url,
            timeout=timeout or config.api_timeout_seconds,
            transport=transport
        )
        self.path = path or config.api_service_path

    async def fetch_records(self) -> List[Record]:
        """
        GET the record list and validate it

        Raises:
            ApiServiceError: On connection failure, timeout, non-2xx status or invalid body
        """
        try:
            response = await self.send(lambda client: client.build_request("GET", self.path))
            response.raise_for_status()
            return parse_records(response.content)
        except httpx.TimeoutException as e:
            logger.warning(f"Timed out fetching records from {self.base_url}{self.path}: {e!r}")
            raise ApiServiceError("API service timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"API service returned {e.response.status_code} for {self.path}")
            raise ApiServiceError(f"API service error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning(f"Failed to connect to API service at {self.base_url}: {e!r}")
            raise ApiServiceError(f"Failed to connect to API service: {e}") from e
        except RecordPayloadError as e:
            logger.warning(f"API service sent an unusable body: {e}")
            raise ApiServiceError(str(e)) from e


_api_client: Optional[ApiServiceClient] = None


def get_api_client() -> ApiServiceClient:
    """Get the shared API service client"""
    global _api_client
    if _api_client is None:
        _api_client = ApiServiceClient()
    return _api_client
