"""
HTTP transport abstraction for the TMDb client.

The client only needs "send this request, give me the bytes or an error".
``HttpxTransport`` is the production implementation; tests provide their
own ``Transport`` so no real network I/O happens.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import httpx

from movie_manager import USER_AGENT
from .errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Raw response data handed back to the client."""
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class Transport(ABC):
    """Performs one HTTP request. Implementations raise NetworkError when no data arrives."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        """Send a request and return the raw response."""
        pass

    async def aclose(self) -> None:
        """Release any pooled connections."""
        pass


class HttpxTransport(Transport):
    """Transport backed by a shared ``httpx.AsyncClient``.

    Requests are not retried; a failure surfaces once as NetworkError.
    Several requests may be in flight on the same client at once.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        client = self._get_client()
        try:
            response = await client.request(method, url, headers=headers, content=content)
        except httpx.RequestError as e:
            raise NetworkError(f"{method} request failed: {e}", original_error=e) from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed HTTP client")
