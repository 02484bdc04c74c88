"""Async status-only HTTP client."""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp

from .. import __version__
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client that reports status codes only.

    Each call issues exactly one request with no retry. Response bodies are
    never read; the connection is released as soon as headers arrive.

    Example:
        async with AsyncHttpClient(default_timeout=5.0) as client:
            response = await client.get("https://docs.oracle.com/en/cloud/")
            print(response.status_code)
    """

    def __init__(
        self,
        user_agent: str | None = None,
        proxy: str | None = None,
        default_timeout: float = 5.0,
        connection_limit: int = 100,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or https://)
            default_timeout: Default request timeout in seconds
            connection_limit: Total connection pool size
        """
        self._proxy = proxy
        self._default_timeout = default_timeout
        self._connection_limit = connection_limit

        if user_agent is None:
            user_agent = f"docprobe/{__version__}"
        self._user_agent = user_agent

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        connector = aiohttp.TCPConnector(
            limit=self._connection_limit,
            ttl_dns_cache=300,  # DNS cache TTL
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self._user_agent},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def _request(self, method: str, url: str, timeout: float | None) -> HttpResponse:
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout
        async with self._session.request(
            method,
            url,
            timeout=aiohttp.ClientTimeout(total=timeout_val),
            proxy=self._proxy,
            allow_redirects=True,
        ) as response:
            logger.debug(f"{method} {url} -> {response.status}")
            return HttpResponse(
                status_code=response.status,
                url=str(response.url),
                content_type=response.headers.get("Content-Type", ""),
            )

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Perform a single HTTP GET, discarding the body.

        Args:
            url: The URL to probe
            timeout: Request timeout in seconds (uses default if None)

        Returns:
            HttpResponse with the status code

        Raises:
            aiohttp.ClientError: On network errors
            asyncio.TimeoutError: When the request exceeds the timeout
        """
        return await self._request("GET", url, timeout)

    async def head(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Perform a single HTTP HEAD request.

        Args:
            url: The URL to probe
            timeout: Request timeout in seconds (uses default if None)

        Returns:
            HttpResponse with the status code
        """
        return await self._request("HEAD", url, timeout)
