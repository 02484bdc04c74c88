"""Probe one work item against the documentation site."""

from __future__ import annotations

import asyncio
import logging
import time

import aiohttp

from ..http.protocols import HttpClient
from ..models.items import ProbeResult, WorkItem

logger = logging.getLogger(__name__)

# Fixed path convention of the documentation site: <base>/<id>/cloud/
PROBE_PATH_SUFFIX = "cloud/"

# Transport failures that classify an item as unsupported instead of raising
TRANSPORT_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)


def build_probe_url(base_url: str, item_id: str) -> str:
    """
    Build the URL probed for an item.

    Example:
        >>> build_probe_url("https://docs.oracle.com", "en")
        'https://docs.oracle.com/en/cloud/'
    """
    return f"{base_url.rstrip('/')}/{item_id}/{PROBE_PATH_SUFFIX}"


class Prober:
    """
    Classify work items with a single status-only request each.

    No retries. The timeout is enforced here as well as in the client,
    so a client that never returns still frees its slot.

    Example:
        async with AsyncHttpClient() as client:
            prober = Prober(client, base_url="https://docs.oracle.com", timeout=5.0)
            result = await prober.probe(WorkItem("en", "English"))
    """

    def __init__(
        self,
        http_client: HttpClient,
        base_url: str,
        timeout: float = 5.0,
        method: str = "GET",
    ) -> None:
        """
        Initialize the prober.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            base_url: Documentation root, e.g. https://docs.oracle.com
            timeout: Per-probe timeout in seconds
            method: "GET" or "HEAD"
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        method = method.upper()
        if method not in ("GET", "HEAD"):
            raise ValueError(f"Unsupported probe method: {method}")

        self._client = http_client
        self.base_url = base_url
        self.timeout = timeout
        self.method = method

    def url_for(self, item: WorkItem) -> str:
        return build_probe_url(self.base_url, item.id)

    async def _request_status(self, url: str) -> int:
        if self.method == "HEAD":
            response = await self._client.head(url, timeout=self.timeout)
        else:
            response = await self._client.get(url, timeout=self.timeout)
        return response.status_code

    async def probe(self, item: WorkItem) -> ProbeResult:
        """
        Probe one item.

        Returns:
            SUPPORTED result iff the status is 200. Transport failures give an
            UNSUPPORTED result with status 0 and the error recorded.
        """
        url = self.url_for(item)
        start = time.monotonic()

        try:
            status_code = await asyncio.wait_for(self._request_status(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            elapsed = time.monotonic() - start
            logger.warning(f"Probe timed out after {self.timeout:.1f}s: {url}")
            return ProbeResult.failed(item, url, "timeout", elapsed=elapsed)
        except TRANSPORT_ERRORS as e:
            elapsed = time.monotonic() - start
            logger.warning(f"Probe failed for {url}: {e}")
            return ProbeResult.failed(item, url, str(e) or type(e).__name__, elapsed=elapsed)

        result = ProbeResult.from_status(item, url, status_code, elapsed=time.monotonic() - start)
        logger.debug(f"{item.id}: {url} -> {status_code} ({result.classification.value})")
        return result
