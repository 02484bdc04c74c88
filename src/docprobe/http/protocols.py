"""Protocol definitions for the probe HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable status-only HTTP response returned by HttpClient.

    The body is never read; probes only care whether the page exists.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        url: Final URL after any redirects
        content_type: Content-Type header value
    """

    status_code: int
    url: str
    content_type: str = ""


class HttpClient(Protocol):
    """
    Protocol for probe HTTP clients.

    This abstraction allows for:
    - Fake implementations in tests (slow, hanging, failing)
    - Consistent interface across the codebase
    """

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Perform a single HTTP GET and return its status.

        Args:
            url: The URL to probe
            timeout: Request timeout in seconds

        Returns:
            HttpResponse with the status code

        Raises:
            Exception on network errors (no retries)
        """
        ...

    async def head(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Perform a single HTTP HEAD and return its status.

        Args:
            url: The URL to probe
            timeout: Request timeout in seconds

        Returns:
            HttpResponse with the status code
        """
        ...
