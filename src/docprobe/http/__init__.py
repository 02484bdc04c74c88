"""HTTP client for docprobe."""

from .client import AsyncHttpClient
from .protocols import HttpClient, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "HttpClient",
    "HttpResponse",
]
