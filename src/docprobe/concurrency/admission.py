"""Admission control: bound the number of probes in flight."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class AdmissionController:
    """
    Fixed-capacity pool of execution slots backed by a counting semaphore.

    Callers park on the semaphore while the pool is saturated and are woken
    when a slot is released; there is no polling.

    Invariant: 0 <= in_flight <= max_concurrent.

    Example:
        admission = AdmissionController(max_concurrent=10)

        async with admission.slot():
            await probe(item)
    """

    def __init__(self, max_concurrent: int = 10) -> None:
        """
        Initialize the admission controller.

        Args:
            max_concurrent: Number of slots in the pool (must be >= 1)

        Raises:
            ConfigurationError: If max_concurrent < 1
        """
        if isinstance(max_concurrent, bool) or not isinstance(max_concurrent, int):
            raise ConfigurationError(f"max_concurrent must be an integer, got {max_concurrent!r}")
        if max_concurrent < 1:
            raise ConfigurationError(f"max_concurrent must be >= 1, got {max_concurrent}")

        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of currently occupied slots."""
        return self._in_flight

    @property
    def available(self) -> int:
        """Number of free slots."""
        return self.max_concurrent - self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Highest number of simultaneously occupied slots seen so far."""
        return self._peak_in_flight

    async def acquire(self) -> None:
        """Wait until a slot is free, then occupy it."""
        await self._semaphore.acquire()
        self._in_flight += 1
        if self._in_flight > self._peak_in_flight:
            self._peak_in_flight = self._in_flight

    def release(self) -> None:
        """
        Free one slot.

        Raises:
            RuntimeError: If no slot is currently occupied
        """
        if self._in_flight <= 0:
            raise RuntimeError("release() called without a matching acquire()")
        self._in_flight -= 1
        self._semaphore.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """
        Async context manager holding one slot for its body.

        The slot is released on every exit path, including exceptions
        and cancellation.
        """
        await self.acquire()
        try:
            yield
        finally:
            self.release()

    def get_stats(self) -> dict:
        """Get admission statistics."""
        return {
            "max_concurrent": self.max_concurrent,
            "in_flight": self._in_flight,
            "peak_in_flight": self._peak_in_flight,
        }
