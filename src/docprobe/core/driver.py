"""Batch driver: dispatch under admission control, then wait for every worker."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from ..concurrency.admission import AdmissionController
from ..models.events import EventEmitter, EventType, ProbeEvent
from ..models.items import BatchState, BatchSummary, ProbeResult, WorkItem
from .collector import ResultCollector
from .probe import Prober

logger = logging.getLogger(__name__)


class BatchDriver:
    """
    Run one batch of probes to completion.

    State machine: IDLE -> DISPATCHING -> DRAINING -> COMPLETE.

    For each item the driver waits for a slot, then spawns a worker task that
    probes, records, and releases its slot in that order. Once every item is
    dispatched, the driver joins all worker tasks. The join is the completion
    barrier; free slots alone do not mean results are recorded.

    Example:
        driver = BatchDriver(prober, ResultCollector(), AdmissionController(10))
        summary = await driver.run(items)
        print(summary.to_dict())
    """

    def __init__(
        self,
        prober: Prober,
        collector: ResultCollector,
        admission: AdmissionController,
        emit: EventEmitter | None = None,
    ) -> None:
        self._prober = prober
        self._collector = collector
        self._admission = admission
        self._emit = emit
        self._state = BatchState.IDLE
        self._workers: list[asyncio.Task] = []

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def collector(self) -> ResultCollector:
        return self._collector

    async def _worker(self, item: WorkItem) -> None:
        """Probe one item and record it. Runs with a slot already held."""
        try:
            try:
                result = await self._prober.probe(item)
            except Exception as e:
                logger.exception(f"Unexpected error probing {item.id}")
                result = ProbeResult.failed(item, self._prober.url_for(item), f"{type(e).__name__}: {e}")
            self._collector.record(result)
        finally:
            self._admission.release()

    async def run(self, items: Iterable[WorkItem]) -> BatchSummary:
        """
        Probe every item and return the batch summary.

        Args:
            items: Work items, dispatched in order

        Returns:
            BatchSummary computed from the frozen partitions

        Raises:
            RuntimeError: If this driver has already run a batch
        """
        if self._state != BatchState.IDLE:
            raise RuntimeError(f"BatchDriver already used (state: {self._state.value})")

        items = list(items)
        if self._collector.total is None:
            self._collector.total = len(items)

        start = time.monotonic()
        self._state = BatchState.DISPATCHING
        logger.info(f"Dispatching {len(items)} probes (max {self._admission.max_concurrent} concurrent)")
        if self._emit:
            self._emit(
                ProbeEvent(
                    type=EventType.BATCH_STARTED,
                    total=len(items),
                    message=f"Probing {len(items)} items",
                )
            )

        for item in items:
            await self._admission.acquire()
            try:
                task = asyncio.create_task(self._worker(item), name=f"probe-{item.id}")
            except BaseException:
                self._admission.release()
                raise
            self._workers.append(task)

        self._state = BatchState.DRAINING
        logger.debug(f"All {len(items)} probes dispatched, waiting for workers")
        if self._emit:
            self._emit(
                ProbeEvent(
                    type=EventType.DISPATCH_COMPLETE,
                    total=len(items),
                    message="All probes dispatched",
                )
            )

        outcomes = await asyncio.gather(*self._workers, return_exceptions=True)
        for task, outcome in zip(self._workers, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Worker {task.get_name()} failed: {outcome!r}")

        self._collector.freeze()
        self._state = BatchState.COMPLETE

        supported, unsupported, dropped = self._collector.counts()
        summary = BatchSummary(
            total=len(items),
            supported_count=supported,
            unsupported_count=unsupported,
            dropped_count=len(items) - supported - unsupported,
            duration_seconds=time.monotonic() - start,
        )
        if summary.dropped_count != dropped:
            logger.warning(f"{summary.dropped_count - dropped} results lost outside the collector")

        logger.info(
            f"Batch complete: {summary.supported_count} supported, "
            f"{summary.unsupported_count} unsupported, {summary.dropped_count} dropped "
            f"in {summary.duration_seconds:.2f}s"
        )
        if self._emit:
            self._emit(
                ProbeEvent(
                    type=EventType.BATCH_COMPLETED,
                    total=summary.total,
                    current=summary.recorded_count,
                    message=(
                        f"{summary.supported_count} supported, "
                        f"{summary.unsupported_count} unsupported"
                    ),
                )
            )
        return summary
