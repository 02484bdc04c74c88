"""Thread-safe collection of probe results into two partitions."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from types import TracebackType
from typing import TextIO

from ..models.events import EventEmitter, EventType, ProbeEvent
from ..models.items import Classification, ProbeResult

logger = logging.getLogger(__name__)


class PartitionWriter:
    """
    Line-oriented output file for one partition.

    Every line is flushed as soon as it is written. Entering the context
    truncates the file unless append is True.

    Example:
        with PartitionWriter(Path("supported_languages.txt")) as writer:
            writer.write_line("English (en): https://docs.oracle.com/en/cloud/")
    """

    def __init__(self, path: Path, append: bool = False) -> None:
        self.path = path
        self.append = append
        self._handle: TextIO | None = None

    def open(self) -> PartitionWriter:
        """
        Open the file without discarding existing content.

        Call reset() afterwards to start an empty partition. Keeping the two
        steps apart lets a caller open every partition before clearing any.
        """
        if self._handle is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.path, "a", encoding="utf-8")
        return self

    def reset(self) -> None:
        """Truncate the open file unless this writer appends."""
        if self._handle is not None and not self.append:
            self._handle.seek(0)
            self._handle.truncate()

    def write_line(self, line: str) -> None:
        """
        Write one line and flush it.

        Raises:
            OSError: If the underlying write fails
        """
        if self._handle is None:
            raise OSError(f"Partition file {self.path} is not open")
        self._handle.write(line + "\n")
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> PartitionWriter:
        self.open()
        self.reset()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class ResultCollector:
    """
    Owner of the supported and unsupported partitions.

    record() is the only way in. A single lock covers the file write, the
    in-memory append and the counters, so concurrent callers never interleave
    mid-line and each recorded result lands in exactly one partition once.
    Line order across workers is not preserved.

    The recorded counter doubles as live progress: it is shared by all
    workers, never copied into them.

    Example:
        collector = ResultCollector(total=len(items), emit=print_event)
        collector.record(result)
        collector.freeze()
        print(collector.supported)
    """

    def __init__(
        self,
        supported_writer: PartitionWriter | None = None,
        unsupported_writer: PartitionWriter | None = None,
        total: int | None = None,
        emit: EventEmitter | None = None,
    ) -> None:
        """
        Initialize the collector.

        Args:
            supported_writer: Optional file mirror for the supported partition
            unsupported_writer: Optional file mirror for the unsupported partition
            total: Expected number of results, used for progress events
            emit: Optional callback receiving PROBE_COMPLETED/WRITE_FAILED events
        """
        self._writers: dict[Classification, PartitionWriter | None] = {
            Classification.SUPPORTED: supported_writer,
            Classification.UNSUPPORTED: unsupported_writer,
        }
        self._partitions: dict[Classification, list[str]] = {
            Classification.SUPPORTED: [],
            Classification.UNSUPPORTED: [],
        }
        self.total = total
        self._emit = emit
        self._lock = threading.Lock()
        self._recorded = 0
        self._dropped = 0
        self._frozen = False

    @property
    def supported(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._partitions[Classification.SUPPORTED])

    @property
    def unsupported(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._partitions[Classification.UNSUPPORTED])

    @property
    def recorded(self) -> int:
        """Results handled so far, including dropped ones."""
        with self._lock:
            return self._recorded

    @property
    def frozen(self) -> bool:
        return self._frozen

    def counts(self) -> tuple[int, int, int]:
        """Snapshot of (supported, unsupported, dropped) counts."""
        with self._lock:
            return (
                len(self._partitions[Classification.SUPPORTED]),
                len(self._partitions[Classification.UNSUPPORTED]),
                self._dropped,
            )

    def record(self, result: ProbeResult) -> bool:
        """
        Append a result to its partition.

        A write failure drops this one result (logged, counted, WRITE_FAILED
        emitted) and leaves both partitions intact for everyone else.

        Returns:
            True if the result was recorded, False if it was dropped

        Raises:
            RuntimeError: If the collector has been frozen
        """
        line = result.format_line()
        partition = result.classification

        with self._lock:
            if self._frozen:
                raise RuntimeError("Cannot record into a frozen ResultCollector")

            error: OSError | None = None
            writer = self._writers[partition]
            try:
                if writer is not None:
                    writer.write_line(line)
            except OSError as e:
                error = e
                self._dropped += 1
            else:
                self._partitions[partition].append(line)

            self._recorded += 1
            current = self._recorded

        if error is not None:
            logger.error(f"Dropping result for {result.item.id}: failed to write {partition.value} line: {error}")
            if self._emit:
                self._emit(
                    ProbeEvent(
                        type=EventType.WRITE_FAILED,
                        item_id=result.item.id,
                        display_name=result.item.display_name,
                        url=result.url,
                        error=str(error),
                        current=current,
                        total=self.total,
                    )
                )
            return False

        if self._emit:
            self._emit(
                ProbeEvent(
                    type=EventType.PROBE_COMPLETED,
                    item_id=result.item.id,
                    display_name=result.item.display_name,
                    url=result.url,
                    status_code=result.status_code,
                    classification=result.classification,
                    error=result.error,
                    current=current,
                    total=self.total,
                )
            )
        return True

    def freeze(self) -> None:
        """Make the partitions read-only. Called once all workers have joined."""
        with self._lock:
            self._frozen = True
