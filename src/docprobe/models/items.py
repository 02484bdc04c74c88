"""Work items, probe results and batch summaries."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Status code recorded when the probe never got an HTTP response
TRANSPORT_FAILURE_STATUS = 0


class Classification(str, Enum):
    """Outcome of probing a single work item."""

    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"


class BatchState(str, Enum):
    """Lifecycle of a single batch run."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    DRAINING = "draining"
    COMPLETE = "complete"


@dataclass(frozen=True)
class WorkItem:
    """
    One unit of input to be probed.

    Attributes:
        id: Identifier substituted into the probe URL (e.g. a language code)
        display_name: Human-readable name used in result lines
        line_number: 1-based line in the input file, if parsed from one
    """

    id: str
    display_name: str
    line_number: Optional[int] = None


@dataclass(frozen=True)
class ProbeResult:
    """
    Immutable outcome of probing one WorkItem.

    Attributes:
        item: The probed work item
        url: The URL that was requested
        status_code: HTTP status, or TRANSPORT_FAILURE_STATUS if no response
        classification: SUPPORTED iff status_code == 200
        error: Short diagnostic for transport failures
        elapsed: Seconds spent on the probe
    """

    item: WorkItem
    url: str
    status_code: int
    classification: Classification
    error: Optional[str] = None
    elapsed: float = 0.0

    @classmethod
    def from_status(cls, item: WorkItem, url: str, status_code: int, elapsed: float = 0.0) -> "ProbeResult":
        """Classify an observed HTTP status."""
        classification = Classification.SUPPORTED if status_code == 200 else Classification.UNSUPPORTED
        return cls(
            item=item,
            url=url,
            status_code=status_code,
            classification=classification,
            elapsed=elapsed,
        )

    @classmethod
    def failed(cls, item: WorkItem, url: str, error: str, elapsed: float = 0.0) -> "ProbeResult":
        """Build an UNSUPPORTED result for a probe that got no response."""
        return cls(
            item=item,
            url=url,
            status_code=TRANSPORT_FAILURE_STATUS,
            classification=Classification.UNSUPPORTED,
            error=error,
            elapsed=elapsed,
        )

    @property
    def is_supported(self) -> bool:
        return self.classification == Classification.SUPPORTED

    def format_line(self) -> str:
        """Render the partition line for this result."""
        line = f"{self.item.display_name} ({self.item.id}): {self.url}"
        if self.is_supported:
            return line
        return f"{line} [{self.status_code}]"


@dataclass(frozen=True)
class BatchSummary:
    """
    Counts for a completed batch.

    Computed only after every worker has joined, so
    supported_count + unsupported_count + dropped_count == total.
    """

    total: int
    supported_count: int
    unsupported_count: int
    dropped_count: int = 0
    skipped_lines: int = 0
    duration_seconds: float = 0.0

    @property
    def recorded_count(self) -> int:
        return self.supported_count + self.unsupported_count

    def to_dict(self) -> dict:
        """Convert summary to dictionary for serialization."""
        return {
            "total": self.total,
            "supported": self.supported_count,
            "unsupported": self.unsupported_count,
            "dropped": self.dropped_count,
            "skipped_lines": self.skipped_lines,
            "duration_seconds": round(self.duration_seconds, 2),
        }
