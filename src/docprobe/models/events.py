"""Event types emitted while a batch runs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from .items import Classification


class EventType(str, Enum):
    """Types of events emitted during a batch."""

    # Lifecycle events
    BATCH_STARTED = "batch_started"
    DISPATCH_COMPLETE = "dispatch_complete"
    BATCH_COMPLETED = "batch_completed"

    # Input phase
    ITEM_SKIPPED = "item_skipped"

    # Per-item outcomes
    PROBE_COMPLETED = "probe_completed"
    WRITE_FAILED = "write_failed"


@dataclass
class ProbeEvent:
    """
    Event emitted during a batch.

    Example:
        def on_event(event: ProbeEvent) -> None:
            if event.type == EventType.PROBE_COMPLETED:
                print(f"{event.current}/{event.total}: {event.item_id}")
    """

    type: EventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Common fields
    message: Optional[str] = None
    error: Optional[str] = None

    # Progress tracking
    current: Optional[int] = None
    total: Optional[int] = None

    # Per-item payload
    item_id: Optional[str] = None
    display_name: Optional[str] = None
    url: Optional[str] = None
    status_code: Optional[int] = None
    classification: Optional[Classification] = None
    line_number: Optional[int] = None

    @property
    def progress_percent(self) -> Optional[float]:
        """Calculate progress percentage if current and total are set."""
        if self.current is not None and self.total and self.total > 0:
            return (self.current / self.total) * 100
        return None

    @property
    def is_error(self) -> bool:
        return self.type == EventType.WRITE_FAILED


# Type alias for event emitter function
EventEmitter = Callable[[ProbeEvent], None]
