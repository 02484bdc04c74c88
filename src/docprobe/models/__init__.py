"""Docprobe configuration, item and event models."""

from .config import DEFAULT_BASE_URL, NetworkConfig, OutputConfig, ProbeConfig
from .events import EventEmitter, EventType, ProbeEvent
from .items import (
    TRANSPORT_FAILURE_STATUS,
    BatchState,
    BatchSummary,
    Classification,
    ProbeResult,
    WorkItem,
)

__all__ = [
    # Config
    "DEFAULT_BASE_URL",
    "NetworkConfig",
    "OutputConfig",
    "ProbeConfig",
    # Events
    "EventEmitter",
    "EventType",
    "ProbeEvent",
    # Items
    "TRANSPORT_FAILURE_STATUS",
    "BatchState",
    "BatchSummary",
    "Classification",
    "ProbeResult",
    "WorkItem",
]
