"""
docprobe - Check which language codes a documentation site serves.

Usage:
    from docprobe import ProbeConfig, SupportChecker

    config = ProbeConfig(input_file=Path("languages.txt"), max_concurrent=20)

    async with SupportChecker(config) as checker:
        summary = await checker.run()

    print(summary.to_dict())
"""

__version__ = "1.0.0"

from .concurrency import AdmissionController
from .core import (
    BatchDriver,
    PartitionWriter,
    Prober,
    ResultCollector,
    SupportChecker,
    build_probe_url,
    check_blocking,
    load_work_items,
    parse_work_items,
)
from .errors import ConfigurationError, DocprobeError, InputFileError
from .models import (
    BatchState,
    BatchSummary,
    Classification,
    EventType,
    NetworkConfig,
    OutputConfig,
    ProbeConfig,
    ProbeEvent,
    ProbeResult,
    WorkItem,
)

__all__ = [
    "__version__",
    # Core
    "SupportChecker",
    "check_blocking",
    "BatchDriver",
    "AdmissionController",
    "Prober",
    "ResultCollector",
    "PartitionWriter",
    "build_probe_url",
    "load_work_items",
    "parse_work_items",
    # Config
    "ProbeConfig",
    "NetworkConfig",
    "OutputConfig",
    # Models
    "WorkItem",
    "ProbeResult",
    "Classification",
    "BatchState",
    "BatchSummary",
    # Events
    "EventType",
    "ProbeEvent",
    # Errors
    "DocprobeError",
    "ConfigurationError",
    "InputFileError",
]
