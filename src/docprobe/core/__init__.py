"""Batch probe engine: parsing, probing, collection and dispatch."""

from .checker import SupportChecker, check_blocking
from .collector import PartitionWriter, ResultCollector
from .driver import BatchDriver
from .items import ParsedInput, load_work_items, parse_work_items
from .probe import Prober, build_probe_url

__all__ = [
    "BatchDriver",
    "ParsedInput",
    "PartitionWriter",
    "Prober",
    "ResultCollector",
    "SupportChecker",
    "build_probe_url",
    "check_blocking",
    "load_work_items",
    "parse_work_items",
]
