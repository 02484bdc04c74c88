"""Concurrency management for docprobe."""

from .admission import AdmissionController

__all__ = [
    "AdmissionController",
]
