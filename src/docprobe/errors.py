"""Exception hierarchy for docprobe.

Only configuration errors stop a batch. Probe failures and result write
failures are isolated to the item that caused them and never raised here.
"""

from pathlib import Path
from typing import Optional


class DocprobeError(Exception):
    """Base exception for all docprobe errors."""


class ConfigurationError(DocprobeError):
    """Invalid configuration detected before dispatch (e.g. max_concurrent < 1)."""


class InputFileError(ConfigurationError):
    """The input list could not be read at all."""

    def __init__(self, path: Path, reason: Optional[str] = None) -> None:
        message = f"Cannot read input file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason
