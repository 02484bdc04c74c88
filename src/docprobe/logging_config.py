import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

# Console threshold for CLI runs without --verbose
DEFAULT_CONSOLE_LEVEL = "WARNING"


def _to_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    console_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up logging configuration for docprobe.

    Log records go to stderr so they never mix with the result lines and
    summary printed on stdout. The console handler can be quieter than the
    log file: a batch run keeps the console at WARNING while the file still
    receives every INFO record.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist
        console_level: Level for the console handler (default: same as level)
        stream: Console stream (default: sys.stderr)

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    file_level = _to_level(level)
    console_numeric = _to_level(console_level) if console_level else file_level

    logger = logging.getLogger("docprobe")
    logger.setLevel(min(file_level, console_numeric) if log_file else console_numeric)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        console_handler.setLevel(console_numeric)
        console_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(file_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    logger.propagate = False

    return logger
