"""Parse the 'id displayName' input list into work items."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import InputFileError
from ..models.events import EventEmitter, EventType, ProbeEvent
from ..models.items import WorkItem

logger = logging.getLogger(__name__)


@dataclass
class ParsedInput:
    """
    Work items parsed from an input list.

    Attributes:
        items: Well-formed items, in input order
        skipped: 1-based line numbers of malformed lines
    """

    items: list[WorkItem] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)


def parse_work_items(
    lines: Iterable[str],
    emit: EventEmitter | None = None,
) -> ParsedInput:
    """
    Parse whitespace-separated 'id displayName' lines.

    The display name is the remainder of the line and may contain spaces.
    Blank lines and '#' comments are ignored. A line without a display
    name is skipped with a warning; it never aborts the batch.
    Duplicate ids are kept and probed independently.

    Args:
        lines: Input lines
        emit: Optional callback receiving ITEM_SKIPPED events

    Returns:
        ParsedInput with the items and the skipped line numbers
    """
    parsed = ParsedInput()

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(maxsplit=1)
        if len(parts) < 2:
            logger.warning(f"Skipping malformed line {line_number}: {line!r} (missing display name)")
            parsed.skipped.append(line_number)
            if emit:
                emit(
                    ProbeEvent(
                        type=EventType.ITEM_SKIPPED,
                        line_number=line_number,
                        item_id=parts[0],
                        message=f"Line {line_number} has no display name",
                    )
                )
            continue

        parsed.items.append(WorkItem(id=parts[0], display_name=parts[1], line_number=line_number))

    return parsed


def load_work_items(path: Path, emit: EventEmitter | None = None) -> ParsedInput:
    """
    Read and parse an input list file.

    Bytes that are not valid UTF-8 are replaced rather than rejected, so one
    bad line never loses the rest of the list.

    Raises:
        InputFileError: If the file is missing or unreadable
    """
    try:
        content = path.read_bytes()
    except FileNotFoundError as err:
        raise InputFileError(path, "file not found") from err
    except OSError as err:
        raise InputFileError(path, str(err)) from err

    text = content.decode("utf-8", errors="replace")
    if "\ufffd" in text:
        logger.warning(f"{path} is not valid UTF-8, undecodable bytes were replaced")

    parsed = parse_work_items(text.splitlines(), emit=emit)
    logger.info(f"Loaded {len(parsed.items)} items from {path} ({len(parsed.skipped)} lines skipped)")
    return parsed
