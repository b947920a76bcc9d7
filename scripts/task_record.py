#!/usr/bin/env python3
"""
Task record type and its one-line encoding.

Line format (one task per line, no header):

    id|done|priority|due-or-dash|title

    3|0|H|2026-02-01|Renew passport
    4|1|M|-|Call the plumber

Titles are sanitized on encode, not escaped: '|' becomes '/', and newline /
carriage-return characters are deleted. Decoding therefore takes the title
verbatim and never has anything to unescape.
"""

import logging
from dataclasses import dataclass

from utils import (
    DEFAULT_PRIORITY,
    FIELD_SEP,
    NO_DUE,
    PRIORITIES,
    SEP_SUBSTITUTE,
)

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


@dataclass
class Task:
    id: int
    title: str
    done: bool = False
    priority: str = DEFAULT_PRIORITY
    due: str | None = None


def sanitize_title(title: str) -> str:
    """Make a title safe for a single record line (lossy on '|')."""
    return title.replace(FIELD_SEP, SEP_SUBSTITUTE).replace('\n', '').replace('\r', '')


def encode_task(task: Task) -> str:
    """Encode a task as one record line (without the trailing newline)."""
    fields = [
        str(task.id),
        '1' if task.done else '0',
        task.priority,
        task.due if task.due is not None else NO_DUE,
        sanitize_title(task.title),
    ]
    return FIELD_SEP.join(fields)


def decode_line(line: str) -> Task | None:
    """Decode one record line.

    Returns None for lines that should be skipped: blank lines, lines with
    fewer than five fields, and lines whose id field is not an integer.
    """
    if not line.strip():
        return None

    parts = line.split(FIELD_SEP)
    # A trailing delimiter does not open another field: "1|0|M|-|" is a short row
    if parts[-1] == '':
        parts.pop()
    if len(parts) < FIELD_COUNT:
        logger.debug(f"Short record ({len(parts)} fields): {line!r}")
        return None

    raw_id, raw_done, raw_priority, raw_due, title = parts[:FIELD_COUNT]
    try:
        task_id = int(raw_id)
    except ValueError:
        logger.debug(f"Non-numeric id {raw_id!r}: {line!r}")
        return None

    priority = raw_priority[:1]
    if priority not in PRIORITIES:
        priority = DEFAULT_PRIORITY

    return Task(
        id=task_id,
        title=title,
        done=raw_done == '1',
        priority=priority,
        due=None if raw_due == NO_DUE else raw_due,
    )
