#!/usr/bin/env python3
"""
Shared utilities for the tt task tracker.

The data file location is never read from the environment; callers resolve
it once (see get_tasks_file) and pass the Path explicitly to the store.
"""

from pathlib import Path

DATA_FILE_NAME = "tasks.tsv"

# Record format
FIELD_SEP = '|'
SEP_SUBSTITUTE = '/'
NO_DUE = '-'

PRIORITIES = ('H', 'M', 'L')
DEFAULT_PRIORITY = 'M'
PRIORITY_WEIGHTS = {
    'H': 0,
    'M': 1,
    'L': 2,
}

# Sorts after every real YYYY-MM-DD value
SENTINEL_DUE = '9999-99-99'


class TaskTrackerError(Exception):
    """Base class for errors reported to the user (exit status 1)."""


class ValidationError(TaskTrackerError):
    """Bad priority, due date, empty title, or unparseable id."""


class NotFoundError(TaskTrackerError):
    """No task carries the requested id."""


class UnknownArgumentError(TaskTrackerError):
    """Unrecognized flag, argument, or command."""


def get_tasks_file(override: str | None = None) -> Path:
    """Return the data file path: the override if given, else ./tasks.tsv."""
    if override:
        return Path(override).expanduser()
    return Path.cwd() / DATA_FILE_NAME


def is_valid_date(value: str) -> bool:
    """Check YYYY-MM-DD *shape* only; 2025-13-99 is accepted."""
    if len(value) != 10 or value[4] != '-' or value[7] != '-':
        return False
    return all(c in '0123456789' for i, c in enumerate(value) if i not in (4, 7))


def parse_task_id(raw: str) -> int:
    """Parse a user-supplied id; only non-negative ASCII integers are valid."""
    raw = raw.strip()
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise ValidationError("Invalid id.")
    return int(raw)
