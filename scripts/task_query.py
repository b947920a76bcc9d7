#!/usr/bin/env python3
"""
Listing logic: order and filter an in-memory task list. No I/O.

Ordering, first decisive criterion wins:
  1. pending before done (always)
  2. the requested sort key: due | priority | id (unknown keys add nothing)
  3. due ascending (no due date sorts last), priority H < M < L, id ascending
"""

from enum import Enum

from task_record import Task
from utils import PRIORITY_WEIGHTS, SENTINEL_DUE

DEFAULT_SORT_KEY = 'due'


class ListFilter(Enum):
    ALL = 'all'
    PENDING = 'pending'
    DONE = 'done'


def _due_key(task: Task) -> str:
    return task.due if task.due is not None else SENTINEL_DUE


def _priority_key(task: Task) -> int:
    return PRIORITY_WEIGHTS.get(task.priority, PRIORITY_WEIGHTS['M'])


SORT_KEYS = {
    'due': _due_key,
    'priority': _priority_key,
    'id': lambda t: t.id,
}


def sort_tasks(tasks: list[Task], sort_key: str = DEFAULT_SORT_KEY) -> list[Task]:
    """Return a new, stably sorted list; the input is left untouched."""
    primary = SORT_KEYS.get(sort_key)

    def key(task: Task) -> tuple:
        promoted = (primary(task),) if primary else ()
        return (task.done, *promoted, _due_key(task), _priority_key(task), task.id)

    return sorted(tasks, key=key)


def filter_tasks(tasks: list[Task], list_filter: ListFilter = ListFilter.ALL) -> list[Task]:
    if list_filter is ListFilter.PENDING:
        return [t for t in tasks if not t.done]
    if list_filter is ListFilter.DONE:
        return [t for t in tasks if t.done]
    return list(tasks)


def select_tasks(
    tasks: list[Task],
    list_filter: ListFilter = ListFilter.ALL,
    sort_key: str = DEFAULT_SORT_KEY,
) -> list[Task]:
    """Sort first, then filter; the filter never influences ordering."""
    return filter_tasks(sort_tasks(tasks, sort_key), list_filter)
