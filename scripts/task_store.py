#!/usr/bin/env python3
"""
Task store: whole-file load, mutate, whole-file save.

Every function takes the data file path explicitly. There is no locking and
no incremental write; each mutation rewrites the entire file.

The file is read and written as UTF-8 with surrogateescape, so bytes that
are not valid UTF-8 (a Latin-1 title typed in an editor) load without error
and are written back unchanged.
"""

import logging
import os
import stat
import tempfile
from enum import Enum
from pathlib import Path

from task_record import Task, decode_line, encode_task
from utils import (
    DEFAULT_PRIORITY,
    PRIORITIES,
    NotFoundError,
    ValidationError,
    is_valid_date,
)

logger = logging.getLogger(__name__)

ENCODING = 'utf-8'
ENCODING_ERRORS = 'surrogateescape'


class ClearScope(Enum):
    DONE = 'done'
    ALL = 'all'


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write(path: Path, content: str) -> None:
    """Write content atomically via tempfile + rename.

    A symlinked path is written through to its target, and the target keeps
    its permission bits (new files get the usual umask-derived mode).
    """
    target = path.resolve()
    if target.exists():
        mode = stat.S_IMODE(target.stat().st_mode)
    else:
        mode = _new_file_mode()
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix='.tmp')
    try:
        os.write(fd, content.encode(ENCODING, ENCODING_ERRORS))
        os.close(fd)
        fd = -1
        os.chmod(tmp, mode)
        os.replace(tmp, target)
    except Exception:
        if fd >= 0:
            try:
                os.close(fd)
            except OSError:
                pass
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def load_tasks(path: Path) -> list[Task]:
    """Load every decodable task from path, in file order.

    A missing file is an empty store. Corrupt lines are dropped; they only
    show up on the logging channel and disappear on the next save.
    """
    if not path.exists():
        logger.debug(f"No data file at {path}; starting empty")
        return []

    content = path.read_text(encoding=ENCODING, errors=ENCODING_ERRORS)
    tasks = []
    for lineno, line in enumerate(content.split('\n'), start=1):
        task = decode_line(line)
        if task is None:
            if line.strip():
                logger.info(f"Dropping corrupt line {lineno} in {path.name}: {line!r}")
            continue
        tasks.append(task)
    logger.debug(f"Loaded {len(tasks)} task(s) from {path}")
    return tasks


def save_tasks(path: Path, tasks: list[Task]) -> None:
    """Rewrite path from tasks, one line per task, in the given order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = ''.join(encode_task(t) + '\n' for t in tasks)
    _atomic_write(path, content)
    logger.debug(f"Saved {len(tasks)} task(s) to {path}")


def next_id(tasks: list[Task]) -> int:
    """1 + highest id in tasks, never below 1 (so ids restart after a full clear)."""
    return max([0, *(t.id for t in tasks)]) + 1


def add_task(path: Path, title: str, priority: str = DEFAULT_PRIORITY, due: str | None = None) -> Task:
    """Validate, append and persist a new task. Returns the created task."""
    title = title.strip()
    if not title:
        raise ValidationError("Title required.")
    if priority not in PRIORITIES:
        raise ValidationError("Invalid priority. Use H/M/L.")
    if due is not None and not is_valid_date(due):
        raise ValidationError("Invalid date, expected YYYY-MM-DD.")

    tasks = load_tasks(path)
    task = Task(id=next_id(tasks), title=title, priority=priority, due=due)
    tasks.append(task)
    save_tasks(path, tasks)
    logger.info(f"Added task #{task.id}")
    return task


def complete_task(path: Path, task_id: int) -> Task:
    """Mark the first task with task_id as done and persist."""
    tasks = load_tasks(path)
    for task in tasks:
        if task.id == task_id:
            task.done = True
            save_tasks(path, tasks)
            logger.info(f"Completed task #{task_id}")
            return task
    raise NotFoundError("Task not found.")


def remove_task(path: Path, task_id: int) -> int:
    """Remove every task carrying task_id and persist. Returns the count removed."""
    tasks = load_tasks(path)
    kept = [t for t in tasks if t.id != task_id]
    removed = len(tasks) - len(kept)
    if not removed:
        raise NotFoundError("Task not found.")
    save_tasks(path, kept)
    logger.info(f"Removed {removed} task(s) with id #{task_id}")
    return removed


def clear_tasks(path: Path, scope: ClearScope = ClearScope.DONE) -> int:
    """Drop completed tasks (or all tasks) and persist. Always succeeds."""
    tasks = load_tasks(path)
    if scope is ClearScope.ALL:
        kept = []
    else:
        kept = [t for t in tasks if not t.done]
    save_tasks(path, kept)
    removed = len(tasks) - len(kept)
    logger.info(f"Cleared {removed} task(s) (scope={scope.value})")
    return removed
