#!/usr/bin/env python3
"""
tt - a tiny task tracker backed by a flat file in the current directory.

Usage:
    tt.py add <title words...> [-p H|M|L] [-d YYYY-MM-DD]
    tt.py list [--all|--pending|--done] [--sort=due|priority|id]
    tt.py done <id>
    tt.py rm <id>
    tt.py clear [--done|--all]
    tt.py help

Each command has its own parser behind a REMAINDER top-level parser, rather
than add_subparsers, because 'add' needs parse_intermixed_args (title words
mixed with -p/-d), which argparse refuses on a parser that has subparsers.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from task_query import DEFAULT_SORT_KEY, ListFilter, select_tasks
from task_record import Task
from task_store import (
    ClearScope,
    add_task,
    clear_tasks,
    complete_task,
    load_tasks,
    remove_task,
)
from utils import (
    DATA_FILE_NAME,
    TaskTrackerError,
    UnknownArgumentError,
    get_tasks_file,
    parse_task_id,
)

logger = logging.getLogger(__name__)

HELP_TEXT = f"""\
Task Tracker (tt)

Usage:
  tt add <title words...> [-p H|M|L] [-d YYYY-MM-DD]
  tt list [--all|--pending|--done] [--sort=due|priority|id]
  tt done <id>
  tt rm <id>
  tt clear [--done|--all]
  tt help

Global options (before the command):
  --file PATH     Use PATH instead of ./{DATA_FILE_NAME}
  -v, --verbose   Log store activity (including dropped corrupt lines) to stderr

Notes:
  - 'tt list' shows ALL tasks by default. Completed ones display as [x].
  - Use --pending to show only pending, or --done to show only completed.
  - Pending tasks always sort before completed ones.

Data file: {DATA_FILE_NAME} (in current directory)
"""


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors instead of exiting with status 2."""

    def error(self, message):
        raise UnknownArgumentError(f"{self.prog}: {message}")


def format_task(task: Task) -> str:
    checkbox = '[x]' if task.done else '[ ]'
    due = task.due if task.due is not None else '--'
    # Undecodable bytes from the data file show up as U+FFFD
    title = task.title.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')
    return f"{task.id:>3}  {checkbox}  {task.priority}  {due}  {title}"


# -------------------- command handlers --------------------

def cmd_add(args):
    """Add a task; title words may be interleaved with -p / -d."""
    priority = args.priority.upper()[:1] if args.priority is not None else 'M'
    task = add_task(args.tasks_file, ' '.join(args.title), priority=priority, due=args.due)
    print(f"✅ Added task #{task.id}")


def cmd_list(args):
    tasks = load_tasks(args.tasks_file)
    for task in select_tasks(tasks, args.list_filter, args.sort):
        print(format_task(task))


def cmd_done(args):
    task_id = parse_task_id(args.id)
    complete_task(args.tasks_file, task_id)
    print(f"✅ Marked #{task_id} done.")


def cmd_rm(args):
    task_id = parse_task_id(args.id)
    remove_task(args.tasks_file, task_id)
    print(f"✅ Removed #{task_id}.")


def cmd_clear(args):
    scope = ClearScope.ALL if args.all else ClearScope.DONE
    clear_tasks(args.tasks_file, scope)
    if scope is ClearScope.ALL:
        print("✅ Cleared all tasks.")
    else:
        print("✅ Cleared completed tasks.")


# -------------------- parsers --------------------

def _command_parser(name: str, help_text: str) -> CommandParser:
    return CommandParser(prog=f'tt {name}', description=help_text, add_help=False, allow_abbrev=False)


def build_command_parsers() -> dict[str, CommandParser]:
    parsers = {}

    add_parser = _command_parser('add', 'Add a task')
    add_parser.add_argument('title', nargs='*', help='Task title words')
    add_parser.add_argument('-p', dest='priority', metavar='H|M|L', help='Priority (default M)')
    add_parser.add_argument('-d', dest='due', metavar='YYYY-MM-DD', help='Due date')
    add_parser.set_defaults(func=cmd_add)
    parsers['add'] = add_parser

    list_parser = _command_parser('list', 'List tasks')
    list_parser.add_argument('--all', dest='list_filter', action='store_const', const=ListFilter.ALL)
    list_parser.add_argument('--pending', dest='list_filter', action='store_const', const=ListFilter.PENDING)
    list_parser.add_argument('--done', dest='list_filter', action='store_const', const=ListFilter.DONE)
    list_parser.add_argument('--sort', default=DEFAULT_SORT_KEY, metavar='due|priority|id')
    list_parser.set_defaults(func=cmd_list, list_filter=ListFilter.ALL)
    parsers['list'] = list_parser

    done_parser = _command_parser('done', 'Mark a task as done')
    done_parser.add_argument('id', help='Task id')
    done_parser.set_defaults(func=cmd_done)
    parsers['done'] = done_parser

    rm_parser = _command_parser('rm', 'Remove a task')
    rm_parser.add_argument('id', help='Task id')
    rm_parser.set_defaults(func=cmd_rm)
    parsers['rm'] = rm_parser

    clear_parser = _command_parser('clear', 'Remove completed (or all) tasks')
    clear_parser.add_argument('--done', action='store_true', help='Remove completed tasks (default)')
    clear_parser.add_argument('--all', action='store_true', help='Remove every task')
    clear_parser.set_defaults(func=cmd_clear)
    parsers['clear'] = clear_parser

    return parsers


def build_parser() -> CommandParser:
    parser = CommandParser(prog='tt', description='Task Tracker CLI', add_help=False, allow_abbrev=False)
    parser.add_argument('-h', '--help', action='store_true')
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument('--file', help=f'Data file (default ./{DATA_FILE_NAME})')
    parser.add_argument('command', nargs='?')
    parser.add_argument('args', nargs=argparse.REMAINDER)
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except TaskTrackerError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if args.help or args.command in (None, 'help'):
        print(HELP_TEXT, end='')
        return 0

    parsers = build_command_parsers()
    command_parser = parsers.get(args.command)
    if command_parser is None:
        print("❌ Unknown command. Try 'tt help'.", file=sys.stderr)
        return 1

    try:
        if args.command == 'add':
            command_args = command_parser.parse_intermixed_args(args.args)
        else:
            command_args = command_parser.parse_args(args.args)
        command_args.tasks_file = get_tasks_file(args.file)
        logger.debug(f"Running '{args.command}' against {command_args.tasks_file}")
        command_args.func(command_args)
    except TaskTrackerError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
