"""
Command line front end for the schedule engine.

Replays a JSON list of commands from the empty schedule and shows the
result:

    schedule-store replay <commands.json> [--json]
    schedule-store conflicts <commands.json> <semester_id>

The commands file holds dicts in the host shape, e.g.

    [{"type": "ADD_SEMESTER", "semester": {"id": "s1", "courses": []}},
     {"type": "ADD_COURSE", "semester": "s1", "course": {"code": "c1"}}]
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from schedule_store.config import configure_logging
from schedule_store.errors import ScheduleStoreError
from schedule_store.model import Lecture, ScheduleState
from schedule_store.selectors import find_lecture_conflicts, get_semester
from schedule_store.store import ScheduleStore

logger = logging.getLogger(__name__)

console = Console()


def _load_commands(path: Path) -> list[Any]:
    """
    Load the command list. Raises ValueError with a printable message.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ValueError(f"File not found: {path}")
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"Cannot read {path}: {exc}")
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of commands")
    return data


def _replay(path: Path) -> ScheduleState:
    store = ScheduleStore()
    commands = _load_commands(path)
    for i, raw in enumerate(commands):
        if not isinstance(raw, dict):
            raise ValueError(f"command #{i} is not an object: {raw!r}")
        try:
            store.dispatch(raw)
        except ScheduleStoreError as exc:
            raise ValueError(f"command #{i}: {exc}")
    logger.debug("replayed %d commands from %s", len(commands), path)
    return store.state


def _fmt_lecture(lecture: Lecture) -> str:
    if not lecture.has_key:
        return ", ".join(f"{k}={v}" for k, v in lecture.extra.items()) or "(unscheduled lecture)"
    end = "?" if lecture.end_time is None else str(lecture.end_time)
    text = f"day {lecture.day}  {lecture.start_time}-{end}"
    if lecture.format is not None:
        text += f"  (format {lecture.format})"
    return text


def render_tree(state: ScheduleState) -> Tree:
    """
    Build a rich Tree of the schedule (semesters sorted by id, courses and
    lectures in stored order).
    """
    root = Tree("schedule")
    for sid in sorted(state.schedule):
        semester = state.schedule[sid]
        label = semester.name or semester.name_en or semester.name_fr or ""
        sem_node = root.add(f"[bold]{escape(sid)}[/bold] {escape(label)}".rstrip())
        for course in semester.courses:
            course_node = sem_node.add(escape(course.code))
            for lecture in course.lectures:
                course_node.add(escape(_fmt_lecture(lecture)))
    return root


def _cmd_replay(args: argparse.Namespace) -> int:
    try:
        state = _replay(Path(args.commands))
    except ValueError as exc:
        console.print(str(exc), markup=False)
        return 1

    if args.json:
        console.print_json(data=state.to_dict())
    else:
        console.print(render_tree(state))
    return 0


def _cmd_conflicts(args: argparse.Namespace) -> int:
    try:
        state = _replay(Path(args.commands))
    except ValueError as exc:
        console.print(str(exc), markup=False)
        return 1

    semester = get_semester(state, args.semester)
    if semester is None:
        console.print(f"Unknown semester: {args.semester}", markup=False)
        return 1

    confs = find_lecture_conflicts(semester)
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for (code_a, a), (code_b, b) in confs:
        console.print(f"- {code_a} {_fmt_lecture(a)}  <->  {code_b} {_fmt_lecture(b)}", markup=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Parser for the two sub-commands, replay and conflicts. Both take the
    path of a JSON command list; conflicts also takes a semester id.
    """
    parser = argparse.ArgumentParser(prog="schedule-store", description="Schedule state engine CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_replay = sub.add_parser("replay", help="Apply a command file and print the schedule")
    p_replay.add_argument("commands", type=str, help="JSON file with a list of commands")
    p_replay.add_argument("--json", action="store_true", help="Print the state as JSON")

    p_conf = sub.add_parser("conflicts", help="Show overlapping lectures in a semester")
    p_conf.add_argument("commands", type=str, help="JSON file with a list of commands")
    p_conf.add_argument("semester", type=str, help="Semester id")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Replay a command file and report on it.

    Always exits via SystemExit: 0 when the report was printed, 1 when the
    file could not be read, a command was malformed, or the semester is
    unknown.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else None)

    if args.command == "replay":
        raise SystemExit(_cmd_replay(args))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args))

    raise SystemExit(2)
