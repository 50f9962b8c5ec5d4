"""
Command processor.

apply(state, command) -> new state. Pure and synchronous: no I/O, no
hidden state. Every handler is total: a semester, course or lecture that
does not exist turns the command into a no-op and the input state object
is returned as-is.

Only the path from the root to the touched branch is rebuilt. Untouched
semesters, courses and lectures are the same objects in the old and new
state.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Hashable, Mapping, Optional, Tuple, TypeVar

from schedule_store.commands import (
    AddCourse,
    AddLecture,
    AddSemester,
    Command,
    RemoveCourse,
    RemoveLecture,
    command_from_dict,
)
from schedule_store.errors import InvalidStateError, UnknownCommandError
from schedule_store.model import Course, Lecture, ScheduleState, Semester, initial_state

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Sequence helpers
# ---------------------------------------------------------------------------


def _upsert_front(items: Tuple[T, ...], item: T, key: Callable[[T], Hashable]) -> Tuple[T, ...]:
    """
    New item first, then every existing item with a different key.

    One pass over `items`; relative order of the rest is kept.
    """
    k = key(item)
    return (item,) + tuple(x for x in items if key(x) != k)


def _without(items: Tuple[T, ...], k: Hashable, key: Callable[[T], Hashable]) -> Optional[Tuple[T, ...]]:
    """
    Items whose key differs from `k`, in order.

    Returns None when nothing was removed so callers can keep the old value.
    """
    kept = tuple(x for x in items if key(x) != k)
    if len(kept) == len(items):
        return None
    return kept


def _course_code(course: Course) -> str:
    return course.code


def _lecture_key(lecture: Lecture) -> Tuple[int, int]:
    return lecture.key


# ---------------------------------------------------------------------------
# Path rebuilding
# ---------------------------------------------------------------------------


def _with_semester(state: ScheduleState, semester: Semester) -> ScheduleState:
    schedule = dict(state.schedule)
    schedule[semester.id] = semester
    return ScheduleState(schedule=schedule)


def _find_course(semester: Semester, code: str) -> Optional[int]:
    for i, course in enumerate(semester.courses):
        if course.code == code:
            return i
    return None


def _with_course_at(semester: Semester, index: int, course: Course) -> Semester:
    courses = semester.courses[:index] + (course,) + semester.courses[index + 1:]
    return replace(semester, courses=courses)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _add_semester(state: ScheduleState, cmd: AddSemester) -> ScheduleState:
    return _with_semester(state, cmd.semester)


def _add_course(state: ScheduleState, cmd: AddCourse) -> ScheduleState:
    semester = state.schedule.get(cmd.semester)
    if semester is None:
        logger.debug("ADD_COURSE %s: no semester %r", cmd.course.code, cmd.semester)
        return state
    courses = _upsert_front(semester.courses, cmd.course, _course_code)
    return _with_semester(state, replace(semester, courses=courses))


def _remove_course(state: ScheduleState, cmd: RemoveCourse) -> ScheduleState:
    semester = state.schedule.get(cmd.semester)
    if semester is None:
        logger.debug("REMOVE_COURSE %s: no semester %r", cmd.course_code, cmd.semester)
        return state
    courses = _without(semester.courses, cmd.course_code, _course_code)
    if courses is None:
        logger.debug("REMOVE_COURSE: no course %r in %r", cmd.course_code, cmd.semester)
        return state
    return _with_semester(state, replace(semester, courses=courses))


def _add_lecture(state: ScheduleState, cmd: AddLecture) -> ScheduleState:
    semester = state.schedule.get(cmd.semester)
    if semester is None:
        logger.debug("ADD_LECTURE: no semester %r", cmd.semester)
        return state
    index = _find_course(semester, cmd.course_code)
    if index is None:
        logger.debug("ADD_LECTURE: no course %r in %r", cmd.course_code, cmd.semester)
        return state

    course = semester.courses[index]
    lectures = _upsert_front(course.lectures, cmd.lecture, _lecture_key)
    course = replace(course, lectures=lectures)
    return _with_semester(state, _with_course_at(semester, index, course))


def _remove_lecture(state: ScheduleState, cmd: RemoveLecture) -> ScheduleState:
    semester = state.schedule.get(cmd.semester)
    if semester is None:
        logger.debug("REMOVE_LECTURE: no semester %r", cmd.semester)
        return state
    index = _find_course(semester, cmd.course_code)
    if index is None:
        logger.debug("REMOVE_LECTURE: no course %r in %r", cmd.course_code, cmd.semester)
        return state

    course = semester.courses[index]
    lectures = _without(course.lectures, (cmd.day, cmd.start_time), _lecture_key)
    if lectures is None:
        logger.debug(
            "REMOVE_LECTURE: no lecture (%d, %d) in %r/%r", cmd.day, cmd.start_time, cmd.semester, cmd.course_code
        )
        return state
    course = replace(course, lectures=lectures)
    return _with_semester(state, _with_course_at(semester, index, course))


_HANDLERS: dict[type, Callable[[ScheduleState, Any], ScheduleState]] = {
    AddSemester: _add_semester,
    AddCourse: _add_course,
    RemoveCourse: _remove_course,
    AddLecture: _add_lecture,
    RemoveLecture: _remove_lecture,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def normalize_state(state: ScheduleState | Mapping[str, Any] | None) -> ScheduleState:
    """
    Accept None (-> empty schedule), a ScheduleState, or its dict shape.
    """
    if state is None:
        return initial_state()
    if isinstance(state, ScheduleState):
        return state
    if isinstance(state, Mapping):
        return ScheduleState.from_dict(state)
    raise InvalidStateError(f"state must be a ScheduleState or mapping, got {type(state).__name__}")


def apply(state: ScheduleState | Mapping[str, Any] | None, command: Command | Mapping[str, Any]) -> ScheduleState:
    """
    Apply one command and return the resulting state.

    `command` is a Command dataclass or its dict shape. Dicts with a tag
    outside the vocabulary leave the state unchanged; anything else that
    is not a command raises UnknownCommandError.
    """
    current = normalize_state(state)

    if isinstance(command, Mapping):
        parsed = command_from_dict(command)
        if parsed is None:
            logger.debug("ignoring command with foreign tag %r", command.get("type"))
            return current
        command = parsed

    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise UnknownCommandError(f"not a schedule command: {command!r}")

    new_state = handler(current, command)
    if new_state is not current:
        logger.debug("applied %s", command.type.value)
    return new_state
