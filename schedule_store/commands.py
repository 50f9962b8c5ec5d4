"""
Command vocabulary.

Five frozen dataclasses form a tagged union (`Command`). Hosts that speak
plain dicts ({"type": "ADD_COURSE", "semester": "s1", "course": {...}})
go through command_from_dict().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from schedule_store.config import ACTION_PREFIX
from schedule_store.errors import InvalidStateError, MalformedCommandError
from schedule_store.model import Course, Lecture, Semester, _is_int


class CommandType(Enum):
    ADD_SEMESTER = "ADD_SEMESTER"
    ADD_COURSE = "ADD_COURSE"
    REMOVE_COURSE = "REMOVE_COURSE"
    ADD_LECTURE = "ADD_LECTURE"
    REMOVE_LECTURE = "REMOVE_LECTURE"


@dataclass(frozen=True)
class AddSemester:
    """Insert or replace a whole semester (courses included)."""

    semester: Semester
    type = CommandType.ADD_SEMESTER


@dataclass(frozen=True)
class AddCourse:
    """Upsert a course into a semester and move it to the front."""

    semester: str
    course: Course
    type = CommandType.ADD_COURSE


@dataclass(frozen=True)
class RemoveCourse:
    semester: str
    course_code: str
    type = CommandType.REMOVE_COURSE


@dataclass(frozen=True)
class AddLecture:
    """Upsert a lecture into a course and move it to the front of the course's lectures."""

    semester: str
    course_code: str
    lecture: Lecture
    type = CommandType.ADD_LECTURE

    def __post_init__(self) -> None:
        if not (_is_int(self.lecture.day) and _is_int(self.lecture.start_time)):
            raise MalformedCommandError(
                f"{self.type.value}: lecture needs integer day and startTime, got {self.lecture.key}"
            )


@dataclass(frozen=True)
class RemoveLecture:
    semester: str
    course_code: str
    day: int
    start_time: int
    type = CommandType.REMOVE_LECTURE


Command = Union[AddSemester, AddCourse, RemoveCourse, AddLecture, RemoveLecture]


def parse_tag(tag: Any) -> Optional[CommandType]:
    """
    Map 'ADD_COURSE' or 'SCHEDULE_ADD_COURSE' to CommandType.ADD_COURSE.

    Returns None for anything outside the vocabulary.
    """
    if not isinstance(tag, str):
        return None
    name = tag.strip().upper()
    if name.startswith(ACTION_PREFIX):
        name = name[len(ACTION_PREFIX):]
    try:
        return CommandType(name)
    except ValueError:
        return None


def _field(data: Mapping[str, Any], key: str, tag: CommandType) -> Any:
    if key not in data or data[key] is None:
        raise MalformedCommandError(f"{tag.value}: missing required field {key!r}")
    return data[key]


def _str_field(data: Mapping[str, Any], key: str, tag: CommandType) -> str:
    value = _field(data, key, tag)
    if not isinstance(value, str):
        raise MalformedCommandError(f"{tag.value}: field {key!r} must be a string, got {value!r}")
    return value


def _int_field(data: Mapping[str, Any], key: str, tag: CommandType) -> int:
    value = _field(data, key, tag)
    if not _is_int(value):
        raise MalformedCommandError(f"{tag.value}: field {key!r} must be an integer, got {value!r}")
    return value


def command_from_dict(data: Mapping[str, Any]) -> Optional[Command]:
    """
    Build a command from its dict shape.

    Returns None when the tag is not one of ours, so hosts can route
    unrelated actions through the same entry point. Raises
    MalformedCommandError when a known tag lacks fields.
    """
    tag = parse_tag(data.get("type"))
    if tag is None:
        return None

    try:
        if tag is CommandType.ADD_SEMESTER:
            return AddSemester(semester=Semester.from_dict(_field(data, "semester", tag)))
        if tag is CommandType.ADD_COURSE:
            return AddCourse(
                semester=_str_field(data, "semester", tag),
                course=Course.from_dict(_field(data, "course", tag)),
            )
        if tag is CommandType.REMOVE_COURSE:
            return RemoveCourse(
                semester=_str_field(data, "semester", tag),
                course_code=_str_field(data, "courseCode", tag),
            )
        if tag is CommandType.ADD_LECTURE:
            return AddLecture(
                semester=_str_field(data, "semester", tag),
                course_code=_str_field(data, "courseCode", tag),
                lecture=Lecture.from_dict(_field(data, "lecture", tag)),
            )
        if tag is CommandType.REMOVE_LECTURE:
            return RemoveLecture(
                semester=_str_field(data, "semester", tag),
                course_code=_str_field(data, "courseCode", tag),
                day=_int_field(data, "day", tag),
                start_time=_int_field(data, "startTime", tag),
            )
    except InvalidStateError as exc:
        raise MalformedCommandError(f"{tag.value}: {exc}") from exc

    raise AssertionError(f"unhandled command type {tag!r}")


def command_to_dict(command: Command) -> dict[str, Any]:
    """Dict shape of a command, with the bare tag."""
    out: dict[str, Any] = {"type": command.type.value}
    if isinstance(command, AddSemester):
        out["semester"] = command.semester.to_dict()
    elif isinstance(command, AddCourse):
        out["semester"] = command.semester
        out["course"] = command.course.to_dict()
    elif isinstance(command, RemoveCourse):
        out["semester"] = command.semester
        out["courseCode"] = command.course_code
    elif isinstance(command, AddLecture):
        out["semester"] = command.semester
        out["courseCode"] = command.course_code
        out["lecture"] = command.lecture.to_dict()
    elif isinstance(command, RemoveLecture):
        out["semester"] = command.semester
        out["courseCode"] = command.course_code
        out["day"] = command.day
        out["startTime"] = command.start_time
    return out
