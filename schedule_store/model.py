"""
Central data model of the schedule tree.

    ScheduleState
      schedule: {semester_id: Semester}
        Semester.courses: (Course, ...)       ordered, unique by code
          Course.lectures: (Lecture, ...)     ordered, unique by (day, start_time)

All classes are frozen dataclasses holding tuples, so a state value can be
shared freely between callers. Attributes the engine does not interpret are
kept in `extra` and carried through unchanged.

The from_dict / to_dict helpers translate from and to the shape hosts use
({"schedule": {...}}, camelCase lecture fields). A value built by from_dict
remembers which keys it was given, in order, so to_dict hands back the same
shape (no added empty lists, no dropped None values). They are an interop
boundary, not a storage format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from schedule_store.errors import InvalidStateError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidStateError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _freeze(extra: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(extra or {}))


def _build_dict(
    standard: Iterable[Tuple[str, Any, bool]],
    extra: Mapping[str, Any],
    source_keys: Optional[Tuple[str, ...]],
) -> dict[str, Any]:
    """
    Assemble the dict shape of a model value.

    `standard` holds (key, value, canonical) triples. Without source keys a
    canonical entry is always written and the others only when set. With
    source keys the given keys come back in their original order; standard
    keys that were not given are only added once they hold something.
    """
    std = {key: value for key, value, _ in standard}
    out: dict[str, Any] = {}
    if source_keys is not None:
        for key in source_keys:
            if key in std:
                out[key] = std[key]
            elif key in extra:
                out[key] = extra[key]
    for key, value, canonical in standard:
        if key in out:
            continue
        if source_keys is None and canonical:
            out[key] = value
        elif value is not None and value != []:
            out[key] = value
    for key, value in extra.items():
        out.setdefault(key, value)
    return out


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is not None and not _is_int(value):
        raise InvalidStateError(f"lecture '{key}' must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Lecture:
    """
    One scheduled session of a course.

    day and start_time identify the lecture inside its course; end_time and
    format are payload. Times are minutes, as the host supplies them.

    A lecture installed as part of a course payload may lack day or
    start_time. Such a lecture has no key: ADD_LECTURE / REMOVE_LECTURE
    never match it and it does not count towards key uniqueness.
    """

    day: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    format: Optional[int] = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)
    source_keys: Optional[Tuple[str, ...]] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", _freeze(self.extra))

    @property
    def key(self) -> Tuple[Optional[int], Optional[int]]:
        return (self.day, self.start_time)

    @property
    def has_key(self) -> bool:
        return self.day is not None and self.start_time is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lecture":
        data = _require_mapping(data, "lecture")
        extra = {k: v for k, v in data.items() if k not in ("day", "startTime", "endTime", "format")}
        return cls(
            day=_optional_int(data, "day"),
            start_time=_optional_int(data, "startTime"),
            end_time=data.get("endTime"),
            format=data.get("format"),
            extra=extra,
            source_keys=tuple(data),
        )

    def to_dict(self) -> dict[str, Any]:
        standard = [
            ("day", self.day, True),
            ("startTime", self.start_time, True),
            ("endTime", self.end_time, False),
            ("format", self.format, False),
        ]
        if self.source_keys is None:
            # keyless lectures built in code have nothing to say about day/startTime
            standard = [(k, v, canonical and v is not None) for k, v, canonical in standard]
        return _build_dict(standard, self.extra, self.source_keys)


def _check_unique_lectures(code: str, lectures: Tuple[Lecture, ...]) -> None:
    seen: set = set()
    for lecture in lectures:
        if not lecture.has_key:
            continue
        if lecture.key in seen:
            raise InvalidStateError(f"course {code!r}: duplicate lecture (day, startTime) {lecture.key}")
        seen.add(lecture.key)


@dataclass(frozen=True)
class Course:
    """
    A course inside a semester, identified by its code.

    Raises InvalidStateError if two lectures share a (day, start_time) key.
    """

    code: str
    lectures: Tuple[Lecture, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)
    source_keys: Optional[Tuple[str, ...]] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lectures", tuple(self.lectures))
        object.__setattr__(self, "extra", _freeze(self.extra))
        _check_unique_lectures(self.code, self.lectures)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Course":
        data = _require_mapping(data, "course")
        code = data.get("code")
        if not isinstance(code, str) or not code:
            raise InvalidStateError(f"course needs a non-empty string 'code': {dict(data)!r}")
        lectures_raw = data.get("lectures") or []
        if not isinstance(lectures_raw, (list, tuple)):
            raise InvalidStateError(f"course {code!r}: 'lectures' must be a list")
        lectures = tuple(Lecture.from_dict(x) for x in lectures_raw)
        extra = {k: v for k, v in data.items() if k not in ("code", "lectures")}
        return cls(code=code, lectures=lectures, extra=extra, source_keys=tuple(data))

    def to_dict(self) -> dict[str, Any]:
        standard = [
            ("code", self.code, True),
            ("lectures", [x.to_dict() for x in self.lectures], True),
        ]
        return _build_dict(standard, self.extra, self.source_keys)


@dataclass(frozen=True)
class Semester:
    """
    A scheduling period.

    The display name is either `name` or the `name_en` / `name_fr` pair;
    the engine never looks at either. Raises InvalidStateError if two
    courses share a code.
    """

    id: str
    courses: Tuple[Course, ...] = ()
    name: Optional[str] = None
    name_en: Optional[str] = None
    name_fr: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)
    source_keys: Optional[Tuple[str, ...]] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "courses", tuple(self.courses))
        object.__setattr__(self, "extra", _freeze(self.extra))
        seen: set[str] = set()
        for course in self.courses:
            if course.code in seen:
                raise InvalidStateError(f"semester {self.id!r}: duplicate course code {course.code!r}")
            seen.add(course.code)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Semester":
        data = _require_mapping(data, "semester")
        sid = data.get("id")
        if not isinstance(sid, str) or not sid:
            raise InvalidStateError(f"semester needs a non-empty string 'id': {dict(data)!r}")
        courses_raw = data.get("courses") or []
        if not isinstance(courses_raw, (list, tuple)):
            raise InvalidStateError(f"semester {sid!r}: 'courses' must be a list")
        courses = tuple(Course.from_dict(x) for x in courses_raw)
        extra = {k: v for k, v in data.items() if k not in ("id", "courses", "name", "name_en", "name_fr")}
        return cls(
            id=sid,
            courses=courses,
            name=data.get("name"),
            name_en=data.get("name_en"),
            name_fr=data.get("name_fr"),
            extra=extra,
            source_keys=tuple(data),
        )

    def to_dict(self) -> dict[str, Any]:
        standard = [
            ("id", self.id, True),
            ("courses", [c.to_dict() for c in self.courses], True),
            ("name", self.name, False),
            ("name_en", self.name_en, False),
            ("name_fr", self.name_fr, False),
        ]
        return _build_dict(standard, self.extra, self.source_keys)


@dataclass(frozen=True)
class ScheduleState:
    """
    Root of the tree: semester id -> Semester.

    `schedule` is a read-only view; build a new ScheduleState to change it.
    """

    schedule: Mapping[str, Semester] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "schedule", MappingProxyType(dict(self.schedule)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScheduleState":
        data = _require_mapping(data, "state")
        raw = data.get("schedule") or {}
        raw = _require_mapping(raw, "schedule")
        schedule: dict[str, Semester] = {}
        for sid, sem_raw in raw.items():
            sem = Semester.from_dict(sem_raw)
            if sem.id != sid:
                raise InvalidStateError(f"semester stored under {sid!r} has id {sem.id!r}")
            schedule[sid] = sem
        return cls(schedule=schedule)

    def to_dict(self) -> dict[str, Any]:
        return {"schedule": {sid: sem.to_dict() for sid, sem in self.schedule.items()}}


def initial_state() -> ScheduleState:
    """Return the empty schedule ({"schedule": {}})."""
    return ScheduleState()
