"""
schedule_store: immutable semester/course/lecture schedule and the
commands that evolve it.
"""

from schedule_store.commands import (
    AddCourse,
    AddLecture,
    AddSemester,
    Command,
    CommandType,
    RemoveCourse,
    RemoveLecture,
    command_from_dict,
    command_to_dict,
)
from schedule_store.errors import (
    InvalidStateError,
    MalformedCommandError,
    ScheduleStoreError,
    UnknownCommandError,
)
from schedule_store.model import Course, Lecture, ScheduleState, Semester, initial_state
from schedule_store.reducer import apply
from schedule_store.store import ScheduleStore

__all__ = [
    "AddCourse",
    "AddLecture",
    "AddSemester",
    "Command",
    "CommandType",
    "Course",
    "InvalidStateError",
    "Lecture",
    "MalformedCommandError",
    "RemoveCourse",
    "RemoveLecture",
    "ScheduleState",
    "ScheduleStore",
    "ScheduleStoreError",
    "Semester",
    "UnknownCommandError",
    "apply",
    "command_from_dict",
    "command_to_dict",
    "initial_state",
]
