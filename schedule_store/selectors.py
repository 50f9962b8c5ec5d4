"""
Read-side helpers over a ScheduleState.

Lookups return None for anything that is not there, mirroring the no-op
policy of the reducer.

Conflict rule for lectures (same day):
    start < other_end AND end > other_start
"""

from __future__ import annotations

from typing import Optional

from schedule_store.model import Course, Lecture, ScheduleState, Semester

LectureRef = tuple[str, Lecture]


def get_semester(state: ScheduleState, semester_id: str) -> Optional[Semester]:
    return state.schedule.get(semester_id)


def get_course(state: ScheduleState, semester_id: str, code: str) -> Optional[Course]:
    semester = get_semester(state, semester_id)
    if semester is None:
        return None
    for course in semester.courses:
        if course.code == code:
            return course
    return None


def get_lecture(state: ScheduleState, semester_id: str, code: str, day: int, start_time: int) -> Optional[Lecture]:
    course = get_course(state, semester_id, code)
    if course is None:
        return None
    for lecture in course.lectures:
        if lecture.key == (day, start_time):
            return lecture
    return None


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def find_lecture_conflicts(semester: Semester) -> list[tuple[LectureRef, LectureRef]]:
    """
    Find overlapping lecture pairs (A, B) across all courses of a semester.

    Each pair appears once, in course/lecture order. Lectures without an
    end_time, without a (day, start_time) key, or with end_time <= start_time
    cannot be placed and are skipped. Touching endpoints (end == start) is not a conflict.
    """
    conflicts: list[tuple[LectureRef, LectureRef]] = []

    placed: list[LectureRef] = []
    for course in semester.courses:
        for lecture in course.lectures:
            if not lecture.has_key or lecture.end_time is None or lecture.end_time <= lecture.start_time:
                continue
            placed.append((course.code, lecture))

    # O(n^2) is fine for one semester
    for i in range(len(placed)):
        code1, l1 = placed[i]
        for j in range(i + 1, len(placed)):
            code2, l2 = placed[j]
            if l1.day != l2.day:
                continue
            if _overlaps(l1.start_time, l1.end_time, l2.start_time, l2.end_time):
                conflicts.append(((code1, l1), (code2, l2)))

    return conflicts
