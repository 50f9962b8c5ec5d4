"""
Unit tests for building commands from their dict shape.
"""

import unittest

from schedule_store.commands import (
    AddCourse,
    AddLecture,
    AddSemester,
    CommandType,
    RemoveCourse,
    RemoveLecture,
    command_from_dict,
    command_to_dict,
    parse_tag,
)
from schedule_store.errors import MalformedCommandError
from schedule_store.model import Course, Lecture, Semester


class TestParseTag(unittest.TestCase):
    def test_bare_and_prefixed_tags(self) -> None:
        self.assertIs(parse_tag("ADD_COURSE"), CommandType.ADD_COURSE)
        self.assertIs(parse_tag("SCHEDULE_ADD_COURSE"), CommandType.ADD_COURSE)
        self.assertIs(parse_tag("schedule_remove_lecture"), CommandType.REMOVE_LECTURE)

    def test_unknown_tags(self) -> None:
        self.assertIsNone(parse_tag("SCHEDULE_CLEAR"))
        self.assertIsNone(parse_tag(None))
        self.assertIsNone(parse_tag(3))


class TestCommandFromDict(unittest.TestCase):
    def test_all_kinds(self) -> None:
        self.assertEqual(
            command_from_dict({"type": "ADD_SEMESTER", "semester": {"id": "s1", "courses": []}}),
            AddSemester(Semester(id="s1")),
        )
        self.assertEqual(
            command_from_dict({"type": "ADD_COURSE", "semester": "s1", "course": {"code": "c1"}}),
            AddCourse("s1", Course(code="c1")),
        )
        self.assertEqual(
            command_from_dict({"type": "REMOVE_COURSE", "semester": "s1", "courseCode": "c1"}),
            RemoveCourse("s1", "c1"),
        )
        self.assertEqual(
            command_from_dict(
                {"type": "ADD_LECTURE", "semester": "s1", "courseCode": "c1", "lecture": {"day": 1, "startTime": 0}}
            ),
            AddLecture("s1", "c1", Lecture(day=1, start_time=0)),
        )
        self.assertEqual(
            command_from_dict(
                {"type": "REMOVE_LECTURE", "semester": "s1", "courseCode": "c1", "day": 1, "startTime": 0}
            ),
            RemoveLecture("s1", "c1", 1, 0),
        )

    def test_foreign_tag_returns_none(self) -> None:
        self.assertIsNone(command_from_dict({"type": "SEARCH", "text": "x"}))
        self.assertIsNone(command_from_dict({}))

    def test_missing_fields(self) -> None:
        bad = [
            {"type": "ADD_SEMESTER"},
            {"type": "ADD_COURSE", "course": {"code": "c1"}},
            {"type": "REMOVE_COURSE", "semester": "s1"},
            {"type": "ADD_LECTURE", "semester": "s1", "courseCode": "c1"},
            {"type": "REMOVE_LECTURE", "semester": "s1", "courseCode": "c1", "day": 1},
        ]
        for data in bad:
            with self.subTest(data=data):
                with self.assertRaises(MalformedCommandError):
                    command_from_dict(data)

    def test_wrong_shapes(self) -> None:
        with self.assertRaises(MalformedCommandError):
            command_from_dict({"type": "REMOVE_LECTURE", "semester": "s1", "courseCode": "c1", "day": "Mon", "startTime": 0})
        with self.assertRaises(MalformedCommandError):
            command_from_dict({"type": "ADD_COURSE", "semester": "s1", "course": {"lectures": []}})
        with self.assertRaises(MalformedCommandError):
            command_from_dict({"type": "ADD_COURSE", "semester": 1, "course": {"code": "c1"}})

    def test_lecture_key_required_only_for_add_lecture(self) -> None:
        cmd = command_from_dict({"type": "ADD_COURSE", "semester": "s1", "course": {"code": "c1", "lectures": [{"name": "X"}]}})
        self.assertEqual(cmd, AddCourse("s1", Course(code="c1", lectures=(Lecture(extra={"name": "X"}),))))
        with self.assertRaises(MalformedCommandError):
            command_from_dict({"type": "ADD_LECTURE", "semester": "s1", "courseCode": "c1", "lecture": {"name": "X"}})
        with self.assertRaises(MalformedCommandError):
            AddLecture("s1", "c1", Lecture(day=1))

    def test_malformed_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            command_from_dict({"type": "ADD_SEMESTER"})


class TestCommandToDict(unittest.TestCase):
    def test_remove_lecture_shape(self) -> None:
        self.assertEqual(
            command_to_dict(RemoveLecture("s1", "c1", 2, 270)),
            {"type": "REMOVE_LECTURE", "semester": "s1", "courseCode": "c1", "day": 2, "startTime": 270},
        )

    def test_add_course_shape_parses_back(self) -> None:
        cmd = AddCourse("s1", Course(code="c1", lectures=(Lecture(day=1, start_time=0, end_time=90),)))
        self.assertEqual(command_from_dict(command_to_dict(cmd)), cmd)


if __name__ == "__main__":
    unittest.main()
