"""
Tests for the CLI entry point.

Command files are written to a temporary directory; the CLI replays them
from an empty schedule.
"""

import io
import json
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

import schedule_store.cli as cli
from schedule_store.cli import main

COMMANDS = [
    {"type": "ADD_SEMESTER", "semester": {"id": "s1", "courses": [], "name": "Fall 2016"}},
    {"type": "ADD_COURSE", "semester": "s1", "course": {"code": "COMP 1405"}},
    {"type": "ADD_COURSE", "semester": "s1", "course": {"code": "MATH 1104"}},
    {
        "type": "ADD_LECTURE",
        "semester": "s1",
        "courseCode": "COMP 1405",
        "lecture": {"day": 1, "startTime": 600, "endTime": 690, "format": 0},
    },
    {
        "type": "ADD_LECTURE",
        "semester": "s1",
        "courseCode": "MATH 1104",
        "lecture": {"day": 1, "startTime": 630, "endTime": 720},
    },
]


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.out = io.StringIO()
        self._console = cli.console
        cli.console = Console(file=self.out, width=200, color_system=None)

    def tearDown(self) -> None:
        cli.console = self._console
        self._tmp.cleanup()

    def _write(self, data: object) -> str:
        p = self.dir / "commands.json"
        p.write_text(json.dumps(data), encoding="utf-8")
        return str(p)

    def _run(self, argv: list) -> int:
        with self.assertRaises(SystemExit) as ctx:
            main(argv)
        return ctx.exception.code

    def test_replay_prints_tree(self) -> None:
        code = self._run(["replay", self._write(COMMANDS)])
        self.assertEqual(code, 0)
        text = self.out.getvalue()
        self.assertIn("Fall 2016", text)
        self.assertLess(text.index("MATH 1104"), text.index("COMP 1405"))

    def test_replay_json(self) -> None:
        code = self._run(["replay", "--json", self._write(COMMANDS)])
        self.assertEqual(code, 0)
        data = json.loads(self.out.getvalue())
        codes = [c["code"] for c in data["schedule"]["s1"]["courses"]]
        self.assertEqual(codes, ["MATH 1104", "COMP 1405"])

    def test_replay_shows_unscheduled_lecture(self) -> None:
        commands = COMMANDS[:1] + [
            {"type": "ADD_COURSE", "semester": "s1", "course": {"code": "c1", "lectures": [{"name": "Empty Lecture"}]}}
        ]
        code = self._run(["replay", self._write(commands)])
        self.assertEqual(code, 0)
        self.assertIn("name=Empty Lecture", self.out.getvalue())

    def test_missing_file(self) -> None:
        code = self._run(["replay", str(self.dir / "nope.json")])
        self.assertEqual(code, 1)

    def test_malformed_command(self) -> None:
        code = self._run(["replay", self._write([{"type": "ADD_COURSE", "semester": "s1"}])])
        self.assertEqual(code, 1)
        self.assertIn("command #0", self.out.getvalue())

    def test_conflicts(self) -> None:
        code = self._run(["conflicts", self._write(COMMANDS), "s1"])
        self.assertEqual(code, 0)
        self.assertIn("Conflicts found: 1", self.out.getvalue())

    def test_conflicts_unknown_semester(self) -> None:
        code = self._run(["conflicts", self._write(COMMANDS), "s9"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
