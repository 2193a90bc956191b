"""
Acceptance tests for core user workflows.
Runs the CLI end to end against a fake Canvas server.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock, patch

import cli

NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=timezone.utc)
BASE = "https://district.instructure.com/api/v1/"

CONFIG = {
    "students": {
        "emma": {"name": "Emma", "domain": "district.instructure.com", "token": "t0k3n", "userId": 7}
    },
    "skipCourses": ["homeroom"]
}

COURSES = [
    {"id": 1, "name": "Math", "course_code": "MATH-7", "workflow_state": "available",
     "apply_assignment_group_weights": False},
    {"id": 2, "name": "Science", "workflow_state": "available", "apply_assignment_group_weights": True},
    {"id": 3, "name": "PE - Homeroom", "workflow_state": "available"},
    {"id": 4, "name": "Last Year", "workflow_state": "completed"},
]

GROUPS = {
    1: [{"id": 10, "group_weight": 0}],
    2: [{"id": 20, "group_weight": 25}, {"id": 21, "group_weight": 75}],
}

ASSIGNMENTS = {
    1: [
        {"id": 100, "name": "Quiz 1", "due_at": "2025-10-16T12:00:00Z", "points_possible": 20,
         "assignment_group_id": 10, "submission_types": ["online_quiz"],
         "submission": {"submitted_at": None, "workflow_state": "unsubmitted", "missing": False, "score": None}},
        {"id": 101, "name": "Worksheet", "due_at": "2025-10-10T12:00:00Z", "points_possible": 15,
         "assignment_group_id": 10,
         "submission": {"submitted_at": "2025-10-09T12:00:00Z", "workflow_state": "graded", "score": 15}},
        {"id": 102, "name": "Reading Log", "due_at": None, "points_possible": 10, "assignment_group_id": 10},
    ],
    2: [
        {"id": 200, "name": "Lab Report", "due_at": "2025-10-14T12:00:00Z", "points_possible": 40,
         "assignment_group_id": 20,
         "submission": {"submitted_at": None, "workflow_state": "unsubmitted", "missing": True, "score": None}},
        {"id": 201, "name": "Participation", "due_at": "2025-10-20T12:00:00Z", "points_possible": 0,
         "assignment_group_id": 21},
    ],
}


def make_response(payload):
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    response.text = json.dumps(payload)
    return response


class FakeCanvas:
    """Routes page requests to canned payloads and records the paths hit."""

    def __init__(self, courses=COURSES, groups=GROUPS, assignments=ASSIGNMENTS, error_path=None):
        self.courses = courses
        self.groups = groups
        self.assignments = assignments
        self.error_path = error_path
        self.paths = []

    def get(self, url, timeout=None):
        path = url[len(BASE):].split("?")[0]
        self.paths.append(path)

        if path == self.error_path:
            return make_response({"errors": [{"message": "user not authorized to perform that action"}]})
        if path == "courses":
            return make_response(self.courses)

        parts = path.split("/")
        course_id = int(parts[1])
        if parts[2] == "assignment_groups":
            return make_response(self.groups.get(course_id, []))
        return make_response(self.assignments.get(course_id, []))


class CLITestCase(unittest.TestCase):
    """Writes a temporary config and runs the CLI against a fake Canvas."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self.tmp.name) / "canvas-config.json"
        self.config_path.write_text(json.dumps(CONFIG), encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, argv, fake):
        stdout, stderr = io.StringIO(), io.StringIO()
        session = Mock()
        session.headers = {}
        session.get.side_effect = fake.get
        with patch("canvas_api.client.requests.Session", return_value=session), \
                patch("cli.utc_now", return_value=NOW), \
                redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.run(["--config", str(self.config_path)] + argv)
        return code, stdout.getvalue(), stderr.getvalue()


class TestPriorityWorkflow(CLITestCase):
    """
    User Story: As a parent, I want a ranked list of my child's outstanding
    work so that we tackle what matters most for their grades first.
    """

    def test_priorities_report(self):
        """
        SCENARIO: Emma has an upcoming quiz and a missing weighted lab

        GIVEN Math is unweighted and Science weights its labs at 25%
        WHEN the priorities command runs
        THEN the quiz ranks first with 30 and the lab second with 10
        AND graded, undated and zero-point work is left out
        """
        fake = FakeCanvas()

        code, out, err = self.run_cli(["priorities", "emma"], fake)

        self.assertEqual(code, 0, err)
        self.assertEqual(out.splitlines(), [
            "🎯 Priority assignments for Emma",
            "═══════════════════════════════════════",
            "",
            "#1  Math",
            "    📝 Quiz 1",
            "    📅 DUE 2025-10-16 · 20 pts · Priority: 30",
            "",
            "#2  Science",
            "    📝 Lab Report",
            "    ⚠️  OVERDUE (was due 2025-10-14) · 40 pts · 25% weight · Priority: 10",
            "",
            "───────────────────────────────────────",
            "📊 1 upcoming · 1 overdue · showing top 10",
        ])

    def test_skipped_course_is_never_fetched(self):
        fake = FakeCanvas()

        self.run_cli(["priorities", "emma"], fake)

        self.assertEqual(fake.paths, [
            "courses",
            "courses/1/assignment_groups",
            "courses/1/assignments",
            "courses/2/assignment_groups",
            "courses/2/assignments",
        ])

    def test_limit_truncates_but_counts_everything(self):
        fake = FakeCanvas()

        code, out, _ = self.run_cli(["priorities", "emma", "--limit", "1"], fake)

        self.assertEqual(code, 0)
        self.assertIn("#1  Math", out)
        self.assertNotIn("#2", out)
        self.assertTrue(out.rstrip().endswith("📊 1 upcoming · 1 overdue · showing top 1"))

    def test_all_flag_shows_everything(self):
        fake = FakeCanvas()

        _, out, _ = self.run_cli(["priorities", "emma", "--limit", "1", "--all"], fake)

        self.assertIn("#2  Science", out)
        self.assertTrue(out.rstrip().endswith("showing all"))

    def test_nothing_actionable(self):
        """
        SCENARIO: Everything is turned in and graded
        THEN only the header and the all-clear message are printed
        """
        fake = FakeCanvas(assignments={1: [ASSIGNMENTS[1][1]], 2: []})

        code, out, _ = self.run_cli(["priorities", "emma"], fake)

        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[2:], ["", "Nothing actionable found! 🎉"])
        self.assertNotIn("📊", out)

    def test_api_error_aborts_report(self):
        """
        SCENARIO: Canvas rejects one course's assignment request
        THEN the raw error is shown, nothing is ranked and the exit code is 1
        """
        fake = FakeCanvas(error_path="courses/2/assignments")

        code, out, err = self.run_cli(["priorities", "emma"], fake)

        self.assertEqual(code, 1)
        self.assertIn("API Error:", err)
        self.assertIn("user not authorized", err)
        self.assertNotIn("#1", out)

    def test_unknown_student(self):
        code, out, err = self.run_cli(["priorities", "noah"], FakeCanvas())

        self.assertEqual(code, 1)
        self.assertIn("Student 'noah' not found", err)
        self.assertEqual(out, "")

    def test_missing_student_argument_is_usage_error(self):
        code, _, err = self.run_cli(["priorities"], FakeCanvas())

        self.assertEqual(code, 1)
        self.assertIn("usage:", err)

    def test_non_positive_limit_is_usage_error(self):
        """A limit below 1 is rejected before any request is made."""
        for value in ("0", "-1"):
            fake = FakeCanvas()

            code, out, err = self.run_cli(["priorities", "emma", "--limit", value], fake)

            self.assertEqual(code, 1)
            self.assertIn("must be a positive integer", err)
            self.assertEqual(out, "")
            self.assertEqual(fake.paths, [])


class TestReportWorkflows(CLITestCase):
    """User Story: As a parent, I want quick course, deadline and grade digests."""

    def test_courses_ignore_skip_list(self):
        """The skip list only applies to priorities."""
        code, out, _ = self.run_cli(["courses", "emma"], FakeCanvas())

        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), [
            "📚 Courses for Emma",
            "---",
            "• Math (MATH-7)",
            "• PE - Homeroom (no code)",
            "• Science (no code)",
        ])

    def test_assignments_default_window(self):
        code, out, _ = self.run_cli(["assignments", "emma"], FakeCanvas())

        self.assertEqual(code, 0)
        self.assertIn("📋 Upcoming assignments for Emma (next 14 days)", out)
        self.assertIn("  📅 2025-10-16 — Quiz 1 🧪", out)
        self.assertIn("  📅 2025-10-20 — Participation ", out)

    def test_summary_sections(self):
        code, out, _ = self.run_cli(["summary", "emma"], FakeCanvas())

        self.assertEqual(code, 0)
        self.assertIn("  📚 Canvas Summary: Emma", out)
        self.assertIn("📊 Grades for Emma", out)
        self.assertIn("⚠️ Overdue assignments for Emma", out)
        self.assertIn("(next 7 days)", out)

    def test_help(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = cli.run(["help"])

        self.assertEqual(code, 0)
        self.assertIn("priorities   Weighted priority list", stdout.getvalue())

    def test_dash_h_prints_same_overview(self):
        for flag in ("-h", "--help"):
            help_out, flag_out = io.StringIO(), io.StringIO()
            with redirect_stdout(help_out):
                cli.run(["help"])
            with redirect_stdout(flag_out):
                code = cli.run([flag])

            self.assertEqual(code, 0)
            self.assertEqual(flag_out.getvalue(), help_out.getvalue())
            self.assertEqual(flag_out.getvalue().strip(), cli.HELP_TEXT)

    @patch.dict(os.environ, {"OPENCLAW_WORKSPACE": "/nonexistent"}, clear=True)
    def test_config_not_found(self):
        stderr = io.StringIO()
        with patch("config.Path.home", return_value=Path("/nonexistent-home")), redirect_stderr(stderr):
            code = cli.run(["courses", "emma"])

        self.assertEqual(code, 1)
        self.assertIn("canvas-config.json not found", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
