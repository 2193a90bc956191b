"""Command-line client for read-only Canvas reports and priority ranking."""

import argparse
import logging
import sys
from typing import List, Optional

from canvas_api.client import CanvasClient, CanvasAPIError
from config import CanvasConfig, ConfigError, StudentConfig, load_config
from constants import (
    DEFAULT_ASSIGNMENT_DAYS,
    DEFAULT_PRIORITY_LIMIT,
    HEAVY_RULE,
    SUMMARY_ASSIGNMENT_DAYS,
)
from services.canvas_service import (
    get_formatted_courses,
    get_formatted_grades,
    get_formatted_overdue,
    get_formatted_upcoming,
)
from services.priority_service import PriorityEngine, format_priority_report
from utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

HELP_TEXT = """Canvas LMS CLI — Query assignments, grades, and courses

Usage: canvas <command> <student_key> [options]

Commands:
  courses      List active courses
  assignments  Upcoming assignments (--days N, default 14)
  overdue      Overdue assignments
  grades       Current grades
  summary      Full digest (grades + overdue + upcoming)
  priorities   Weighted priority list (--limit N, --all)

Student keys are defined in canvas-config.json"""


class UsageError(Exception):
    """Raised for malformed command lines."""
    pass


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports usage errors with exit code 1."""

    def error(self, message):
        raise UsageError(f"{self.format_usage().strip()}\n{self.prog}: error: {message}")


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


# ========================================
# Commands
# ========================================

def emit(lines: List[str]) -> None:
    for line in lines:
        print(line)


def cmd_courses(client: CanvasClient, student: StudentConfig, args) -> None:
    print(f"📚 Courses for {student.name}")
    print("---")
    emit(get_formatted_courses(client))


def cmd_assignments(client: CanvasClient, student: StudentConfig, args) -> None:
    days = args.days
    print(f"📋 Upcoming assignments for {student.name} (next {days} days)")
    print("---")
    emit(get_formatted_upcoming(client, days=days, now=args.now))


def cmd_overdue(client: CanvasClient, student: StudentConfig, args) -> None:
    print(f"⚠️ Overdue assignments for {student.name}")
    print("---")
    emit(get_formatted_overdue(client))


def cmd_grades(client: CanvasClient, student: StudentConfig, args) -> None:
    print(f"📊 Grades for {student.name}")
    print("---")
    emit(get_formatted_grades(client))


def cmd_summary(client: CanvasClient, student: StudentConfig, args) -> None:
    print(HEAVY_RULE)
    print(f"  📚 Canvas Summary: {student.name}")
    print(HEAVY_RULE)
    print()
    cmd_grades(client, student, args)
    print()
    cmd_overdue(client, student, args)
    print()
    cmd_assignments(client, student, args)


def cmd_priorities(client: CanvasClient, student: StudentConfig, args) -> None:
    print(f"🎯 Priority assignments for {student.name}")
    print(HEAVY_RULE)

    engine = PriorityEngine(client, skip_courses=args.skip_courses)
    items = engine.collect(now=args.now)

    print()
    emit(format_priority_report(items, limit=args.limit, show_all=args.show_all))


# ========================================
# Argument parsing
# ========================================

def build_parser() -> ArgumentParser:
    # -h prints the same overview as the help command
    parser = ArgumentParser(prog="canvas", add_help=False)
    parser.add_argument("-h", "--help", dest="show_help", action="store_true",
                        help="Show the command overview")
    parser.add_argument("--config", help="Path to canvas-config.json")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="set python logging level")

    commands = parser.add_subparsers(dest="command")

    def add_command(name: str, func, help_text: str) -> ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("student", help="Student key from canvas-config.json")
        sub.set_defaults(func=func)
        return sub

    add_command("courses", cmd_courses, "List active courses")
    assignments = add_command("assignments", cmd_assignments, "Upcoming assignments")
    assignments.add_argument("--days", type=int, default=DEFAULT_ASSIGNMENT_DAYS,
                             help="Look-ahead window in days (default 14)")
    add_command("overdue", cmd_overdue, "Overdue assignments")
    add_command("grades", cmd_grades, "Current grades")
    summary = add_command("summary", cmd_summary, "Full digest (grades + overdue + upcoming)")
    summary.set_defaults(days=SUMMARY_ASSIGNMENT_DAYS)
    priorities = add_command("priorities", cmd_priorities, "Weighted priority list")
    priorities.add_argument("--limit", type=positive_int, default=DEFAULT_PRIORITY_LIMIT,
                            help="Number of items to show (default 10)")
    priorities.add_argument("--all", dest="show_all", action="store_true",
                            help="Show every actionable item")
    commands.add_parser("help", help="Show this overview")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse argv, run one command and return the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.show_help or args.command in (None, "help"):
        print(HELP_TEXT)
        return 0

    try:
        config: CanvasConfig = load_config(args.config)
        student = config.get_student(args.student)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    args.skip_courses = config.skip_courses
    args.now = utc_now()
    client = CanvasClient(student.domain, student.token)

    try:
        args.func(client, student, args)
    except CanvasAPIError as e:
        logger.debug("Aborting %s for %s", args.command, student.key, exc_info=True)
        print(f"API Error: {e}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
