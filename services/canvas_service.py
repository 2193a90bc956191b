"""Canvas service layer for the plain course, assignment and grade reports."""

from datetime import datetime
from typing import List, Optional

from canvas_api.client import CanvasClient
from canvas_api.endpoints import get_active_courses, get_assignments
from canvas_api.models import Assignment, Course
from constants import (
    DEFAULT_ASSIGNMENT_DAYS,
    NO_GRADES_MESSAGE,
    NO_OVERDUE_MESSAGE,
    SUBMISSION_TYPE_ICONS,
)
from utils.datetime_utils import format_due_date, utc_now, within_days
from utils.formatting import format_number


def submission_icon(assignment: Assignment) -> str:
    """Icon for quizzes and discussions, empty otherwise."""
    types = assignment.submission_types or []
    for submission_type, icon in SUBMISSION_TYPE_ICONS.items():
        if submission_type in types:
            return icon
    return ""


def get_formatted_courses(client: CanvasClient) -> List[str]:
    """Fetch active courses and return formatted display strings sorted by name."""
    courses = sorted(get_active_courses(client), key=lambda c: c.display_name)
    return [f"• {course.display_name} ({course.course_code or 'no code'})" for course in courses]


def _course_section(course: Course, lines: List[str]) -> List[str]:
    return ["", f"📖 {course.display_name}:", *lines]


def get_formatted_upcoming(client: CanvasClient, days: int = DEFAULT_ASSIGNMENT_DAYS,
                           now: Optional[datetime] = None) -> List[str]:
    """Assignments due in the next days days, grouped by course."""
    now = now or utc_now()
    formatted: List[str] = []

    for course in get_active_courses(client):
        assignments = get_assignments(client, course.id, bucket="upcoming", order_by="due_at")
        due_soon = [
            a for a in assignments
            if a.due_at is not None and within_days(a.due_at, now, days)
        ]
        if not due_soon:
            continue

        due_soon.sort(key=lambda a: a.due_at)
        lines = [
            f"  📅 {format_due_date(a.due_at)} — {a.display_name} {submission_icon(a)}"
            for a in due_soon
        ]
        formatted.extend(_course_section(course, lines))

    if not formatted:
        return [f"No upcoming assignments in the next {days} days! 🎉"]
    return formatted


def get_formatted_overdue(client: CanvasClient) -> List[str]:
    """Assignments Canvas buckets as overdue, grouped by course."""
    formatted: List[str] = []

    for course in get_active_courses(client):
        assignments = [
            a for a in get_assignments(client, course.id, bucket="overdue")
            if a.due_at is not None
        ]
        if not assignments:
            continue

        assignments.sort(key=lambda a: a.due_at)
        lines = [f"  ❗ Due {format_due_date(a.due_at)} — {a.display_name}" for a in assignments]
        formatted.extend(_course_section(course, lines))

    if not formatted:
        return [NO_OVERDUE_MESSAGE]
    return formatted


def format_course_grade(course: Course) -> List[str]:
    """One line per student enrollment in course."""
    formatted: List[str] = []
    for enrollment in course.enrollments or []:
        if enrollment.type != "student":
            continue

        if course.hide_final_grades:
            grade = "🔒 Hidden"
        elif enrollment.computed_current_score is not None:
            letter = enrollment.computed_current_grade or "N/A"
            grade = f"{format_number(enrollment.computed_current_score)}% ({letter})"
        else:
            grade = "No grade data"
        formatted.append(f"• {course.display_name}: {grade}")
    return formatted


def get_formatted_grades(client: CanvasClient) -> List[str]:
    """Current score per active course, from the total_scores include."""
    formatted: List[str] = []
    for course in get_active_courses(client, include=["total_scores"]):
        formatted.extend(format_course_grade(course))

    if not formatted:
        return [NO_GRADES_MESSAGE]
    return formatted
