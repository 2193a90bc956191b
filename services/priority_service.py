"""
Priority ranking of outstanding assignments.

Every actionable assignment with a due date and a point value gets a score:
its points, scaled by the assignment group's weight when the course uses
weighted groups, times 1.5 while it is still upcoming. Overdue work keeps
the unscaled value so that work which can still earn full credit ranks first.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from canvas_api.client import CanvasClient
from canvas_api.endpoints import get_active_courses, get_assignments, get_group_weights
from canvas_api.models import Assignment, Course
from constants import (
    DEFAULT_GROUP_WEIGHT,
    DEFAULT_PRIORITY_LIMIT,
    LIGHT_RULE,
    NOTHING_ACTIONABLE_MESSAGE,
    STATUS_OVERDUE,
    STATUS_UPCOMING,
    UPCOMING_MULTIPLIER,
)
from utils.datetime_utils import format_due_date, utc_now
from utils.formatting import format_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriorityItem:
    course: str
    assignment_name: str
    points: float
    group_weight: float
    due_at: datetime
    status: str
    score: float
    weighted: bool


def should_skip_course(course_name: Optional[str], patterns: Optional[Iterable[str]]) -> bool:
    """True when any non-empty pattern occurs in course_name, ignoring case."""
    name = (course_name or "").lower()
    for pattern in patterns or []:
        if pattern and pattern.lower() in name:
            return True
    return False


def is_actionable(assignment: Assignment) -> bool:
    """
    An assignment still needs attention when it is unsubmitted and ungraded,
    flagged missing, or unsubmitted with no score (or a zero).
    """
    submission = assignment.submission
    submitted_at = submission.submitted_at if submission else None
    workflow_state = submission.workflow_state if submission else None
    missing = submission.missing if submission else False
    score = submission.score if submission else None

    if submitted_at is None and workflow_state != "graded":
        return True
    if missing:
        return True
    return submitted_at is None and (score is None or score == 0)


def round_score(value: float) -> float:
    """Round to 2 decimal places, halves away from zero."""
    return math.floor(value * 100 + 0.5) / 100


def base_score(points: float, group_weight: float, weighted: bool) -> float:
    if weighted and group_weight > 0:
        return points * (group_weight / 100)
    return points


def priority_status(due_at: datetime, now: datetime) -> str:
    return STATUS_OVERDUE if due_at < now else STATUS_UPCOMING


def build_priority_item(course: Course, assignment: Assignment, group_weights: Dict[int, float],
                        now: datetime) -> Optional[PriorityItem]:
    """Score one assignment, or return None when it is not a candidate."""
    if assignment.due_at is None or assignment.points <= 0:
        return None
    if not is_actionable(assignment):
        return None

    weighted = course.applies_group_weights
    group_weight = group_weights.get(assignment.assignment_group_id, DEFAULT_GROUP_WEIGHT)
    base = base_score(assignment.points, group_weight, weighted)
    status = priority_status(assignment.due_at, now)
    score = base * UPCOMING_MULTIPLIER if status == STATUS_UPCOMING else base

    return PriorityItem(
        course=course.display_name,
        assignment_name=assignment.display_name,
        points=assignment.points,
        group_weight=group_weight,
        due_at=assignment.due_at,
        status=status,
        score=round_score(score),
        weighted=weighted,
    )


def rank_priorities(items: List[PriorityItem], limit: Optional[int] = DEFAULT_PRIORITY_LIMIT) -> List[PriorityItem]:
    """Sort by score, highest first (stable for ties), and keep the first limit items."""
    ranked = sorted(items, key=lambda item: item.score, reverse=True)
    if limit is None:
        return ranked
    return ranked[:max(limit, 0)]


class PriorityEngine:
    """Collects priority items across a student's active courses."""

    def __init__(self, client: CanvasClient, skip_courses: Optional[List[str]] = None) -> None:
        self.client = client
        self.skip_courses = list(skip_courses or [])

    def course_items(self, course: Course, now: datetime) -> List[PriorityItem]:
        group_weights = get_group_weights(self.client, course.id)
        assignments = get_assignments(self.client, course.id, include_submission=True)

        items: List[PriorityItem] = []
        for assignment in assignments:
            item = build_priority_item(course, assignment, group_weights, now)
            if item is not None:
                items.append(item)
        return items

    def collect(self, now: Optional[datetime] = None) -> List[PriorityItem]:
        """
        Gather items for every active, non-skipped course in API order.
        Any API error aborts the whole collection.
        """
        now = now or utc_now()
        all_items: List[PriorityItem] = []

        for course in get_active_courses(self.client):
            if should_skip_course(course.name, self.skip_courses):
                logger.debug("Skipping course %s (%s)", course.id, course.display_name)
                continue

            items = self.course_items(course, now)
            logger.info("%s: %d actionable assignment(s)", course.display_name, len(items))
            all_items.extend(items)

        return all_items


def format_priority_item(rank: int, item: PriorityItem) -> List[str]:
    due = format_due_date(item.due_at)
    if item.status == STATUS_UPCOMING:
        status_str = f"📅 DUE {due}"
    else:
        status_str = f"⚠️  OVERDUE (was due {due})"

    weight_str = ""
    if item.weighted and item.group_weight != 0:
        weight_str = f" · {format_number(item.group_weight)}% weight"

    return [
        f"#{rank}  {item.course}",
        f"    📝 {item.assignment_name}",
        f"    {status_str} · {format_number(item.points)} pts{weight_str} · Priority: {format_number(item.score)}",
        "",
    ]


def format_priority_report(items: List[PriorityItem], limit: int = DEFAULT_PRIORITY_LIMIT,
                           show_all: bool = False) -> List[str]:
    """Render the ranked list and the upcoming/overdue summary."""
    if not items:
        return [NOTHING_ACTIONABLE_MESSAGE]

    ranked = rank_priorities(items, None if show_all else limit)

    lines: List[str] = []
    for rank, item in enumerate(ranked, start=1):
        lines.extend(format_priority_item(rank, item))

    total_upcoming = sum(1 for item in items if item.status == STATUS_UPCOMING)
    total_overdue = sum(1 for item in items if item.status == STATUS_OVERDUE)
    showing = "showing all" if show_all else f"showing top {limit}"

    lines.append(LIGHT_RULE)
    lines.append(f"📊 {total_upcoming} upcoming · {total_overdue} overdue · {showing}")
    return lines
