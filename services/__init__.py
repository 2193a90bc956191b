"""Services package for business logic operations."""

from .canvas_service import (
    get_formatted_courses,
    get_formatted_upcoming,
    get_formatted_overdue,
    get_formatted_grades,
)
from .priority_service import PriorityEngine, PriorityItem, format_priority_report, should_skip_course

__all__ = [
    'get_formatted_courses',
    'get_formatted_upcoming',
    'get_formatted_overdue',
    'get_formatted_grades',
    'PriorityEngine',
    'PriorityItem',
    'format_priority_report',
    'should_skip_course',
]
