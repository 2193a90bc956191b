"""Canvas API client package for interacting with the Canvas LMS API."""

from .client import CanvasClient, CanvasAPIError
from .endpoints import (
    get_courses,
    get_active_courses,
    get_assignment_groups,
    get_group_weights,
    get_assignments,
)
from .models import Assignment, AssignmentGroup, Course, Enrollment, Submission

__all__ = [
    'CanvasClient',
    'CanvasAPIError',
    'get_courses',
    'get_active_courses',
    'get_assignment_groups',
    'get_group_weights',
    'get_assignments',
    'Assignment',
    'AssignmentGroup',
    'Course',
    'Enrollment',
    'Submission',
]
