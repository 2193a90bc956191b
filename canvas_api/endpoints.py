"""Canvas API endpoint functions."""

import logging
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from constants import DEFAULT_GROUP_WEIGHT
from .client import CanvasClient, CanvasAPIError
from .models import Assignment, AssignmentGroup, Course

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode_list(data, model: Type[ModelT], endpoint: str) -> List[ModelT]:
    """Decode a list response into models, skipping malformed entries."""
    if not isinstance(data, list):
        raise CanvasAPIError(f"Expected a list from {endpoint}, got: {data}")

    items: List[ModelT] = []
    for entry in data:
        try:
            items.append(model.model_validate(entry))
        except ValidationError as e:
            # Skip malformed entries (e.g. no id)
            logger.warning("Skipping malformed %s from %s: %s", model.__name__, endpoint, e)
    return items


def get_courses(client: CanvasClient, include: Optional[List[str]] = None) -> List[Course]:
    """Fetch the student's courses with an active enrollment."""
    endpoint = "courses?enrollment_state=active"
    for extra in include or []:
        endpoint += f"&include[]={extra}"
    return _decode_list(client.get(endpoint), Course, endpoint)


def get_active_courses(client: CanvasClient, include: Optional[List[str]] = None) -> List[Course]:
    """Fetch active-enrollment courses whose workflow state is 'available'."""
    return [course for course in get_courses(client, include) if course.is_active]


def get_assignment_groups(client: CanvasClient, course_id: int) -> List[AssignmentGroup]:
    endpoint = f"courses/{course_id}/assignment_groups"
    return _decode_list(client.get(endpoint), AssignmentGroup, endpoint)


def get_group_weights(client: CanvasClient, course_id: int) -> Dict[int, float]:
    """Map assignment group id to its weight; null weights count as the default."""
    return {
        group.id: group.group_weight if group.group_weight is not None else DEFAULT_GROUP_WEIGHT
        for group in get_assignment_groups(client, course_id)
    }


def get_assignments(client: CanvasClient, course_id: int, bucket: Optional[str] = None,
                    include_submission: bool = False, order_by: Optional[str] = None) -> List[Assignment]:
    """Fetch assignments for a Canvas course."""
    params: List[str] = []
    if include_submission:
        params.append("include[]=submission")
    if order_by:
        params.append(f"order_by={order_by}")
    if bucket:
        params.append(f"bucket={bucket}")

    endpoint = f"courses/{course_id}/assignments"
    if params:
        endpoint += "?" + "&".join(params)
    return _decode_list(client.get(endpoint), Assignment, endpoint)
