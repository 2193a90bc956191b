"""Typed Canvas API resources, decoded at the API boundary."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from constants import ACTIVE_WORKFLOW_STATE
from utils.datetime_utils import parse_canvas_datetime


def _parse_optional_datetime(value):
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return parse_canvas_datetime(value)
    return value


class Enrollment(BaseModel):
    type: Optional[str] = None
    computed_current_score: Optional[float] = None
    computed_current_grade: Optional[str] = None


class Course(BaseModel):
    id: int
    name: Optional[str] = None
    course_code: Optional[str] = None
    workflow_state: Optional[str] = None
    apply_assignment_group_weights: Optional[bool] = None
    hide_final_grades: Optional[bool] = None
    enrollments: Optional[List[Enrollment]] = None

    @property
    def display_name(self) -> str:
        return self.name or ""

    @property
    def is_active(self) -> bool:
        return self.workflow_state == ACTIVE_WORKFLOW_STATE

    @property
    def applies_group_weights(self) -> bool:
        return bool(self.apply_assignment_group_weights)


class AssignmentGroup(BaseModel):
    id: int
    name: Optional[str] = None
    group_weight: Optional[float] = None


class Submission(BaseModel):
    submitted_at: Optional[datetime] = None
    workflow_state: Optional[str] = None
    missing: bool = False
    score: Optional[float] = None

    @field_validator("submitted_at", mode="before")
    @classmethod
    def parse_submitted_at(cls, value):
        return _parse_optional_datetime(value)

    @field_validator("missing", mode="before")
    @classmethod
    def null_missing_is_false(cls, value):
        return bool(value)


class Assignment(BaseModel):
    id: int
    name: Optional[str] = None
    due_at: Optional[datetime] = None
    points_possible: Optional[float] = None
    assignment_group_id: Optional[int] = None
    submission_types: Optional[List[str]] = None
    submission: Optional[Submission] = None

    @field_validator("due_at", mode="before")
    @classmethod
    def parse_due_at(cls, value):
        return _parse_optional_datetime(value)

    @property
    def display_name(self) -> str:
        return self.name or ""

    @property
    def points(self) -> float:
        return self.points_possible or 0
