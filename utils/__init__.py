"""Utilities package for helper functions."""

from .datetime_utils import (
    utc_now,
    parse_canvas_datetime,
    to_utc_iso_z,
    format_due_date,
    within_days,
)
from .formatting import format_number

__all__ = [
    'utc_now',
    'parse_canvas_datetime',
    'to_utc_iso_z',
    'format_due_date',
    'within_days',
    'format_number',
]
