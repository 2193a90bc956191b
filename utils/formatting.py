"""Text helpers for report output."""

from typing import Optional, Union

Number = Union[int, float]


def format_number(value: Optional[Number]) -> str:
    """Render a number without a trailing '.0' (20.0 -> '20', 12.5 -> '12.5')."""
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
