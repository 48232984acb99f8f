from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return value


def require_positive_int(value: Optional[int], field_name: str) -> int:
    if value is None or int(value) < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return int(value)


def require_date_order(start: date, end: Optional[date], *, start_name: str = "start", end_name: str = "end") -> None:
    if end is not None and end < start:
        raise ValidationError(f"{end_name} must be on or after {start_name}")
