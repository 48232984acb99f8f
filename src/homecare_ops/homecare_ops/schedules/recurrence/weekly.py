from __future__ import annotations

from .base import FixedDaysRecurrence


class WeeklyRecurrence(FixedDaysRecurrence):
    """Same weekday every week."""

    step_days = 7


class BiweeklyRecurrence(FixedDaysRecurrence):
    """Same weekday every other week."""

    step_days = 14
