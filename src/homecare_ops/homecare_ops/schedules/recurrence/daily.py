from __future__ import annotations

from .base import FixedDaysRecurrence


class DailyRecurrence(FixedDaysRecurrence):
    """Every day."""

    step_days = 1
