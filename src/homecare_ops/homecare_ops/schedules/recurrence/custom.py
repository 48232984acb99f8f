from __future__ import annotations

from ...common.validators import require_positive_int
from .base import FixedDaysRecurrence


class CustomRecurrence(FixedDaysRecurrence):
    """Every ``interval_days`` days."""

    def __init__(self, interval_days: int):
        self.step_days = require_positive_int(interval_days, "interval_days")
