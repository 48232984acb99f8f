from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, timedelta


class Recurrence(ABC):
    """Strategy Pattern: how a frequency turns an anchor date into visit dates.

    Dates are always derived from the anchor by index, never by stepping from
    the previous date, so month-end clamping does not drift.
    """

    @abstractmethod
    def nth(self, anchor: date, k: int) -> date:
        """The k-th generated date (k >= 0; k == 0 is the anchor)."""
        raise NotImplementedError

    @abstractmethod
    def first_index_on_or_after(self, anchor: date, day: date) -> int:
        """Smallest k with ``nth(anchor, k) >= day``."""
        raise NotImplementedError


class FixedDaysRecurrence(Recurrence):
    """Shared arithmetic for frequencies with a constant day step."""

    step_days: int = 1

    def nth(self, anchor: date, k: int) -> date:
        return anchor + timedelta(days=self.step_days * k)

    def first_index_on_or_after(self, anchor: date, day: date) -> int:
        if day <= anchor:
            return 0
        return -(-(day - anchor).days // self.step_days)
