from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta

from .base import Recurrence


class MonthlyRecurrence(Recurrence):
    """Same day of month; clamps to the last day in shorter months.

    relativedelta clamps (Jan 31 + 1 month = Feb 29 in 2024) and, because
    every date is computed from the anchor, March is back on the 31st.
    """

    def nth(self, anchor: date, k: int) -> date:
        return anchor + relativedelta(months=k)

    def first_index_on_or_after(self, anchor: date, day: date) -> int:
        if day <= anchor:
            return 0
        k = max((day.year - anchor.year) * 12 + (day.month - anchor.month) - 1, 0)
        while self.nth(anchor, k) < day:
            k += 1
        return k
