from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ...core.enums import Frequency
from ..model import ScheduledPackage
from .base import Recurrence
from .custom import CustomRecurrence
from .daily import DailyRecurrence
from .monthly import MonthlyRecurrence
from .weekly import BiweeklyRecurrence, WeeklyRecurrence

_BUILDERS: dict[Frequency, Callable[[ScheduledPackage], Recurrence]] = {
    Frequency.DAILY: lambda rule: DailyRecurrence(),
    Frequency.WEEKLY: lambda rule: WeeklyRecurrence(),
    Frequency.BIWEEKLY: lambda rule: BiweeklyRecurrence(),
    Frequency.MONTHLY: lambda rule: MonthlyRecurrence(),
    Frequency.CUSTOM: lambda rule: CustomRecurrence(rule.interval_days),
}

_missing = set(Frequency) - set(_BUILDERS)
if _missing:
    raise RuntimeError(f"No recurrence registered for: {sorted(f.value for f in _missing)}")


@dataclass
class RecurrenceFactory:
    """Factory Pattern: pick the recurrence strategy for a rule's frequency."""

    def for_rule(self, rule: ScheduledPackage) -> Recurrence:
        return _BUILDERS[rule.frequency](rule)
