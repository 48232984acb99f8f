from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.validators import require_date_order, require_positive_int
from ..core.enums import ExceptionAction, Frequency, PackageStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeOfDay:
    """Default visit slot: start time and duration."""

    start: time
    duration_minutes: int

    def __post_init__(self):
        if int(self.duration_minutes) <= 0:
            raise ValidationError("Visit duration must be positive")

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)


@dataclass(frozen=True)
class ScheduleException:
    """Per-date override of a recurrence rule."""

    date: date
    action: ExceptionAction
    new_start: Optional[datetime] = None

    def __post_init__(self):
        if self.action == ExceptionAction.RESCHEDULE and self.new_start is None:
            raise ValidationError("A reschedule needs a new start date/time")
        if self.action == ExceptionAction.SKIP and self.new_start is not None:
            raise ValidationError("A skip cannot carry a new start date/time")


@dataclass(frozen=True)
class ScheduledPackage:
    """Recurrence rule for a customer's package visits."""

    scheduled_package_id: int
    customer_id: int
    package_id: int
    frequency: Frequency
    start_date: date
    time_of_day: TimeOfDay
    caregiver_id: Optional[int] = None
    end_date: Optional[date] = None
    status: PackageStatus = PackageStatus.ACTIVE
    exceptions: tuple[ScheduleException, ...] = field(default_factory=tuple)
    interval_days: Optional[int] = None
    max_occurrences: Optional[int] = None

    def __post_init__(self):
        require_date_order(self.start_date, self.end_date, start_name="start_date", end_name="end_date")
        if self.frequency == Frequency.CUSTOM:
            require_positive_int(self.interval_days, "interval_days")
        if self.max_occurrences is not None:
            require_positive_int(self.max_occurrences, "max_occurrences")

        ordered = tuple(sorted(self.exceptions, key=lambda ex: ex.date))
        dates = [ex.date for ex in ordered]
        if len(dates) != len(set(dates)):
            raise ValidationError("Only one exception per date is allowed")
        # frozen: bypass __setattr__ to store the normalized order
        object.__setattr__(self, "exceptions", ordered)

    def exception_for(self, day: date) -> Optional[ScheduleException]:
        for ex in self.exceptions:
            if ex.date == day:
                return ex
        return None

    def covers(self, day: date) -> bool:
        """True if ``day`` is inside ``[start_date, end_date]`` (open-ended without end_date)."""
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date


@dataclass(frozen=True)
class Occurrence:
    """A concrete visit derived from a rule; never persisted."""

    scheduled_package_id: int
    date: date
    start: datetime
    end: datetime
    is_exception: bool = False
    original_date: Optional[date] = None
