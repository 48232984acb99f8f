from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class Frequency(str, Enum):
    """Recurrence frequency of a scheduled package."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str) -> "Frequency":
        key = (value or "").strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == key:
                return member
        raise ValidationError(f"Unknown frequency: {value!r}")


class PackageStatus(str, Enum):
    """Lifecycle of a scheduled package. CANCELLED is terminal."""

    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class ExceptionAction(str, Enum):
    SKIP = "skip"
    RESCHEDULE = "reschedule"


class TimeSheetStatus(str, Enum):
    CALCULATED = "calculated"
    APPROVED = "approved"


class AnomalyKind(str, Enum):
    """Non-fatal EVV data problems reported alongside a timesheet."""

    CHECKOUT_BEFORE_CHECKIN = "checkout_before_checkin"
    MISSING_CHECK_IN = "missing_check_in"
    MISSING_CHECK_OUT = "missing_check_out"
