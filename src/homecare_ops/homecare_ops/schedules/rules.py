"""State transitions on a scheduled package.

Every function returns a new ``ScheduledPackage``; on error nothing changes.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import ExceptionAction, PackageStatus
from ..core.exceptions import InvalidStateError, ValidationError
from .expander import is_occurrence_date
from .model import ScheduledPackage, ScheduleException

_TRANSITIONS = {
    (PackageStatus.ACTIVE, PackageStatus.PAUSED),
    (PackageStatus.PAUSED, PackageStatus.ACTIVE),
    (PackageStatus.ACTIVE, PackageStatus.CANCELLED),
    (PackageStatus.PAUSED, PackageStatus.CANCELLED),
}


def _transition(rule: ScheduledPackage, target: PackageStatus) -> ScheduledPackage:
    if (rule.status, target) not in _TRANSITIONS:
        raise InvalidStateError(f"Cannot move a {rule.status.value} package to {target.value}")
    return replace(rule, status=target)


def pause(rule: ScheduledPackage) -> ScheduledPackage:
    return _transition(rule, PackageStatus.PAUSED)


def resume(rule: ScheduledPackage) -> ScheduledPackage:
    return _transition(rule, PackageStatus.ACTIVE)


def cancel(rule: ScheduledPackage) -> ScheduledPackage:
    return _transition(rule, PackageStatus.CANCELLED)


def _ensure_editable(rule: ScheduledPackage, day: date) -> None:
    if rule.status == PackageStatus.CANCELLED:
        raise InvalidStateError("A cancelled package cannot be edited")
    if not rule.covers(day):
        raise ValidationError(f"{day.isoformat()} is outside the package's date range")


def _rescheduled_into(rule: ScheduledPackage, day: date, *, ignoring: date) -> bool:
    return any(
        ex.action == ExceptionAction.RESCHEDULE and ex.date != ignoring and ex.new_start.date() == day
        for ex in rule.exceptions
    )


def add_exception(
    rule: ScheduledPackage,
    day: date,
    action: Union[ExceptionAction, str],
    new_start: Optional[datetime] = None,
) -> ScheduledPackage:
    """Skip or reschedule the visit generated on ``day``.

    An existing exception for the same date is replaced.
    """
    _ensure_editable(rule, day)
    if not is_occurrence_date(rule, day):
        raise ValidationError(f"{day.isoformat()} is not a scheduled visit date")

    try:
        action = ExceptionAction(action)
    except ValueError:
        raise ValidationError(f"Unknown exception action: {action!r}")
    exception = ScheduleException(date=day, action=action, new_start=new_start)

    if exception.action == ExceptionAction.RESCHEDULE:
        target = exception.new_start.date()
        taken = _rescheduled_into(rule, target, ignoring=day)
        if not taken and target != day and rule.exception_for(target) is None:
            taken = is_occurrence_date(rule, target)
        if taken:
            raise ValidationError(f"{target.isoformat()} already has a visit")

    kept = tuple(ex for ex in rule.exceptions if ex.date != day)
    return replace(rule, exceptions=kept + (exception,))


def remove_exception(rule: ScheduledPackage, day: date) -> ScheduledPackage:
    """Restore the default visit on ``day``."""
    _ensure_editable(rule, day)
    if rule.exception_for(day) is None:
        raise ValidationError(f"No exception on {day.isoformat()}")
    if _rescheduled_into(rule, day, ignoring=day):
        raise ValidationError(f"{day.isoformat()} is taken by a rescheduled visit")

    return replace(rule, exceptions=tuple(ex for ex in rule.exceptions if ex.date != day))
