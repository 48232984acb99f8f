"""Expand a scheduled-package rule into concrete visit occurrences.

Everything here is a pure function of its arguments: rules are never
modified and nothing is cached between calls.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from ..core.constants import MAX_LOOKAHEAD_DAYS, UPCOMING_SCAN_DAYS
from ..core.enums import ExceptionAction, PackageStatus
from ..core.exceptions import ValidationError
from .model import Occurrence, ScheduledPackage, ScheduleException
from .recurrence.factory import RecurrenceFactory

_factory = RecurrenceFactory()


def _generated_dates(rule: ScheduledPackage, first: date, last: date) -> Iterator[date]:
    """Dates the rule generates in ``[first, last]``, ignoring status and exceptions."""
    lo = max(first, rule.start_date)
    hi = last if rule.end_date is None else min(last, rule.end_date)
    if lo > hi:
        return

    recurrence = _factory.for_rule(rule)
    k = recurrence.first_index_on_or_after(rule.start_date, lo)
    while rule.max_occurrences is None or k < rule.max_occurrences:
        day = recurrence.nth(rule.start_date, k)
        if day > hi:
            return
        yield day
        k += 1


def is_occurrence_date(rule: ScheduledPackage, day: date) -> bool:
    """True if the rule generates a visit on ``day`` (before exceptions)."""
    return any(True for _ in _generated_dates(rule, day, day))


def _last_generated_date(rule: ScheduledPackage) -> Optional[date]:
    if rule.max_occurrences is not None:
        recurrence = _factory.for_rule(rule)
        last = recurrence.nth(rule.start_date, rule.max_occurrences - 1)
        return last if rule.end_date is None else min(last, rule.end_date)
    return rule.end_date


def _default_occurrence(rule: ScheduledPackage, day: date) -> Occurrence:
    start = datetime.combine(day, rule.time_of_day.start)
    return Occurrence(
        scheduled_package_id=rule.scheduled_package_id,
        date=day,
        start=start,
        end=start + rule.time_of_day.duration,
    )


def _rescheduled_occurrence(rule: ScheduledPackage, ex: ScheduleException) -> Occurrence:
    return Occurrence(
        scheduled_package_id=rule.scheduled_package_id,
        date=ex.new_start.date(),
        start=ex.new_start,
        end=ex.new_start + rule.time_of_day.duration,
        is_exception=True,
        original_date=ex.date,
    )


def get_occurrences(rule: ScheduledPackage, start: date, end: date) -> list[Occurrence]:
    """Occurrences whose start date falls in ``[start, end]``, ordered by start.

    Paused and cancelled rules produce nothing. A rescheduled visit belongs to
    the window its new start date falls in, wherever its original date is.
    """
    if start > end:
        raise ValidationError("Window start must be on or before window end")
    if rule.status != PackageStatus.ACTIVE:
        return []

    by_date = {ex.date: ex for ex in rule.exceptions}
    out = [_default_occurrence(rule, day) for day in _generated_dates(rule, start, end) if day not in by_date]

    for ex in rule.exceptions:
        if ex.action != ExceptionAction.RESCHEDULE:
            continue
        if start <= ex.new_start.date() <= end and is_occurrence_date(rule, ex.date):
            out.append(_rescheduled_occurrence(rule, ex))

    out.sort(key=lambda o: o.start)
    return out


def next_occurrences(rule: ScheduledPackage, after: datetime, limit: int) -> list[Occurrence]:
    """Up to ``limit`` occurrences starting strictly after ``after``."""
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    if rule.status != PackageStatus.ACTIVE:
        return []

    targets = [ex.new_start.date() for ex in rule.exceptions if ex.action == ExceptionAction.RESCHEDULE]
    final = _last_generated_date(rule)
    if final is not None:
        final = max([final, *targets])

    # nothing can start before the first generated or rescheduled date
    window_start = max(after.date(), min([rule.start_date, *targets]))
    horizon = window_start + timedelta(days=MAX_LOOKAHEAD_DAYS)
    out: list[Occurrence] = []
    while window_start <= horizon:
        window_end = min(window_start + timedelta(days=UPCOMING_SCAN_DAYS - 1), horizon)
        for occ in get_occurrences(rule, window_start, window_end):
            if occ.start > after:
                out.append(occ)
                if len(out) >= limit:
                    return out
        if final is not None and window_end >= final:
            break
        window_start = window_end + timedelta(days=1)
    return out


def month_occurrences(rule: ScheduledPackage, year: int, month: int) -> list[Occurrence]:
    """Calendar-month preview."""
    if not 1 <= int(month) <= 12:
        raise ValidationError("month must be between 1 and 12")
    first = date(int(year), int(month), 1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return get_occurrences(rule, first, last)
