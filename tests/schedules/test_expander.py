from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.homecare_ops.homecare_ops.core.enums import ExceptionAction, Frequency, PackageStatus
from src.homecare_ops.homecare_ops.core.exceptions import ValidationError
from src.homecare_ops.homecare_ops.schedules.expander import (
    get_occurrences,
    is_occurrence_date,
    month_occurrences,
    next_occurrences,
)
from src.homecare_ops.homecare_ops.schedules.model import ScheduleException
from tests.fakes import make_rule


def _dates(occurrences):
    return [o.date for o in occurrences]


def test_weekly_rule_yields_every_monday_in_window(weekly_rule):
    items = get_occurrences(weekly_rule, date(2024, 1, 1), date(2024, 1, 22))

    assert _dates(items) == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22)]
    assert items[0].start == datetime(2024, 1, 1, 9, 0)
    assert items[0].end == datetime(2024, 1, 1, 11, 0)
    assert not any(o.is_exception for o in items)


def test_skip_exception_removes_exactly_one_occurrence():
    rule = make_rule(exceptions=(ScheduleException(date(2024, 1, 8), ExceptionAction.SKIP),))

    items = get_occurrences(rule, date(2024, 1, 1), date(2024, 1, 22))

    assert _dates(items) == [date(2024, 1, 1), date(2024, 1, 15), date(2024, 1, 22)]


def test_reschedule_is_sorted_into_its_new_position():
    moved_to = datetime(2024, 1, 20, 14, 30)
    rule = make_rule(exceptions=(ScheduleException(date(2024, 1, 8), ExceptionAction.RESCHEDULE, moved_to),))

    items = get_occurrences(rule, date(2024, 1, 1), date(2024, 1, 22))

    assert _dates(items) == [date(2024, 1, 1), date(2024, 1, 15), date(2024, 1, 20), date(2024, 1, 22)]
    moved = items[2]
    assert moved.is_exception
    assert moved.start == moved_to
    assert moved.end == moved_to + timedelta(minutes=120)
    assert moved.original_date == date(2024, 1, 8)


def test_rescheduled_visit_belongs_to_the_window_it_moved_into():
    rule = make_rule(
        exceptions=(ScheduleException(date(2024, 1, 8), ExceptionAction.RESCHEDULE, datetime(2024, 1, 20, 9, 0)),)
    )

    assert _dates(get_occurrences(rule, date(2024, 1, 1), date(2024, 1, 10))) == [date(2024, 1, 1)]
    assert date(2024, 1, 20) in _dates(get_occurrences(rule, date(2024, 1, 16), date(2024, 1, 31)))


def test_window_split_matches_whole_window():
    rule = make_rule(
        frequency=Frequency.DAILY,
        exceptions=(
            ScheduleException(date(2024, 1, 3), ExceptionAction.SKIP),
            ScheduleException(date(2024, 1, 5), ExceptionAction.RESCHEDULE, datetime(2024, 1, 3, 18, 0)),
            ScheduleException(date(2024, 1, 14), ExceptionAction.RESCHEDULE, datetime(2024, 1, 14, 7, 0)),
        ),
    )
    start, end = date(2024, 1, 1), date(2024, 1, 20)
    whole = get_occurrences(rule, start, end)

    for offset in range((end - start).days):
        mid = start + timedelta(days=offset)
        left = get_occurrences(rule, start, mid)
        right = get_occurrences(rule, mid + timedelta(days=1), end)
        assert left + right == whole


def test_output_is_sorted_without_duplicate_dates():
    rule = make_rule(
        frequency=Frequency.DAILY,
        exceptions=(ScheduleException(date(2024, 1, 2), ExceptionAction.RESCHEDULE, datetime(2024, 1, 2, 6, 0)),),
    )
    items = get_occurrences(rule, date(2024, 1, 1), date(2024, 1, 31))

    starts = [o.start for o in items]
    assert starts == sorted(starts)
    assert len(set(_dates(items))) == len(items) == 31


def test_monthly_rule_clamps_to_month_end_without_drifting():
    rule = make_rule(frequency=Frequency.MONTHLY, start_date=date(2024, 1, 31))

    items = get_occurrences(rule, date(2024, 1, 1), date(2024, 5, 31))

    assert _dates(items) == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
        date(2024, 5, 31),
    ]


def test_monthly_rule_in_non_leap_year_lands_on_feb_28():
    rule = make_rule(frequency=Frequency.MONTHLY, start_date=date(2023, 1, 29))

    items = get_occurrences(rule, date(2023, 2, 1), date(2023, 3, 31))

    assert _dates(items) == [date(2023, 2, 28), date(2023, 3, 29)]


def test_biweekly_and_custom_steps():
    biweekly = make_rule(frequency=Frequency.BIWEEKLY)
    custom = make_rule(frequency=Frequency.CUSTOM, interval_days=3)

    assert _dates(get_occurrences(biweekly, date(2024, 1, 1), date(2024, 2, 1))) == [
        date(2024, 1, 1),
        date(2024, 1, 15),
        date(2024, 1, 29),
    ]
    assert _dates(get_occurrences(custom, date(2024, 1, 5), date(2024, 1, 12))) == [
        date(2024, 1, 7),
        date(2024, 1, 10),
    ]


def test_end_date_is_inclusive_and_window_before_start_is_empty():
    rule = make_rule(end_date=date(2024, 1, 15))

    assert _dates(get_occurrences(rule, date(2023, 12, 1), date(2024, 3, 1))) == [
        date(2024, 1, 1),
        date(2024, 1, 8),
        date(2024, 1, 15),
    ]
    assert get_occurrences(rule, date(2023, 12, 1), date(2023, 12, 31)) == []


def test_max_occurrences_counts_skipped_dates():
    rule = make_rule(
        max_occurrences=3,
        exceptions=(ScheduleException(date(2024, 1, 8), ExceptionAction.SKIP),),
    )

    assert _dates(get_occurrences(rule, date(2024, 1, 1), date(2024, 12, 31))) == [date(2024, 1, 1), date(2024, 1, 15)]
    assert not is_occurrence_date(rule, date(2024, 1, 22))


@pytest.mark.parametrize("status", [PackageStatus.PAUSED, PackageStatus.CANCELLED])
def test_inactive_rules_have_no_occurrences(status):
    rule = make_rule(status=status)

    assert get_occurrences(rule, date(2024, 1, 1), date(2024, 12, 31)) == []
    assert next_occurrences(rule, datetime(2024, 1, 1), 5) == []


def test_inverted_window_is_rejected(weekly_rule):
    with pytest.raises(ValidationError):
        get_occurrences(weekly_rule, date(2024, 2, 1), date(2024, 1, 1))


def test_expansion_is_pure():
    exceptions = (ScheduleException(date(2024, 1, 8), ExceptionAction.SKIP),)
    rule = make_rule(exceptions=exceptions)

    first = get_occurrences(rule, date(2024, 1, 1), date(2024, 3, 1))
    second = get_occurrences(rule, date(2024, 1, 1), date(2024, 3, 1))

    assert first == second
    assert rule.exceptions == exceptions


def test_is_occurrence_date(weekly_rule):
    assert is_occurrence_date(weekly_rule, date(2024, 1, 8))
    assert not is_occurrence_date(weekly_rule, date(2024, 1, 9))
    assert not is_occurrence_date(weekly_rule, date(2023, 12, 25))


def test_next_occurrences_start_strictly_after(weekly_rule):
    items = next_occurrences(weekly_rule, datetime(2024, 1, 8, 9, 0), 2)

    assert _dates(items) == [date(2024, 1, 15), date(2024, 1, 22)]


def test_next_occurrences_stops_at_end_of_rule():
    rule = make_rule(end_date=date(2024, 1, 15))

    items = next_occurrences(rule, datetime(2024, 1, 1, 12, 0), 10)

    assert _dates(items) == [date(2024, 1, 8), date(2024, 1, 15)]


def test_next_occurrences_reaches_past_the_first_scan_window():
    rule = make_rule(frequency=Frequency.MONTHLY, start_date=date(2024, 1, 15))

    items = next_occurrences(rule, datetime(2024, 1, 1), 6)

    assert _dates(items)[-1] == date(2024, 6, 15)


def test_month_preview(weekly_rule):
    assert _dates(month_occurrences(weekly_rule, 2024, 2)) == [
        date(2024, 2, 5),
        date(2024, 2, 12),
        date(2024, 2, 19),
        date(2024, 2, 26),
    ]
    with pytest.raises(ValidationError):
        month_occurrences(weekly_rule, 2024, 13)


def test_next_occurrences_for_a_rule_starting_years_ahead():
    rule = make_rule(start_date=date(2030, 1, 7))

    items = next_occurrences(rule, datetime(2024, 1, 1), 2)

    assert _dates(items) == [date(2030, 1, 7), date(2030, 1, 14)]


def test_next_occurrences_includes_a_visit_moved_before_the_start_date():
    rule = make_rule(
        start_date=date(2030, 1, 7),
        exceptions=(ScheduleException(date(2030, 1, 7), ExceptionAction.RESCHEDULE, datetime(2030, 1, 5, 9, 0)),),
    )

    items = next_occurrences(rule, datetime(2024, 1, 1), 2)

    assert _dates(items) == [date(2030, 1, 5), date(2030, 1, 14)]
