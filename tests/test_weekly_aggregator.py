from datetime import date, timedelta

from albapay.models import BreakPolicy, PolicySelection, Shift
from albapay.processors.weekly_aggregator import (
    group_by_week,
    week_start,
    weekly_effective_minutes,
    weekly_rest_pay_for_range,
)
from conftest import make_workplace

MONDAY = date(2024, 1, 1)


def four_hour_weekdays(monday=MONDAY):
    """Mon-Fri, 4 hours each: 20 hours in the week"""
    return [
        Shift(date=monday + timedelta(days=i), start_time="10:00", end_time="14:00")
        for i in range(5)
    ]


def test_week_start_anchors_to_monday():
    assert week_start(date(2024, 1, 1)) == date(2024, 1, 1)
    assert week_start(date(2024, 1, 3)) == date(2024, 1, 1)
    assert week_start(date(2024, 1, 7)) == date(2024, 1, 1)
    assert week_start(date(2024, 1, 8)) == date(2024, 1, 8)


def test_week_start_across_year_boundary():
    assert week_start(date(2025, 1, 1)) == date(2024, 12, 30)
    assert week_start(date(2024, 12, 31)) == date(2024, 12, 30)


def test_group_by_week():
    shifts = four_hour_weekdays() + four_hour_weekdays(date(2024, 1, 8))[:2]
    buckets = group_by_week(reversed(shifts))

    assert list(buckets) == [date(2024, 1, 1), date(2024, 1, 8)]
    assert len(buckets[date(2024, 1, 1)]) == 5
    assert [s.date for s in buckets[date(2024, 1, 8)]] == [date(2024, 1, 8), date(2024, 1, 9)]


def test_weekly_effective_minutes_applies_breaks():
    shifts = [Shift(date=MONDAY, start_time="09:00", end_time="18:00")]
    assert weekly_effective_minutes(shifts, BreakPolicy.standard()) == {MONDAY: 480}


def test_partial_range_uses_full_week_history():
    workplace = make_workplace()
    history = four_hour_weekdays()
    friday_only = history[-1:]

    assert weekly_rest_pay_for_range(friday_only, history, workplace) == 40000
    assert weekly_rest_pay_for_range(friday_only, None, workplace) == 0


def test_week_counted_once():
    workplace = make_workplace()
    history = four_hour_weekdays()
    assert weekly_rest_pay_for_range(history, history, workplace) == 40000


def test_only_touched_weeks_are_paid():
    workplace = make_workplace()
    history = four_hour_weekdays() + four_hour_weekdays(date(2024, 1, 8))
    second_week = history[5:6]
    assert weekly_rest_pay_for_range(second_week, history, workplace) == 40000
    assert weekly_rest_pay_for_range(history, history, workplace) == 80000


def test_no_shifts_no_allowance():
    assert weekly_rest_pay_for_range([], four_hour_weekdays(), make_workplace()) == 0


def test_policy_not_confirmed():
    workplace = make_workplace(weekly_rest=PolicySelection.UNKNOWN)
    history = four_hour_weekdays()
    assert weekly_rest_pay_for_range(history, history, workplace) == 0
