from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, Optional, Tuple

from albapay.models.shift import Shift
from albapay.models.workplace import BreakPolicy, WorkplaceConfig
from albapay.processors.allowance_calculator import weekly_rest_pay
from albapay.processors.time_calculator import break_minutes, effective_minutes, work_minutes


def week_start(day: date) -> date:
    """Monday of the week containing ``day``"""
    return day - timedelta(days=day.weekday())


def group_by_week(shifts: Iterable[Shift]) -> Dict[date, Tuple[Shift, ...]]:
    """Shifts bucketed by the Monday that starts their week, in date order"""
    buckets = defaultdict(list)
    for shift in sorted(shifts, key=lambda s: (s.date, s.start_time)):
        buckets[week_start(shift.date)].append(shift)
    return {monday: tuple(buckets[monday]) for monday in sorted(buckets)}


def shift_effective_minutes(shift: Shift, policy: BreakPolicy) -> int:
    total = work_minutes(shift.start_time, shift.end_time)
    return effective_minutes(total, break_minutes(total, policy))


def weekly_effective_minutes(shifts: Iterable[Shift], policy: BreakPolicy) -> Dict[date, int]:
    totals = defaultdict(int)
    for shift in shifts:
        totals[week_start(shift.date)] += shift_effective_minutes(shift, policy)
    return dict(totals)


def weekly_rest_pay_for_range(range_shifts: Iterable[Shift], history: Optional[Iterable[Shift]],
                              workplace: WorkplaceConfig) -> int:
    """Weekly-rest allowance for every week the queried shifts touch.

    Each week is sized from all of the workplace's shifts in that week
    (``history``), so a range that cuts a week in half neither loses nor
    invents the allowance. Falls back to ``range_shifts`` without history.
    """
    range_shifts = tuple(range_shifts)
    weeks = {week_start(s.date) for s in range_shifts}
    if not weeks:
        return 0

    source = range_shifts if history is None else tuple(history)
    minutes_by_week = weekly_effective_minutes(
        (s for s in source if week_start(s.date) in weeks),
        workplace.break_policy,
    )

    return sum(
        weekly_rest_pay(minutes_by_week.get(monday, 0), workplace.hourly_wage,
                        workplace.allowances.weekly_rest)
        for monday in sorted(weeks)
    )
