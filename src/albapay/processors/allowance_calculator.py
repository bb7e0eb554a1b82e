"""Allowance rules.

Every premium is gated on the workplace's confirmed policy: only
``PolicySelection.YES`` pays. ``NO`` and ``UNKNOWN`` both pay nothing; the
difference only matters for the warnings raised by the salary calculator.
Amounts are whole won, floored.
"""
from decimal import Decimal

from albapay.config.settings import (
    HOLIDAY_PREMIUM_RATE,
    NIGHT_PREMIUM_RATE,
    WEEKLY_REST_FULL_HOURS,
    WEEKLY_REST_MIN_HOURS,
    WEEKLY_REST_PAID_HOURS,
)
from albapay.models.salary import ShiftPay
from albapay.models.shift import Shift
from albapay.models.workplace import PolicySelection, WorkplaceConfig
from albapay.processors.time_calculator import (
    adjust_for_break,
    break_minutes,
    effective_minutes,
    night_minutes,
    work_minutes,
)
from albapay.utils.money import floor_won
from albapay.utils.validators import to_decimal

MINUTES_PER_HOUR = Decimal('60')


def _hours(minutes: int) -> Decimal:
    return Decimal(minutes) / MINUTES_PER_HOUR


def basic_pay(effective_mins: int, hourly_wage) -> int:
    return floor_won(Decimal(effective_mins) * to_decimal(hourly_wage) / MINUTES_PER_HOUR)


def night_pay(start_time: str, end_time: str, hourly_wage, policy: PolicySelection,
              break_mins: int = 0, total_minutes: int = 0) -> int:
    """50% premium on hours worked 22:00-06:00, net of prorated break time"""
    if policy is not PolicySelection.YES:
        return 0
    adjusted = adjust_for_break(night_minutes(start_time, end_time), total_minutes, break_mins)
    return floor_won(Decimal(adjusted) * to_decimal(hourly_wage) * NIGHT_PREMIUM_RATE / MINUTES_PER_HOUR)


def holiday_pay(is_holiday, effective_mins: int, hourly_wage, policy: PolicySelection) -> int:
    """50% premium for work on an official public holiday.

    Only the externally supplied holiday flag counts; an unset flag or a
    weekend date alone is not a holiday.
    """
    if policy is not PolicySelection.YES or is_holiday is not True:
        return 0
    return floor_won(Decimal(effective_mins) * to_decimal(hourly_wage) * HOLIDAY_PREMIUM_RATE / MINUTES_PER_HOUR)


def weekly_rest_pay(weekly_minutes: int, hourly_wage, policy: PolicySelection) -> int:
    """Paid rest day for one week, prorated on a 40-hour week"""
    if policy is not PolicySelection.YES:
        return 0

    weekly_hours = _hours(weekly_minutes)
    if weekly_hours < WEEKLY_REST_MIN_HOURS:
        return 0

    capped = min(weekly_hours, Decimal(WEEKLY_REST_FULL_HOURS))
    allowance_hours = capped / WEEKLY_REST_FULL_HOURS * WEEKLY_REST_PAID_HOURS
    return floor_won(allowance_hours * to_decimal(hourly_wage))


def calculate_shift_pay(shift: Shift, workplace: WorkplaceConfig) -> ShiftPay:
    """Minutes and basic/night/holiday pay for one shift"""
    total = work_minutes(shift.start_time, shift.end_time)
    brk = break_minutes(total, workplace.break_policy)
    effective = effective_minutes(total, brk)
    wage = workplace.hourly_wage

    return ShiftPay(
        work_minutes=total,
        break_minutes=brk,
        effective_minutes=effective,
        night_minutes=night_minutes(shift.start_time, shift.end_time),
        basic_pay=basic_pay(effective, wage),
        night_pay=night_pay(shift.start_time, shift.end_time, wage,
                            workplace.allowances.night, brk, total),
        holiday_pay=holiday_pay(shift.is_holiday, effective, wage, workplace.allowances.holiday),
    )
