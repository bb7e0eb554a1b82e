"""Salary detail for a set of shifts, and income summaries across workplaces.

Pay is computed from explicit rules only. Nothing here performs I/O; the
holiday flag on each shift and the workplace configuration are facts
supplied by the caller.
"""
import calendar
import logging
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

from albapay.models.salary import RangeSummary, SalaryDetail, WorkplaceSummary
from albapay.models.shift import Shift
from albapay.models.workplace import DeductionScheme, PolicySelection, WorkplaceConfig
from albapay.processors.allowance_calculator import calculate_shift_pay
from albapay.processors.deduction_calculator import apply_deduction
from albapay.processors.weekly_aggregator import weekly_rest_pay_for_range

logger = logging.getLogger(__name__)

WARNING_WEEKLY_REST_UNCONFIRMED = '주휴수당 설정이 확인되지 않아 계산에서 제외되었습니다.'
WARNING_NIGHT_UNCONFIRMED = '야간수당 설정이 확인되지 않아 계산에서 제외되었습니다.'
WARNING_HOLIDAY_UNCONFIRMED = '휴일수당 설정이 확인되지 않아 계산에서 제외되었습니다.'
WARNING_DEDUCTION_UNSET = '세금/공제 유형이 설정되지 않아 공제가 반영되지 않았습니다.'
WARNING_INSURANCE_UNSET = '4대보험 공제 항목이 설정되지 않아 계산에서 제외되었습니다.'

MONTH_PATTERN = re.compile(r'^(\d{4})-(\d{2})$')


def generate_warnings(workplace: WorkplaceConfig) -> Tuple[str, ...]:
    """Warnings for assumptions the user has not confirmed, in display order"""
    warnings = []
    allowances = workplace.allowances

    if allowances.weekly_rest is PolicySelection.UNKNOWN:
        warnings.append(WARNING_WEEKLY_REST_UNCONFIRMED)
    if allowances.night is PolicySelection.UNKNOWN:
        warnings.append(WARNING_NIGHT_UNCONFIRMED)
    if allowances.holiday is PolicySelection.UNKNOWN:
        warnings.append(WARNING_HOLIDAY_UNCONFIRMED)

    if workplace.deduction_scheme is DeductionScheme.UNKNOWN:
        warnings.append(WARNING_DEDUCTION_UNSET)
    elif workplace.deduction_scheme is DeductionScheme.FOUR_INSURANCE and not workplace.insurance.has_any_enabled():
        warnings.append(WARNING_INSURANCE_UNSET)

    return tuple(warnings)


def calculate_salary_detail(shifts: Iterable[Shift], workplace: Optional[WorkplaceConfig],
                            history: Optional[Iterable[Shift]] = None) -> SalaryDetail:
    """Itemized pay for ``shifts`` at one workplace.

    ``history`` is every shift recorded for the workplace; when given, it sizes
    the weekly-rest allowance of each week the queried shifts touch.
    """
    workplace = workplace or WorkplaceConfig()
    shifts = tuple(shifts)
    history = tuple(history) if history is not None else None

    total_minutes = 0
    basic = night = holiday = 0
    for shift in shifts:
        pay = calculate_shift_pay(shift, workplace)
        total_minutes += pay.effective_minutes
        basic += pay.basic_pay
        night += pay.night_pay
        holiday += pay.holiday_pay

    weekly_rest = weekly_rest_pay_for_range(shifts, history, workplace)

    total_before_tax = basic + night + holiday + weekly_rest
    deduction, breakdown = apply_deduction(total_before_tax, workplace)

    logger.debug(
        "Salary for %s: %d shifts, %d min, gross %d, deduction %d",
        workplace.id, len(shifts), total_minutes, total_before_tax, deduction
    )

    return SalaryDetail(
        total_minutes=total_minutes,
        basic_pay=basic,
        night_pay=night,
        holiday_pay=holiday,
        weekly_rest_pay=weekly_rest,
        total_before_tax=total_before_tax,
        deduction=deduction,
        deduction_scheme=workplace.deduction_scheme,
        insurance_breakdown=breakdown,
        total_after_tax=total_before_tax - deduction,
        warnings=generate_warnings(workplace),
    )


def month_range(start_month: str, end_month: str) -> Tuple[date, date]:
    """Inclusive date range covering two "YYYY-MM" months, in either order"""
    bounds = []
    for value in (start_month, end_month):
        match = MONTH_PATTERN.match(value or '')
        if not match or not 1 <= int(match.group(2)) <= 12:
            raise ValueError(f"Invalid month {value!r}, expected YYYY-MM")
        bounds.append((int(match.group(1)), int(match.group(2))))

    first, last = sorted(bounds)
    last_day = calendar.monthrange(*last)[1]
    return date(first[0], first[1], 1), date(last[0], last[1], last_day)


def calculate_range_summary(workplaces: Iterable[WorkplaceConfig], shifts: Iterable[Shift],
                            start: date, end: date) -> RangeSummary:
    """Income per workplace for shifts dated within ``[start, end]``.

    Each workplace's full shift list is passed as history so weekly-rest
    allowance is sized on whole weeks at the range edges.
    """
    shifts = tuple(shifts)
    per_workplace: List[WorkplaceSummary] = []

    for workplace in workplaces:
        history = tuple(s for s in shifts if s.workplace_id == workplace.id)
        in_range = tuple(s for s in history if start <= s.date <= end)
        if not in_range:
            continue

        detail = calculate_salary_detail(in_range, workplace, history=history)
        per_workplace.append(WorkplaceSummary(workplace=workplace, shift_count=len(in_range), detail=detail))

    return RangeSummary(start=start, end=end, per_workplace=tuple(per_workplace))


def calculate_monthly_summary(workplaces: Iterable[WorkplaceConfig], shifts: Iterable[Shift],
                              year: int, month: int) -> RangeSummary:
    last_day = calendar.monthrange(year, month)[1]
    return calculate_range_summary(workplaces, shifts, date(year, month, 1), date(year, month, last_day))
