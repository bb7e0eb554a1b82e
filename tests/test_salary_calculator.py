from datetime import date

import pytest

from albapay.models import (
    DeductionScheme,
    PolicySelection,
    SalaryDetail,
    Shift,
    WorkplaceConfig
)
from albapay.processors.salary_calculator import (
    WARNING_DEDUCTION_UNSET,
    WARNING_HOLIDAY_UNCONFIRMED,
    WARNING_INSURANCE_UNSET,
    WARNING_NIGHT_UNCONFIRMED,
    WARNING_WEEKLY_REST_UNCONFIRMED,
    calculate_monthly_summary,
    calculate_range_summary,
    calculate_salary_detail,
    month_range,
)
from conftest import full_insurance, make_workplace

UNKNOWN = PolicySelection.UNKNOWN
NO = PolicySelection.NO


def week_of_new_year():
    return [
        Shift(date=date(2024, 1, 1), start_time="09:00", end_time="18:00", is_holiday=True),
        Shift(date=date(2024, 1, 2), start_time="09:00", end_time="18:00", is_holiday=False),
        Shift(date=date(2024, 1, 3), start_time="21:00", end_time="06:00"),
    ]


def test_full_detail():
    detail = calculate_salary_detail(week_of_new_year(), make_workplace())

    assert detail.total_minutes == 1620
    assert detail.total_hours == 27
    assert detail.basic_pay == 270000
    assert detail.night_pay == 40000
    assert detail.holiday_pay == 45000
    # 27h of 40h, times 8 paid hours
    assert detail.weekly_rest_pay == 54000
    assert detail.total_before_tax == 409000
    assert detail.deduction == 13497
    assert detail.deduction_scheme is DeductionScheme.WITHHOLDING_3_3
    assert detail.total_after_tax == 395503
    assert detail.warnings == ()


def test_four_insurance_detail():
    workplace = make_workplace(scheme=DeductionScheme.FOUR_INSURANCE, insurance=full_insurance())
    detail = calculate_salary_detail(week_of_new_year(), workplace)

    assert detail.deduction == detail.insurance_breakdown.total
    assert detail.total_after_tax == detail.total_before_tax - detail.deduction


def test_night_scenario():
    workplace = make_workplace(weekly_rest=NO, holiday=NO)
    shift = Shift(date=date(2024, 1, 3), start_time="21:00", end_time="06:00")

    detail = calculate_salary_detail([shift], workplace)

    assert detail.total_minutes == 540
    assert detail.night_pay == 40000


def test_empty_input():
    detail = calculate_salary_detail([], make_workplace())
    assert detail == SalaryDetail(deduction_scheme=DeductionScheme.WITHHOLDING_3_3)


def test_empty_input_still_reports_unset_deduction():
    detail = calculate_salary_detail([], make_workplace(scheme=DeductionScheme.UNKNOWN))
    assert detail.total_after_tax == 0
    assert detail.warnings == (WARNING_DEDUCTION_UNSET,)


def test_missing_workplace_is_all_unknown():
    detail = calculate_salary_detail(week_of_new_year(), None)

    assert detail.total_before_tax == 0
    assert detail.total_minutes == 1620
    assert detail.warnings == (
        WARNING_WEEKLY_REST_UNCONFIRMED,
        WARNING_NIGHT_UNCONFIRMED,
        WARNING_HOLIDAY_UNCONFIRMED,
        WARNING_DEDUCTION_UNSET,
    )


def test_warning_order_with_empty_four_insurance():
    workplace = make_workplace(weekly_rest=UNKNOWN, night=UNKNOWN, holiday=UNKNOWN,
                               scheme=DeductionScheme.FOUR_INSURANCE)
    detail = calculate_salary_detail(week_of_new_year(), workplace)

    assert detail.warnings == (
        WARNING_WEEKLY_REST_UNCONFIRMED,
        WARNING_NIGHT_UNCONFIRMED,
        WARNING_HOLIDAY_UNCONFIRMED,
        WARNING_INSURANCE_UNSET,
    )
    assert detail.deduction == 0


def test_no_is_a_confirmed_decision():
    workplace = make_workplace(weekly_rest=NO, night=NO, holiday=NO)
    detail = calculate_salary_detail(week_of_new_year(), workplace)

    assert detail.warnings == ()
    assert detail.night_pay == detail.holiday_pay == detail.weekly_rest_pay == 0


def test_unknown_holiday_policy():
    workplace = make_workplace(holiday=UNKNOWN)
    detail = calculate_salary_detail(week_of_new_year(), workplace)

    assert detail.holiday_pay == 0
    assert detail.warnings == (WARNING_HOLIDAY_UNCONFIRMED,)


def test_legacy_unconfirmed_setting_warns():
    workplace = WorkplaceConfig.from_dict({
        'hourlyWage': 10000,
        'taxType': 'withholding3_3',
        'settings': {
            'weeklyHolidayPay': {'supported': True, 'userConfirmed': True},
            'nightPay': {'supported': True, 'userConfirmed': False},
            'holidayPay': {'supported': False, 'userConfirmed': False},
        },
    })
    detail = calculate_salary_detail(week_of_new_year(), workplace)

    assert detail.warnings == (WARNING_NIGHT_UNCONFIRMED,)
    assert detail.weekly_rest_pay == 54000
    assert detail.night_pay == 0


def test_history_sizes_weekly_rest():
    shifts = week_of_new_year()
    detail = calculate_salary_detail(shifts[:1], make_workplace(), history=shifts)
    assert detail.weekly_rest_pay == 54000

    detail = calculate_salary_detail(shifts[:1], make_workplace())
    assert detail.weekly_rest_pay == 0


def test_idempotent():
    shifts = week_of_new_year()
    workplace = make_workplace(scheme=DeductionScheme.FOUR_INSURANCE, insurance=full_insurance())
    assert calculate_salary_detail(shifts, workplace) == calculate_salary_detail(shifts, workplace)


def test_to_dict():
    data = calculate_salary_detail(week_of_new_year(), make_workplace()).to_dict()
    assert data['total_after_tax'] == 395503
    assert data['deduction_scheme'] == 'withholding3_3'
    assert data['insurance_breakdown']['total'] == 0
    assert data['warnings'] == []


def test_month_range():
    assert month_range("2024-01", "2024-03") == (date(2024, 1, 1), date(2024, 3, 31))
    assert month_range("2024-03", "2024-02") == (date(2024, 2, 1), date(2024, 3, 31))
    assert month_range("2024-02", "2024-02") == (date(2024, 2, 1), date(2024, 2, 29))


@pytest.mark.parametrize("bad", ["2024-13", "2024-1", "abc", ""])
def test_month_range_rejects_malformed(bad):
    with pytest.raises(ValueError):
        month_range(bad, "2024-01")


def month_edge_shifts():
    # Mon 1/29, Wed 1/31, Fri 2/2: one week split across two months
    return [
        Shift(date=date(2024, 1, 29), start_time="10:00", end_time="16:00", workplace_id='cafe'),
        Shift(date=date(2024, 1, 31), start_time="10:00", end_time="16:00", workplace_id='cafe'),
        Shift(date=date(2024, 2, 2), start_time="10:00", end_time="16:00", workplace_id='cafe'),
    ]


def test_monthly_summary_sizes_split_week_from_history():
    cafe = make_workplace(night=NO, holiday=NO)
    store = make_workplace(id='store', name='Store')

    january = calculate_monthly_summary([cafe, store], month_edge_shifts(), 2024, 1)

    assert len(january.per_workplace) == 1
    cafe_summary = january.per_workplace[0]
    assert cafe_summary.shift_count == 2
    assert cafe_summary.detail.basic_pay == 120000
    # 18h in the week: 18/40 * 8 = 3.6h
    assert cafe_summary.detail.weekly_rest_pay == 36000
    assert cafe_summary.detail.total_after_tax == 150852

    february = calculate_monthly_summary([cafe, store], month_edge_shifts(), 2024, 2)
    assert february.per_workplace[0].detail.total_after_tax == 92832


def test_range_summary_totals():
    cafe = make_workplace(night=NO, holiday=NO)
    store = make_workplace(id='store', name='Store', night=NO, holiday=NO, weekly_rest=NO)
    shifts = month_edge_shifts() + [
        Shift(date=date(2024, 1, 10), start_time="18:00", end_time="20:00", workplace_id='store'),
    ]

    summary = calculate_range_summary([cafe, store], shifts, *month_range("2024-01", "2024-02"))

    assert [s.workplace.id for s in summary.per_workplace] == ['cafe', 'store']
    assert summary.total_shifts == 4
    assert summary.total_hours == 18 + 2
    store_net = 20000 - 660
    cafe_gross = 180000 + 36000
    assert summary.total_pay == store_net + cafe_gross - 7128
    assert summary.to_dict()['per_workplace'][1]['workplace_name'] == 'Store'


def test_range_summary_empty():
    summary = calculate_range_summary([make_workplace()], [], date(2024, 1, 1), date(2024, 1, 31))
    assert summary.per_workplace == ()
    assert summary.total_pay == 0
