from typing import Tuple

from albapay.config.settings import WITHHOLDING_RATE
from albapay.models.salary import InsuranceBreakdown
from albapay.models.workplace import DeductionScheme, InsuranceSettings, WorkplaceConfig
from albapay.utils.money import floor_won, percent_of


def withholding_tax(gross_pay: int) -> int:
    """3.3% business income withholding"""
    return floor_won(gross_pay * WITHHOLDING_RATE)


def insurance_deduction(gross_pay: int, settings: InsuranceSettings) -> InsuranceBreakdown:
    """Worker share of the four social insurances.

    Long-term care is levied on the health insurance amount, not on gross pay.
    """
    settings = settings or InsuranceSettings()

    pension = percent_of(gross_pay, settings.pension.rate) if settings.pension.enabled else 0
    health = percent_of(gross_pay, settings.health.rate) if settings.health.enabled else 0
    long_term_care = (
        percent_of(health, settings.long_term_care.rate)
        if settings.long_term_care.enabled and health > 0
        else 0
    )
    employment = percent_of(gross_pay, settings.employment.rate) if settings.employment.enabled else 0

    return InsuranceBreakdown(
        pension=pension,
        health=health,
        long_term_care=long_term_care,
        employment=employment,
    )


def apply_deduction(gross_pay: int, workplace: WorkplaceConfig) -> Tuple[int, InsuranceBreakdown]:
    """Deduction under the workplace's scheme, plus the insurance breakdown"""
    breakdown = insurance_deduction(gross_pay, workplace.insurance)

    if workplace.deduction_scheme is DeductionScheme.WITHHOLDING_3_3:
        return withholding_tax(gross_pay), breakdown
    if workplace.deduction_scheme is DeductionScheme.FOUR_INSURANCE:
        return breakdown.total, breakdown
    return 0, breakdown
