from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Optional, Tuple

from albapay.models.workplace import DeductionScheme, WorkplaceConfig


@dataclass(frozen=True)
class InsuranceBreakdown:
    """Four-insurance deduction, one amount per component (won)"""
    pension: int = 0
    health: int = 0
    long_term_care: int = 0
    employment: int = 0

    @property
    def total(self) -> int:
        return self.pension + self.health + self.long_term_care + self.employment

    def to_dict(self) -> dict:
        data = asdict(self)
        data['total'] = self.total
        return data


@dataclass(frozen=True)
class ShiftPay:
    """Minutes and pay items for a single shift"""
    work_minutes: int
    break_minutes: int
    effective_minutes: int
    night_minutes: int
    basic_pay: int
    night_pay: int
    holiday_pay: int


@dataclass(frozen=True)
class SalaryDetail:
    """Itemized pay for a set of shifts at one workplace"""
    total_minutes: int = 0
    basic_pay: int = 0
    night_pay: int = 0
    holiday_pay: int = 0
    weekly_rest_pay: int = 0
    total_before_tax: int = 0
    deduction: int = 0
    deduction_scheme: DeductionScheme = DeductionScheme.UNKNOWN
    insurance_breakdown: InsuranceBreakdown = field(default_factory=InsuranceBreakdown)
    total_after_tax: int = 0
    warnings: Tuple[str, ...] = ()

    @property
    def total_hours(self) -> int:
        return self.total_minutes // 60

    def to_dict(self) -> dict:
        return {
            'total_minutes': self.total_minutes,
            'total_hours': self.total_hours,
            'basic_pay': self.basic_pay,
            'night_pay': self.night_pay,
            'holiday_pay': self.holiday_pay,
            'weekly_rest_pay': self.weekly_rest_pay,
            'total_before_tax': self.total_before_tax,
            'deduction': self.deduction,
            'deduction_scheme': self.deduction_scheme.value,
            'insurance_breakdown': self.insurance_breakdown.to_dict(),
            'total_after_tax': self.total_after_tax,
            'warnings': list(self.warnings),
        }


@dataclass(frozen=True)
class WorkplaceSummary:
    workplace: WorkplaceConfig
    shift_count: int
    detail: SalaryDetail

    def to_dict(self) -> dict:
        data = self.detail.to_dict()
        data['workplace_id'] = self.workplace.id
        data['workplace_name'] = self.workplace.name
        data['shift_count'] = self.shift_count
        return data


@dataclass(frozen=True)
class RangeSummary:
    """Income across workplaces for an inclusive date range"""
    start: Optional[date]
    end: Optional[date]
    per_workplace: Tuple[WorkplaceSummary, ...] = ()

    @property
    def total_pay(self) -> int:
        return sum(s.detail.total_after_tax for s in self.per_workplace)

    @property
    def total_hours(self) -> int:
        return sum(s.detail.total_hours for s in self.per_workplace)

    @property
    def total_shifts(self) -> int:
        return sum(s.shift_count for s in self.per_workplace)

    def to_dict(self) -> dict:
        return {
            'start': self.start.isoformat() if self.start else None,
            'end': self.end.isoformat() if self.end else None,
            'total_pay': self.total_pay,
            'total_hours': self.total_hours,
            'total_shifts': self.total_shifts,
            'per_workplace': [s.to_dict() for s in self.per_workplace],
        }
