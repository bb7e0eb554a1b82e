from .shift import Shift, ShiftCandidate
from .workplace import (
    PolicySelection,
    BreakType,
    BreakPolicy,
    DeductionScheme,
    InsuranceComponent,
    InsuranceSettings,
    AllowancePolicy,
    WorkplaceConfig
)
from .salary import InsuranceBreakdown, ShiftPay, SalaryDetail, WorkplaceSummary, RangeSummary

__all__ = [
    'Shift',
    'ShiftCandidate',
    'PolicySelection',
    'BreakType',
    'BreakPolicy',
    'DeductionScheme',
    'InsuranceComponent',
    'InsuranceSettings',
    'AllowancePolicy',
    'WorkplaceConfig',
    'InsuranceBreakdown',
    'ShiftPay',
    'SalaryDetail',
    'WorkplaceSummary',
    'RangeSummary'
]
