from .salary_calculator import (
    calculate_salary_detail,
    calculate_range_summary,
    calculate_monthly_summary,
    month_range
)
from .candidate_reviewer import confirm_candidates
from .salary_report_generator import SalaryReportGenerator


__all__ = [
    'calculate_salary_detail',
    'calculate_range_summary',
    'calculate_monthly_summary',
    'month_range',
    'confirm_candidates',
    'SalaryReportGenerator'
]
