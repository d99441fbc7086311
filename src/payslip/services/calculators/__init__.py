"""Calculator helpers used by the payslip calculation service."""

from .payslip import (
    calculate_annual_tax,
    calculate_monthly_income,
    calculate_monthly_super,
    calculate_monthly_tax,
    resolve_bracket,
)
from .utils import (
    MONTHS_PER_YEAR,
    divide_half_up,
    percentage_to_rate,
    round_half_up,
    truncate,
)

__all__ = [
    "MONTHS_PER_YEAR",
    "calculate_annual_tax",
    "calculate_monthly_income",
    "calculate_monthly_super",
    "calculate_monthly_tax",
    "divide_half_up",
    "percentage_to_rate",
    "resolve_bracket",
    "round_half_up",
    "truncate",
]
