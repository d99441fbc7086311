"""Utilities for rendering payslip results."""

from __future__ import annotations

import calendar
from datetime import date

from payslip.models import PayslipResult


def format_pay_period(result: PayslipResult, year: int | None = None) -> str:
    """Return ``01 <Month> - <last day> <Month>`` for the result's month.

    February's length follows the leap status of ``year``, which defaults to
    the current calendar year.
    """

    if year is None:
        year = date.today().year
    month_name = result.month.display_name
    days = result.month.length(calendar.isleap(year))
    return f"01 {month_name} - {days} {month_name}"


def format_payslip_result(result: PayslipResult, year: int | None = None) -> str:
    """Render ``result`` as the canonical comma separated payslip line."""

    fields = [
        result.name,
        format_pay_period(result, year),
        result.monthly_salary,
        result.monthly_tax,
        result.net_income,
        result.monthly_super,
    ]
    return ",".join(str(field) for field in fields)


__all__ = ["format_pay_period", "format_payslip_result"]
