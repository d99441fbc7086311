"""Monthly payslip arithmetic."""

from __future__ import annotations

from decimal import Decimal, localcontext

from payslip.config.schema import TaxBracket, TaxTable
from payslip.errors import CalculationError

from .utils import (
    MONEY_CONTEXT,
    MONTHS_PER_YEAR,
    divide_half_up,
    floor_whole,
    percentage_to_rate,
    truncate,
)


def calculate_monthly_income(annual_salary: Decimal) -> int:
    """Gross monthly income: the annual salary over twelve, rounded half-up."""

    return divide_half_up(annual_salary, MONTHS_PER_YEAR)


def resolve_bracket(annual_salary: Decimal, tax_table: TaxTable) -> tuple[TaxBracket, int]:
    """Look up the bracket for the whole-dollar part of ``annual_salary``."""

    salary = floor_whole(annual_salary)
    try:
        return tax_table.resolve(salary)
    except KeyError as exc:
        raise CalculationError(
            f"No tax rule found for annual salary '{salary}'"
        ) from exc


def calculate_annual_tax(annual_salary: Decimal, tax_table: TaxTable) -> Decimal:
    """Unrounded income tax owed on ``annual_salary``."""

    bracket, previous_upper = resolve_bracket(annual_salary, tax_table)
    with localcontext(MONEY_CONTEXT):
        taxable = annual_salary - previous_upper
        return taxable * bracket.marginal_rate + bracket.base_tax


def calculate_monthly_tax(annual_salary: Decimal, tax_table: TaxTable) -> int:
    """Monthly income tax: annual tax over twelve, rounded half-up once."""

    return divide_half_up(calculate_annual_tax(annual_salary, tax_table), MONTHS_PER_YEAR)


def calculate_monthly_super(monthly_salary: int, super_rate: Decimal) -> int:
    """Superannuation for the month.

    The rate is converted to a fraction half-up at 99 decimal places, but the
    product with the monthly salary is truncated, not rounded.
    """

    rate = percentage_to_rate(super_rate)
    with localcontext(MONEY_CONTEXT):
        return truncate(rate * monthly_salary)
