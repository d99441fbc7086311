"""Orchestrate request validation and the monthly payslip calculations.

The calculation service ties the request validator, the calculator helpers and
the configured tax table together so that callers have a single ``process``
entry point. Profiling hooks live here as well, keeping the calculators free
of instrumentation.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from decimal import DecimalException
from time import perf_counter

from payslip.config.schema import TaxTable
from payslip.config.tax_tables import default_tax_table
from payslip.errors import CalculationError
from payslip.models import PayslipRequest, PayslipResult

from .calculators import (
    calculate_monthly_income,
    calculate_monthly_super,
    calculate_monthly_tax,
)
from .request_validator import validate_payslip_request

PROFILE_ENV = "PAYSLIP_PROFILE_CALCULATIONS"

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def calculate_payslip(request: PayslipRequest, tax_table: TaxTable) -> PayslipResult:
    """Price an already validated ``request`` against ``tax_table``."""

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    salary = request.annual_salary

    try:
        with _profile_section("income", timings):
            monthly_salary = calculate_monthly_income(salary)

        with _profile_section("tax", timings):
            monthly_tax = calculate_monthly_tax(salary, tax_table)

        with _profile_section("super", timings):
            # Super is based on the rounded monthly salary, not the annual figure.
            monthly_super = calculate_monthly_super(monthly_salary, request.super_rate)
    except DecimalException as exc:
        raise CalculationError(
            f"cannot calculate a payslip for annual salary '{salary}'"
        ) from exc

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_payslip timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return PayslipResult(
        name=request.full_name,
        month=request.month,
        monthly_salary=monthly_salary,
        monthly_tax=monthly_tax,
        monthly_super=monthly_super,
    )


def process(request: PayslipRequest, tax_table: TaxTable | None = None) -> PayslipResult:
    """Validate ``request`` and compute its monthly payslip.

    ``tax_table`` defaults to the process-wide table for the configured tax
    year. Raises :class:`~payslip.errors.ValidationError` for requests that
    break a payroll rule and :class:`~payslip.errors.CalculationError` when the
    table has no bracket for the salary or the salary is too large to price.
    """

    validate_payslip_request(request)
    table = tax_table if tax_table is not None else default_tax_table()

    result = calculate_payslip(request, table)
    _LOGGER.debug(
        "Processed payslip for %s (%s, %s tax table)",
        result.name,
        result.month.display_name,
        table.year,
    )
    return result


__all__ = ["PROFILE_ENV", "calculate_payslip", "process"]
