"""Business rules a payslip request must satisfy before it is priced."""

from __future__ import annotations

from decimal import Decimal

from payslip.errors import ValidationError
from payslip.models import PayslipRequest

REQUEST_NULL = "Request is null"
INVALID_FORENAME = "First name is null or empty"
INVALID_SURNAME = "Last name is null or empty"
INVALID_SALARY = "Salary must be bigger than zero"
SUPER_RATE_NULL = "Super rate is null"
INVALID_SUPER_RATE = "Super rate must be between 0% - 50%"

MIN_SUPER_RATE = Decimal(0)
MAX_SUPER_RATE = Decimal(50)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_payslip_request(request: PayslipRequest | None) -> PayslipRequest:
    """Check ``request`` against the payroll rules and return it unchanged.

    Rules are checked in a fixed order and the first violation is raised as a
    :class:`ValidationError`.
    """

    if request is None or request.employee is None:
        raise ValidationError(REQUEST_NULL)

    employee = request.employee
    if _is_blank(employee.forename):
        raise ValidationError(INVALID_FORENAME)
    if _is_blank(employee.surname):
        raise ValidationError(INVALID_SURNAME)
    if employee.annual_salary <= 0:
        raise ValidationError(INVALID_SALARY)

    rate = request.super_rate
    if rate is None:
        raise ValidationError(SUPER_RATE_NULL)
    if rate < MIN_SUPER_RATE or rate > MAX_SUPER_RATE:
        raise ValidationError(INVALID_SUPER_RATE)

    return request


__all__ = [
    "INVALID_FORENAME",
    "INVALID_SALARY",
    "INVALID_SUPER_RATE",
    "INVALID_SURNAME",
    "REQUEST_NULL",
    "SUPER_RATE_NULL",
    "validate_payslip_request",
]
