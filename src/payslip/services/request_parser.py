"""Helpers for turning a comma separated request line into a payslip request."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from payslip.errors import ParseError
from payslip.models import Employee, Month, PayslipRequest

SEPARATOR = ","
ELEMENT_COUNT = 5

INVALID_ELEMENT_COUNT = (
    "invalid element count: a payslip request must consist of "
    f"{ELEMENT_COUNT} (non empty) elements"
)
INVALID_SUPER_RATE = "super rate must have at least 1 number & end with a %"
MISSING_PERCENT_SUFFIX = "super rate must be suffixed with a % character"

# Plain decimal notation with an optional exponent; no digit separators.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _split_line(line: str | None) -> list[str]:
    if line is None:
        raise ParseError(INVALID_ELEMENT_COUNT)

    tokens = [token.strip() for token in line.split(SEPARATOR)]
    elements = [token for token in tokens if token]
    if len(elements) != ELEMENT_COUNT:
        raise ParseError(INVALID_ELEMENT_COUNT)
    return elements


def _parse_decimal(value: str, field_name: str) -> Decimal:
    message = f"cannot parse {field_name} '{value}' into a number"
    if NUMBER_PATTERN.fullmatch(value) is None:
        raise ParseError(message)
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ParseError(message) from exc


def _parse_super_rate(value: str) -> Decimal:
    if len(value) < 2:
        raise ParseError(INVALID_SUPER_RATE)
    if not value.endswith("%"):
        raise ParseError(MISSING_PERCENT_SUFFIX)
    return _parse_decimal(value[:-1], "super rate")


def _parse_month(value: str) -> Month:
    try:
        return Month.from_name(value)
    except KeyError as exc:
        raise ParseError(f"{value} is an invalid month") from exc


def parse_payslip_request(line: str | None) -> PayslipRequest:
    """Parse ``line`` into a :class:`PayslipRequest`.

    The line holds ``forename,surname,annual_salary,super_rate%,month``.
    Whitespace around each element is ignored and empty elements are dropped
    before counting. The first problem found, in element order, is raised as a
    :class:`ParseError`; names are passed through untouched.
    """

    forename, surname, salary, rate, month = _split_line(line)

    employee = Employee(
        forename=forename,
        surname=surname,
        annual_salary=_parse_decimal(salary, "annual salary"),
    )
    return PayslipRequest(
        employee=employee,
        super_rate=_parse_super_rate(rate),
        month=_parse_month(month),
    )


__all__ = [
    "ELEMENT_COUNT",
    "INVALID_ELEMENT_COUNT",
    "INVALID_SUPER_RATE",
    "MISSING_PERCENT_SUFFIX",
    "parse_payslip_request",
]
