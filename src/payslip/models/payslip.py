"""Value objects flowing through the payslip pipeline."""

from __future__ import annotations

import calendar
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, computed_field


class Month(IntEnum):
    """Calendar month, numbered from January = 1."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def from_name(cls, name: str) -> Month:
        """Return the month called ``name``, ignoring case.

        Raises ``KeyError`` for anything that is not a full English month name.
        """

        return cls[name.upper()]

    @property
    def display_name(self) -> str:
        # ``calendar.month_name`` follows the process locale; payslips are English.
        return self.name.capitalize()

    def length(self, leap_year: bool) -> int:
        """Number of days in the month for a leap or common year."""

        year = 2000 if leap_year else 2001
        return calendar.monthrange(year, self.value)[1]


def format_decimal(value: Decimal, places: int) -> str:
    """Render ``value`` half-up to at most ``places`` decimals, without padding."""

    with localcontext() as context:
        # Every whole digit of ``value`` must fit in the coefficient.
        context.prec = max(context.prec, value.adjusted() + places + 2)
        context.Emax = MAX_EMAX
        context.Emin = MIN_EMIN
        quantum = Decimal(1).scaleb(-places)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP).normalize()
    return f"{rounded:f}"


class _PayslipModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Employee(_PayslipModel):
    """Employee details as supplied in a request.

    Names are kept exactly as given; blank names are rejected by the request
    validator rather than at construction time.
    """

    forename: str | None
    surname: str | None
    annual_salary: Decimal

    @property
    def full_name(self) -> str:
        return f"{self.forename} {self.surname}"


class PayslipRequest(_PayslipModel):
    """A request for one employee's payslip in a given month."""

    employee: Employee
    super_rate: Decimal | None = None
    month: Month

    @property
    def full_name(self) -> str:
        return self.employee.full_name

    @property
    def annual_salary(self) -> Decimal:
        return self.employee.annual_salary

    def __str__(self) -> str:
        rate = "" if self.super_rate is None else format_decimal(self.super_rate, 2)
        return ",".join(
            [
                str(self.employee.forename),
                str(self.employee.surname),
                format_decimal(self.annual_salary, 0),
                f"{rate}%",
                self.month.display_name,
            ]
        )


class PayslipResult(_PayslipModel):
    """Monthly payslip figures, all in whole dollars."""

    name: str
    month: Month
    monthly_salary: int
    monthly_tax: int
    monthly_super: int

    @computed_field
    @property
    def net_income(self) -> int:
        return self.monthly_salary - self.monthly_tax


__all__ = [
    "Employee",
    "Month",
    "PayslipRequest",
    "PayslipResult",
    "format_decimal",
]
