"""Immutable request and result models shared by the payslip services."""

from .payslip import Employee, Month, PayslipRequest, PayslipResult, format_decimal

__all__ = [
    "Employee",
    "Month",
    "PayslipRequest",
    "PayslipResult",
    "format_decimal",
]
