"""Exception hierarchy raised while turning a request line into a payslip."""

from __future__ import annotations


class PayslipError(ValueError):
    """Base class for errors that terminate a single payslip request."""


class ParseError(PayslipError):
    """Raised when a request line cannot be parsed into a request."""


class ValidationError(PayslipError):
    """Raised when a request violates one of the payroll business rules."""


class CalculationError(PayslipError):
    """Raised when the tax table cannot price a request."""


__all__ = ["CalculationError", "ParseError", "PayslipError", "ValidationError"]
