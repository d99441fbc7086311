"""Monthly payslip calculator.

``parse`` turns a ``forename,surname,salary,rate%,month`` line into a
:class:`PayslipRequest`; ``process`` validates a request and prices it
against the configured tax table.
"""

from .errors import CalculationError, ParseError, PayslipError, ValidationError
from .models import Employee, Month, PayslipRequest, PayslipResult
from .services import format_payslip_result, process
from .services import parse_payslip_request as parse

__all__ = [
    "CalculationError",
    "Employee",
    "Month",
    "ParseError",
    "PayslipError",
    "PayslipRequest",
    "PayslipResult",
    "ValidationError",
    "format_payslip_result",
    "parse",
    "process",
]
