"""Service-layer helpers for the payslip pipeline."""

from .calculation_service import calculate_payslip, process
from .request_parser import parse_payslip_request
from .request_validator import validate_payslip_request
from .response_builder import format_payslip_result

__all__ = [
    "calculate_payslip",
    "format_payslip_result",
    "parse_payslip_request",
    "process",
    "validate_payslip_request",
]
