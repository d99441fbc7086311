"""Command line shell around the payslip pipeline.

Usage:
    payslip "David,Rudd,60050,9%,March" "Ryan,Chen,120000,10%,March"
    payslip                      # interactive mode, one request per line
    payslip --tax-year 2018 "Ryan,Chen,120000,10%,March"
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable, Sequence, TextIO

from payslip.config.schema import ConfigurationError, TaxTable
from payslip.config.tax_tables import default_tax_table, load_tax_table
from payslip.errors import PayslipError
from payslip.services import format_payslip_result, parse_payslip_request, process
from payslip.version import get_project_version

LOG_LEVEL_ENV = "PAYSLIP_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
EXIT_COMMAND = "exit"
REQUEST_FORMAT = "<first_name>,<last_name>,<annual_salary>,<super_rate>%,<month>"
REQUEST_EXAMPLE = "David,Rudd,60050,9%,March"

_LOGGER = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _payslip_line(line: str, tax_table: TaxTable) -> str:
    request = parse_payslip_request(line)
    result = process(request, tax_table)
    return format_payslip_result(result)


def run_arguments(requests: Sequence[str], tax_table: TaxTable, out: TextIO) -> int:
    """Process each request in order; failures do not stop later requests."""

    exit_code = 0
    for index, line in enumerate(requests):
        try:
            print(_payslip_line(line, tax_table), file=out)
        except PayslipError as error:
            message = f"(argument: {index}): {error}"
            print(message, file=out)
            _LOGGER.debug("%s", message, exc_info=True)
            exit_code = 1
    return exit_code


def run_interactive(lines: Iterable[str], tax_table: TaxTable, out: TextIO) -> int:
    """Read requests from ``lines`` until ``exit`` or the end of input."""

    print("Employee Monthly Payslip Tool - Interactive Mode", file=out)
    print(f"Request format: {REQUEST_FORMAT}", file=out)
    print(f"For example: {REQUEST_EXAMPLE}\n", file=out)

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line:
            continue
        if line == EXIT_COMMAND:
            break
        try:
            print(_payslip_line(line, tax_table), file=out)
        except PayslipError as error:
            print(error, file=out)
            _LOGGER.debug("%s", error, exc_info=True)
    return 0


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payslip",
        description="Calculate monthly payslips from annual salary requests.",
    )
    parser.add_argument(
        "requests",
        nargs="*",
        help=(
            f"Payslip requests formatted as {REQUEST_FORMAT.replace('%', '%%')}; "
            "starts interactive mode when omitted"
        ),
    )
    parser.add_argument(
        "--tax-year",
        type=int,
        help="Tax table year to apply (defaults to PAYSLIP_TAX_YEAR or the manifest default)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, "").strip().upper() or DEFAULT_LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity (default: %(default)s)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_project_version()}",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entry point for the ``payslip`` console script."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    # argparse does not check defaults against ``choices``.
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"{LOG_LEVEL_ENV} must be one of {', '.join(LOG_LEVELS)}, "
            f"got '{args.log_level}'"
        )
    _configure_logging(args.log_level)

    try:
        if args.tax_year is not None:
            tax_table = load_tax_table(args.tax_year)
        else:
            tax_table = default_tax_table()
    except (FileNotFoundError, ConfigurationError) as error:
        parser.error(str(error))

    out = stdout if stdout is not None else sys.stdout
    if args.requests:
        return run_arguments(args.requests, tax_table, out)
    return run_interactive(stdin if stdin is not None else sys.stdin, tax_table, out)


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
