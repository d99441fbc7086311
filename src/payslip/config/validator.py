"""Utilities for validating tax table data and surfacing issues."""

from __future__ import annotations

import argparse
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .schema import ConfigurationError, TaxBracket, TaxTable
from .tax_tables import available_years, load_tax_table


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_rates(brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []
    previous_rate: Decimal | None = None

    for index, bracket in enumerate(brackets):
        scope = f"brackets[{index}]"
        rate = bracket.marginal_rate
        if rate < 0 or rate > 1:
            errors.append(
                _format_scope(scope, f"marginal rate {rate} must be between 0 and 1")
            )
        if previous_rate is not None and rate < previous_rate:
            errors.append(
                _format_scope(
                    scope,
                    f"marginal rate {rate} is lower than the previous bracket's {previous_rate}",
                )
            )
        previous_rate = rate

    return errors


def _validate_base_tax(brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []

    if brackets and brackets[0].base_tax != 0:
        errors.append(_format_scope("brackets[0]", "first bracket must not carry base tax"))

    previous_lower = 0
    for index, bracket in enumerate(brackets):
        scope = f"brackets[{index}]"
        if bracket.base_tax < 0:
            errors.append(_format_scope(scope, "base tax must be non-negative"))
        if index == 0:
            continue

        previous = brackets[index - 1]
        previous_upper = previous.upper_bound or previous_lower
        expected = (
            previous.base_tax + (previous_upper - previous_lower) * previous.marginal_rate
        ).quantize(Decimal(1), rounding=ROUND_HALF_UP)

        if bracket.base_tax != expected:
            errors.append(
                _format_scope(
                    scope,
                    f"base tax {bracket.base_tax} does not match the cumulative tax "
                    f"{expected} of the preceding brackets",
                )
            )
        previous_lower = previous_upper

    return errors


def validate_tax_table(table: TaxTable) -> list[str]:
    """Return a list of validation issues for the provided tax table."""

    errors: list[str] = []

    errors.extend(_validate_rates(table.brackets))
    errors.extend(_validate_base_tax(table.brackets))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        table = load_tax_table(year)
        results[int(year)] = validate_tax_table(table)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the bundled tax tables and report inconsistencies."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            table = load_tax_table(year)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{year}] failed to load tax table: {error}")
            exit_code = 1
            continue

        issues = validate_tax_table(table)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
