"""Test configuration utilities and shared fixtures."""

import sys
from decimal import Decimal
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from payslip.config import tax_tables  # noqa: E402
from payslip.config.schema import TaxTable  # noqa: E402
from payslip.models import Employee, Month, PayslipRequest  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep environment overrides and cached tables from leaking between tests."""

    monkeypatch.delenv(tax_tables.TAX_YEAR_ENV, raising=False)
    monkeypatch.delenv("PAYSLIP_PROFILE_CALCULATIONS", raising=False)
    monkeypatch.delenv("PAYSLIP_LOG_LEVEL", raising=False)
    tax_tables.default_tax_table.cache_clear()

    yield

    tax_tables.default_tax_table.cache_clear()


@pytest.fixture()
def tax_table_2017() -> TaxTable:
    """Return the bundled 2017 Australian tax table."""

    return tax_tables.load_tax_table(2017)


def build_request(
    forename: str | None = "David",
    surname: str | None = "Rudd",
    salary: str = "60050",
    super_rate: str | None = "9",
    month: Month = Month.MARCH,
) -> PayslipRequest:
    """Construct a request directly, bypassing the line parser."""

    return PayslipRequest(
        employee=Employee(
            forename=forename,
            surname=surname,
            annual_salary=Decimal(salary),
        ),
        super_rate=None if super_rate is None else Decimal(super_rate),
        month=month,
    )


@pytest.fixture()
def make_request():
    """Factory fixture building requests with sensible defaults."""

    return build_request
