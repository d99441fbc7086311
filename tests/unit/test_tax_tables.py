"""Unit coverage for tax table discovery and parsing utilities."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from shutil import copy2

import pytest
import yaml
from pydantic import ValidationError

from payslip.config import tax_tables
from payslip.config.schema import ConfigurationError, TaxBracket, TaxTable


@pytest.fixture()
def isolated_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary configuration directory patched into ``tax_tables``."""

    original_directory = tax_tables.CONFIG_DIRECTORY
    for filename in ("manifest.yaml", "2017.yaml", "2018.yaml"):
        copy2(original_directory / filename, tmp_path / filename)

    monkeypatch.setattr(tax_tables, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(tax_tables, "MANIFEST_FILE", tmp_path / "manifest.yaml")
    tax_tables.load_tax_table.cache_clear()
    tax_tables.load_manifest.cache_clear()

    yield tmp_path

    tax_tables.load_tax_table.cache_clear()
    tax_tables.load_manifest.cache_clear()


def _add_manifest_year(directory: Path, year: int) -> None:
    manifest_path = directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text())
    manifest["years"].append({"year": year})
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False))
    tax_tables.load_manifest.cache_clear()


def test_available_years_lists_bundled_tables() -> None:
    assert tax_tables.available_years() == (2017, 2018)


def test_default_table_matches_2017_rates() -> None:
    table = tax_tables.default_tax_table()

    assert table.year == 2017
    assert table.jurisdiction == "AU"
    assert [bracket.upper_bound for bracket in table.brackets] == [
        18200,
        37000,
        80000,
        180000,
        None,
    ]
    assert [bracket.base_tax for bracket in table.brackets] == [0, 0, 3572, 17547, 54547]
    rates = [bracket.marginal_rate for bracket in table.brackets]
    assert rates == [Decimal("0"), Decimal("0.19"), Decimal("0.325"), Decimal("0.37"), Decimal("0.45")]
    assert all(isinstance(rate, Decimal) for rate in rates)


def test_default_table_is_cached() -> None:
    assert tax_tables.default_tax_table() is tax_tables.default_tax_table()


def test_default_tax_year_honours_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(tax_tables.TAX_YEAR_ENV, "2018")

    assert tax_tables.default_tax_year() == 2018


def test_default_tax_year_rejects_non_numeric_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(tax_tables.TAX_YEAR_ENV, "last-year")

    with pytest.raises(ConfigurationError, match="PAYSLIP_TAX_YEAR"):
        tax_tables.default_tax_year()


def test_load_tax_table_rejects_undeclared_year() -> None:
    with pytest.raises(FileNotFoundError, match="1999"):
        tax_tables.load_tax_table(1999)


def test_new_manifest_year_is_discovered(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "2030.yaml").write_text(
        (isolated_config_directory / "2018.yaml").read_text().replace("year: 2018", "year: 2030")
    )
    _add_manifest_year(isolated_config_directory, 2030)

    assert tax_tables.available_years() == (2017, 2018, 2030)
    assert tax_tables.load_tax_table(2030).brackets[2].upper_bound == 90000


def test_missing_table_file_is_reported(isolated_config_directory: Path) -> None:
    _add_manifest_year(isolated_config_directory, 2031)

    with pytest.raises(FileNotFoundError, match="2031.yaml"):
        tax_tables.load_tax_table(2031)


def test_year_mismatch_is_rejected(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "2032.yaml").write_text(
        (isolated_config_directory / "2017.yaml").read_text()
    )
    _add_manifest_year(isolated_config_directory, 2032)

    with pytest.raises(ConfigurationError, match="year mismatch"):
        tax_tables.load_tax_table(2032)


def test_non_mapping_file_is_rejected(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "2033.yaml").write_text("- 1\n- 2\n")
    _add_manifest_year(isolated_config_directory, 2033)

    with pytest.raises(ConfigurationError, match="mapping"):
        tax_tables.load_tax_table(2033)


def test_unordered_brackets_are_rejected(isolated_config_directory: Path) -> None:
    payload = {
        "year": 2034,
        "brackets": [
            {"upper": 37000, "base": 0, "rate": "0.19"},
            {"upper": 18200, "base": 0, "rate": "0"},
            {"base": 3572, "rate": "0.325"},
        ],
    }
    (isolated_config_directory / "2034.yaml").write_text(yaml.safe_dump(payload))
    _add_manifest_year(isolated_config_directory, 2034)

    with pytest.raises(ConfigurationError, match="validation failed"):
        tax_tables.load_tax_table(2034)


def test_duplicate_manifest_years_are_rejected(isolated_config_directory: Path) -> None:
    _add_manifest_year(isolated_config_directory, 2017)

    with pytest.raises(ConfigurationError, match="Duplicate year 2017"):
        tax_tables.load_manifest()


def test_bracket_rates_are_read_as_exact_decimals() -> None:
    bracket = TaxBracket.model_validate({"upper": 37000, "base": 0, "rate": 0.19})

    assert bracket.marginal_rate == Decimal("0.19")


def test_table_requires_open_final_bracket() -> None:
    with pytest.raises(ValidationError, match="open upper bound"):
        TaxTable(
            year=2017,
            brackets=(TaxBracket(upper=18200, base=0, rate="0"),),
        )


def test_table_rejects_negative_rates() -> None:
    with pytest.raises(ValidationError, match="non-negative"):
        TaxBracket(base=0, rate="-0.1")


@pytest.mark.parametrize(
    ("salary", "upper", "previous"),
    [
        (0, 18200, 0),
        (18200, 18200, 0),
        (18201, 37000, 18200),
        (180000, 180000, 80000),
        (10**12, None, 180000),
    ],
)
def test_resolve_returns_bracket_and_previous_ceiling(
    tax_table_2017: TaxTable, salary: int, upper: int | None, previous: int
) -> None:
    bracket, previous_upper = tax_table_2017.resolve(salary)

    assert bracket.upper_bound == upper
    assert previous_upper == previous
