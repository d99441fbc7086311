"""Configuration loader for the bundled income tax tables."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    TaxBracket,
    TaxTable,
    TaxTableManifest,
    TaxTableManifestEntry,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"
TAX_YEAR_ENV = "PAYSLIP_TAX_YEAR"

_LOGGER = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_manifest() -> TaxTableManifest:
    """Load and cache the configuration manifest."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError("Configuration manifest not found")

    raw_manifest = _load_yaml(MANIFEST_FILE)

    try:
        return TaxTableManifest.model_validate(raw_manifest)
    except ValidationError as error:
        raise ConfigurationError(f"Manifest validation failed: {error}") from error


def manifest_entries() -> Sequence[TaxTableManifestEntry]:
    """Expose the configured manifest entries."""

    return load_manifest().years


def available_years() -> Sequence[int]:
    """Return the tax years declared in the manifest."""

    return load_manifest().supported_years


@lru_cache(maxsize=8)
def load_tax_table(year: int) -> TaxTable:
    """Load the tax table for the specified year from disk."""

    try:
        manifest_entry = load_manifest().get_entry(year)
    except KeyError as exc:
        raise FileNotFoundError(f"Tax table for year {year} not declared in manifest") from exc

    config_file = CONFIG_DIRECTORY / manifest_entry.resolved_filename
    if not config_file.exists():
        raise FileNotFoundError(
            f"Tax table file for year {year} missing: {config_file.name}"
        )

    raw_config = _load_yaml(config_file)
    raw_config.setdefault("year", year)
    raw_config.setdefault("jurisdiction", manifest_entry.jurisdiction)

    try:
        table = TaxTable.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Tax table validation failed for {year}: {error}") from error

    if table.year != year:
        raise ConfigurationError(
            f"Tax table year mismatch: expected {year}, found {table.year}"
        )

    _LOGGER.debug(
        "Loaded %s tax table for %s (%d brackets)",
        table.jurisdiction,
        year,
        len(table.brackets),
    )
    return table


def default_tax_year() -> int:
    """Return the tax year used when callers do not supply a table.

    ``PAYSLIP_TAX_YEAR`` takes precedence over the manifest's ``default_year``;
    without either the most recent configured year is used.
    """

    override = os.getenv(TAX_YEAR_ENV, "").strip()
    if override:
        try:
            return int(override)
        except ValueError as exc:
            raise ConfigurationError(
                f"{TAX_YEAR_ENV} must be a year, got '{override}'"
            ) from exc

    manifest = load_manifest()
    if manifest.default_year is not None:
        return manifest.default_year
    if not manifest.supported_years:
        raise ConfigurationError("No tax years are declared in the manifest")
    return manifest.supported_years[-1]


@lru_cache(maxsize=1)
def default_tax_table() -> TaxTable:
    """Return the process-wide default tax table."""

    return load_tax_table(default_tax_year())


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "MANIFEST_FILE",
    "TAX_YEAR_ENV",
    "TaxBracket",
    "TaxTable",
    "TaxTableManifest",
    "TaxTableManifestEntry",
    "available_years",
    "default_tax_table",
    "default_tax_year",
    "load_manifest",
    "load_tax_table",
    "manifest_entries",
]
