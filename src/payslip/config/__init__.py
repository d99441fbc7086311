"""Tax table configuration: schema models, loaders and consistency checks."""

from .schema import ConfigurationError, TaxBracket, TaxTable
from .tax_tables import (
    available_years,
    default_tax_table,
    default_tax_year,
    load_tax_table,
)

__all__ = [
    "ConfigurationError",
    "TaxBracket",
    "TaxTable",
    "available_years",
    "default_tax_table",
    "default_tax_year",
    "load_tax_table",
]
