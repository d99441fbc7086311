"""Pydantic models describing the tax table configuration schema."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """Represents a single progressive tax bracket.

    ``upper_bound`` is the inclusive annual salary ceiling of the bracket;
    ``None`` marks the open-ended top bracket. ``base_tax`` is the tax owed on
    all income below the bracket and ``marginal_rate`` applies to the part of
    the salary above the previous bracket's ceiling.
    """

    upper_bound: int | None = Field(default=None, alias="upper")
    base_tax: int = Field(default=0, alias="base")
    marginal_rate: Decimal = Field(alias="rate")

    @field_validator("marginal_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            raise ConfigurationError("Marginal rates must be numeric")
        try:
            # YAML hands floats over; go through ``str`` so the table holds the
            # literal value rather than its binary approximation.
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ConfigurationError(f"Invalid marginal rate '{value}'") from exc

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if not self.marginal_rate.is_finite() or self.marginal_rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self

    def covers(self, salary: int) -> bool:
        """Return ``True`` when ``salary`` falls under this bracket's ceiling."""

        return self.upper_bound is None or salary <= self.upper_bound


class TaxTable(ImmutableModel):
    """Ordered, immutable set of brackets making up an income tax schedule."""

    year: int
    jurisdiction: str = "AU"
    brackets: tuple[TaxBracket, ...]

    @model_validator(mode="after")
    def _validate_bracket_sequence(self) -> Self:
        if not self.brackets:
            raise ConfigurationError("At least one tax bracket must be defined")
        last_upper: int | None = None
        for bracket in self.brackets[:-1]:
            upper = bracket.upper_bound
            if upper is None:
                raise ConfigurationError("Only the final tax bracket may be open ended")
            if last_upper is not None and upper <= last_upper:
                raise ConfigurationError("Tax brackets must be in ascending order")
            last_upper = upper
        final_upper = self.brackets[-1].upper_bound
        if final_upper is not None:
            raise ConfigurationError("Final tax bracket must have an open upper bound")
        return self

    def resolve(self, salary: int) -> tuple[TaxBracket, int]:
        """Return the bracket for ``salary`` and the previous bracket's ceiling.

        Brackets are scanned in ascending order and the first one whose upper
        bound is at least ``salary`` wins, so a salary sitting exactly on a
        boundary is taxed by the lower bracket. The previous ceiling is ``0``
        for the first bracket.

        Raises ``KeyError`` when no bracket matches.
        """

        previous_upper = 0
        for bracket in self.brackets:
            if bracket.covers(salary):
                return bracket, previous_upper
            previous_upper = bracket.upper_bound or previous_upper
        raise KeyError(salary)


class TaxTableManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    jurisdiction: str = "AU"
    status: str = "active"

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxTableManifest(ImmutableModel):
    """Manifest describing the available tax table files."""

    default_year: int | None = None
    years: Sequence[TaxTableManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxTableManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        if self.default_year is not None and self.default_year not in seen:
            raise ConfigurationError(
                f"Default year {self.default_year} is not declared in the manifest"
            )
        return self

    def get_entry(self, year: int) -> TaxTableManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "ConfigurationError",
    "ImmutableModel",
    "TaxBracket",
    "TaxTable",
    "TaxTableManifest",
    "TaxTableManifestEntry",
    "ValidationError",
]
