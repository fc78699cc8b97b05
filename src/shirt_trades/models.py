"""Data models used across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Any

from shirt_trades import columns
from shirt_trades.errors import ConfigParseError
from shirt_trades.exclusions import ExclusionRule, parse_exclusions


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{field_name} must be an integer")
    result = int(value)
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return result


@dataclass(frozen=True)
class SheetConfig:
    """One seller's spreadsheet and where its listing fields live.

    Column references are upper-cased on construction and the exclusion spec
    is parsed eagerly, so a bad config fails before anything is fetched.
    """

    sheet_id: str
    seller: str = ""
    contact: str = ""
    start_row: int = 1
    exclude_rows: str = ""
    team_num_col: str = ""
    team_name_col: str = ""
    size_col: str = ""
    year_col: str = ""
    desc_col: str = ""
    exclusion_rules: tuple[ExclusionRule, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.sheet_id:
            raise ConfigParseError("Sheet entry is missing an id")
        if isinstance(self.start_row, bool) or not isinstance(self.start_row, int):
            raise ConfigParseError(f"startRow for {self.sheet_id} must be an integer")
        if self.start_row < 1:
            raise ConfigParseError(f"startRow for {self.sheet_id} must be >= 1")
        for name in ("team_num_col", "team_name_col", "size_col", "year_col", "desc_col"):
            object.__setattr__(self, name, (getattr(self, name) or "").upper())
        if not any(columns.column_letters(ref) for ref in self.column_refs()):
            raise ConfigParseError(f"Sheet {self.sheet_id} has no column references")
        object.__setattr__(self, "exclusion_rules", parse_exclusions(self.exclude_rows))

    def column_refs(self) -> tuple[str, str, str, str, str]:
        return (
            self.team_num_col,
            self.team_name_col,
            self.size_col,
            self.year_col,
            self.desc_col,
        )

    @property
    def first_column(self) -> int:
        """Character code of the leftmost fetched column."""
        return columns.bounding_range(self.column_refs())[0]

    @property
    def fetch_range(self) -> str:
        return columns.fetch_range(self.column_refs(), self.start_row)


@dataclass(frozen=True)
class ShirtListing:
    """A single shirt offered for trade, as written to the output CSV."""

    team_number: str
    team_name: str
    size: str
    year: str
    description: str
    seller: str
    contact: str

    def to_row(self) -> list[str]:
        return [
            self.team_number,
            self.team_name,
            self.size,
            self.year,
            self.description,
            self.seller,
            self.contact,
        ]


@dataclass
class SheetResult:
    """Row tallies for one processed sheet.

    Contract invariant: ``rows_fetched == rows_excluded + rows_blank + listings``.
    """

    sheet_id: str
    seller: str = ""
    range_spec: str = ""
    rows_fetched: int = 0
    rows_excluded: int = 0
    rows_blank: int = 0
    listings: int = 0

    def __post_init__(self) -> None:
        self.rows_fetched = _to_non_negative_int(self.rows_fetched, "rows_fetched")
        self.rows_excluded = _to_non_negative_int(self.rows_excluded, "rows_excluded")
        self.rows_blank = _to_non_negative_int(self.rows_blank, "rows_blank")
        self.listings = _to_non_negative_int(self.listings, "listings")
        skipped = self.rows_excluded + self.rows_blank
        if self.rows_fetched != skipped + self.listings:
            raise ValueError("rows_fetched must equal rows_excluded + rows_blank + listings")

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_id": self.sheet_id,
            "seller": self.seller,
            "range": self.range_spec,
            "rows_fetched": self.rows_fetched,
            "rows_excluded": self.rows_excluded,
            "rows_blank": self.rows_blank,
            "listings": self.listings,
        }


@dataclass
class RunSummary:
    """Totals for one aggregation run, in sheet order."""

    year: str
    sheets: list[SheetResult] = field(default_factory=list)
    output_file: str = ""
    sha256: str = ""

    @property
    def sheets_processed(self) -> int:
        return len(self.sheets)

    @property
    def rows_fetched(self) -> int:
        return sum(result.rows_fetched for result in self.sheets)

    @property
    def listings_written(self) -> int:
        return sum(result.listings for result in self.sheets)

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "output_file": self.output_file,
            "sha256": self.sha256,
            "sheets_processed": self.sheets_processed,
            "rows_fetched": self.rows_fetched,
            "listings_written": self.listings_written,
            "sheets": [result.to_dict() for result in self.sheets],
        }
