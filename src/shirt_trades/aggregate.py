"""Aggregation run — fetch every sheet and stream its listings to the CSV."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from shirt_trades.exclusions import is_excluded
from shirt_trades.extract import extract_listing
from shirt_trades.io import ListingWriter
from shirt_trades.models import RunSummary, SheetConfig, SheetResult
from shirt_trades.sheets import RangeFetcher


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def process_sheet(
    sheet: SheetConfig,
    fetcher: RangeFetcher,
    writer: ListingWriter,
    *,
    echo: Callable[..., None] = _noop,
) -> SheetResult:
    """Fetch *sheet* and write its listings; return the row tallies.

    Fetch and write errors propagate unchanged.
    """
    range_spec = sheet.fetch_range
    first_column = sheet.first_column
    echo(f"Retrieving data of range {range_spec} for {sheet.sheet_id}")
    rows = fetcher.fetch_range(sheet.sheet_id, range_spec)

    excluded = blank = written = 0
    for offset, row in enumerate(rows):
        row_number = sheet.start_row + offset
        if is_excluded(row_number, sheet.exclusion_rules):
            echo(f"  Row {row_number} was marked as excluded. Skipping.")
            excluded += 1
            continue
        listing = extract_listing(row, first_column, sheet)
        if listing is None:
            echo(f"  Row {row_number} was empty. Skipping.")
            blank += 1
            continue
        writer.write(listing)
        written += 1

    echo(f'{written} listings for seller "{sheet.seller}" written to CSV')
    return SheetResult(
        sheet_id=sheet.sheet_id,
        seller=sheet.seller,
        range_spec=range_spec,
        rows_fetched=len(rows),
        rows_excluded=excluded,
        rows_blank=blank,
        listings=written,
    )


def aggregate(
    year: str,
    sheets: Iterable[SheetConfig],
    fetcher: RangeFetcher,
    writer: ListingWriter,
    *,
    echo: Callable[..., None] = _noop,
) -> RunSummary:
    """Write the header, then every sheet's listings in config order."""
    summary = RunSummary(year=year, output_file=Path(writer.name).name)
    writer.write_header()
    for sheet in sheets:
        summary.sheets.append(process_sheet(sheet, fetcher, writer, echo=echo))
    return summary
