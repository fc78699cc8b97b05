"""Turn fetched spreadsheet rows into listings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from shirt_trades.columns import column_letters, letter_to_index
from shirt_trades.models import SheetConfig, ShirtListing

RawRow = Sequence[Any]


def _cell_text(row: RawRow, first_column: int, letter: str) -> str:
    index = letter_to_index(letter) - first_column
    if 0 <= index < len(row):
        value = row[index]
        return "" if value is None else str(value)
    # Sheets drops trailing empty cells, so short rows are normal.
    return ""


def extract_field(row: RawRow, first_column: int, column_ref: str) -> str:
    """Return the text at *column_ref* in *row*.

    *first_column* is the character code of the row's first cell.  A
    compound reference such as ``"C,D"`` joins each column's text with a
    single space.  Columns past the end of the row read as ``""``.
    """
    letters = column_letters(column_ref or "")
    if not letters:
        return ""
    return " ".join(_cell_text(row, first_column, letter) for letter in letters)


def split_combined_team(text: str) -> tuple[str, str]:
    """Split ``"254 - The Cheesy Poofs"`` into ``("254", "The Cheesy Poofs")``."""
    number, _sep, name = text.partition("-")
    return number.strip(), name.strip()


def extract_listing(row: RawRow, first_column: int, sheet: SheetConfig) -> ShirtListing | None:
    """Build a listing from *row*, or return None for a blank spacer row."""
    team_number = extract_field(row, first_column, sheet.team_num_col)
    team_name = extract_field(row, first_column, sheet.team_name_col)
    description = extract_field(row, first_column, sheet.desc_col)

    if sheet.team_num_col == sheet.team_name_col and "-" in team_number:
        team_number, team_name = split_combined_team(team_number)

    if not (team_number.strip() or team_name.strip() or description.strip()):
        return None

    return ShirtListing(
        team_number=team_number,
        team_name=team_name,
        size=extract_field(row, first_column, sheet.size_col),
        year=extract_field(row, first_column, sheet.year_col),
        description=description,
        seller=sheet.seller,
        contact=sheet.contact,
    )
