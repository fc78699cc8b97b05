from __future__ import annotations

import pytest

from shirt_trades.errors import ConfigParseError, ExclusionParseError
from shirt_trades.exclusions import ExclusionRule
from shirt_trades.models import RunSummary, SheetConfig, SheetResult


def test_sheet_config_uppercases_columns_and_parses_exclusions() -> None:
    sheet = SheetConfig(
        sheet_id="S1", team_num_col="b", team_name_col="c", desc_col="e,f", exclude_rows="2,10:"
    )

    assert sheet.column_refs() == ("B", "C", "", "", "E,F")
    assert sheet.exclusion_rules[0] == ExclusionRule(2, 2)
    assert sheet.first_column == ord("B")
    assert sheet.fetch_range == "B1:F"


def test_sheet_config_single_column_sheet_has_valid_range() -> None:
    sheet = SheetConfig(sheet_id="S1", team_num_col="D", team_name_col="D", start_row=4)

    assert sheet.fetch_range == "D4:D"


def test_sheet_config_is_immutable() -> None:
    sheet = SheetConfig(sheet_id="S1", team_num_col="A")

    with pytest.raises(AttributeError):
        sheet.seller = "someone else"  # type: ignore[misc]


def test_sheet_config_requires_id() -> None:
    with pytest.raises(ConfigParseError, match="missing an id"):
        SheetConfig(sheet_id="", team_num_col="A")


def test_sheet_config_requires_a_column() -> None:
    with pytest.raises(ConfigParseError, match="no column references"):
        SheetConfig(sheet_id="S1")


@pytest.mark.parametrize("start_row", [0, -3])
def test_sheet_config_rejects_non_positive_start_row(start_row: int) -> None:
    with pytest.raises(ConfigParseError, match="startRow"):
        SheetConfig(sheet_id="S1", team_num_col="A", start_row=start_row)


def test_sheet_config_rejects_bool_start_row() -> None:
    with pytest.raises(ConfigParseError, match="startRow"):
        SheetConfig(sheet_id="S1", team_num_col="A", start_row=True)


def test_sheet_config_rejects_bad_exclusions() -> None:
    with pytest.raises(ExclusionParseError):
        SheetConfig(sheet_id="S1", team_num_col="A", exclude_rows="4,five")


def test_sheet_result_enforces_row_accounting() -> None:
    SheetResult(sheet_id="S1", rows_fetched=5, rows_excluded=1, rows_blank=2, listings=2)

    with pytest.raises(ValueError, match="rows_fetched"):
        SheetResult(sheet_id="S1", rows_fetched=5, rows_excluded=1, rows_blank=1, listings=2)


def test_sheet_result_rejects_non_integer_and_negative_counts() -> None:
    with pytest.raises(TypeError, match="rows_fetched"):
        SheetResult(sheet_id="S1", rows_fetched=True)  # type: ignore[arg-type]

    with pytest.raises(ValueError, match="listings"):
        SheetResult(sheet_id="S1", listings=-1)


def test_run_summary_totals_and_dict() -> None:
    summary = RunSummary(
        year="2024",
        sheets=[
            SheetResult(sheet_id="S1", seller="A", range_spec="A1:E", rows_fetched=3, rows_excluded=1, listings=2),
            SheetResult(sheet_id="S2", seller="B", range_spec="B2:C", rows_fetched=4, rows_blank=1, listings=3),
        ],
        output_file="shirts-2024.csv",
    )

    assert summary.sheets_processed == 2
    assert summary.rows_fetched == 7
    assert summary.listings_written == 5
    payload = summary.to_dict()
    assert payload["listings_written"] == 5
    assert payload["sheets"][1] == {
        "sheet_id": "S2",
        "seller": "B",
        "range": "B2:C",
        "rows_fetched": 4,
        "rows_excluded": 0,
        "rows_blank": 1,
        "listings": 3,
    }
