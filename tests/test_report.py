"""Tests for the listings workbook."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import load_workbook

from shirt_trades import OUTPUT_COLUMNS
from shirt_trades.report import compute_seller_counts, write_report


def _listings() -> pd.DataFrame:
    rows = [
        ["118", "Robonauts", "L", "2019", "Blue", "Sam", "sam@x"],
        ["254", "Cheesy Poofs", "M", "2018", "=SUM(A1)", "Sam", "sam@x"],
        ["1678", "Citrus Circuits", "S", "2020", "-", "Kai", "kai@x"],
    ]
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS, dtype="string")


def test_compute_seller_counts_keeps_first_seen_order() -> None:
    counts = compute_seller_counts(_listings())

    assert counts["Seller"].tolist() == ["Sam", "Kai"]
    assert counts["Listings"].tolist() == [2, 1]


def test_compute_seller_counts_empty() -> None:
    counts = compute_seller_counts(pd.DataFrame(columns=OUTPUT_COLUMNS))

    assert counts.empty
    assert list(counts.columns) == ["Seller", "Contact", "Listings"]


def test_write_report_sheets_and_values(tmp_path: Path) -> None:
    path = write_report(tmp_path / "shirts-2024.xlsx", "2024", _listings())

    assert path.exists()
    assert not (tmp_path / "shirts-2024.tmp.xlsx").exists()
    wb = load_workbook(path)
    assert wb.sheetnames == ["Overview", "Listings", "Sellers"]

    listings_ws = wb["Listings"]
    assert [c.value for c in listings_ws[1]] == OUTPUT_COLUMNS
    assert listings_ws["A2"].value == "118"
    assert listings_ws.freeze_panes == "A2"
    assert "Listings" in listings_ws.tables

    sellers_ws = wb["Sellers"]
    assert [c.value for c in sellers_ws[2]] == ["Sam", "sam@x", 2]

    overview = wb["Overview"]
    assert overview["A1"].value == "Shirt trades 2024"
    assert overview["B4"].value == 3
    assert overview["B5"].value == 2


def test_write_report_escapes_formulas_only(tmp_path: Path) -> None:
    path = write_report(tmp_path / "r.xlsx", "2024", _listings())

    ws = load_workbook(path)["Listings"]
    assert ws["E3"].value == "'=SUM(A1)"
    assert ws["E4"].value == "-"


def test_write_report_keeps_dash_plus_and_quoted_text(tmp_path: Path) -> None:
    listings = pd.DataFrame(
        [
            ["118", "Robonauts", "L", "2019", "- signed", "Sam", "@sam"],
            ["254", "Cheesy Poofs", "M", "2018", "+1 extra", "Sam", "@sam"],
            ["971", "Spartans", "S", "2017", "'=already quoted", "Sam", "@sam"],
        ],
        columns=OUTPUT_COLUMNS,
        dtype="string",
    )

    ws = load_workbook(write_report(tmp_path / "r.xlsx", "2024", listings))["Listings"]

    assert [ws.cell(row=r, column=5).value for r in (2, 3, 4)] == [
        "- signed", "+1 extra", "'=already quoted",
    ]
    assert ws["G2"].value == "@sam"


def test_write_report_with_no_listings(tmp_path: Path) -> None:
    path = write_report(tmp_path / "empty.xlsx", "2023", pd.DataFrame(columns=OUTPUT_COLUMNS))

    wb = load_workbook(path)
    assert wb["Listings"].max_row == 1
    assert not wb["Listings"].tables
    assert wb["Overview"]["B4"].value == 0
