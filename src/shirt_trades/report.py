"""Excel report writer — produces ``shirts-<year>.xlsx`` from the listings CSV."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo
from openpyxl.worksheet.worksheet import Worksheet

from shirt_trades.errors import WriteError

# ── Style constants ──────────────────────────────────────────────

HEADER_FONT = Font(name="Calibri", bold=True, size=11, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="2F5496", end_color="2F5496", fill_type="solid")
HEADER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)

TITLE_FONT = Font(name="Calibri", bold=True, size=14, color="2F5496")
SUBTITLE_FONT = Font(name="Calibri", bold=False, size=10, color="808080")
VALUE_FONT = Font(name="Calibri", size=11)

_AUTO_WIDTH_SAMPLE_ROWS = 300
_MAX_COLUMN_WIDTH = 40


# ── Helpers ──────────────────────────────────────────────────────


def _style_header(ws: Worksheet, ncols: int, row: int = 1) -> None:
    for c in range(1, ncols + 1):
        cell = ws.cell(row=row, column=c)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGN


def _auto_width(ws: Worksheet) -> None:
    max_row = min(ws.max_row, _AUTO_WIDTH_SAMPLE_ROWS + 1)
    for c_idx in range(1, ws.max_column + 1):
        letter = get_column_letter(c_idx)
        width = 0
        for row in ws.iter_rows(min_row=1, max_row=max_row, min_col=c_idx, max_col=c_idx):
            width = max(width, len(str(row[0].value or "")))
        ws.column_dimensions[letter].width = min(width + 4, _MAX_COLUMN_WIDTH)


def _sanitize_table_name(name: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not re.match(r"^[A-Za-z_]", cleaned):
        cleaned = f"_{cleaned}"
    return cleaned[:255]


def _add_excel_table(ws: Worksheet, name: str, ncols: int, nrows: int) -> None:
    if nrows < 1 or ncols < 1:
        return
    ref = f"A1:{get_column_letter(ncols)}{nrows + 1}"
    table = Table(displayName=_sanitize_table_name(name), ref=ref)
    table.tableStyleInfo = TableStyleInfo(
        name="TableStyleMedium9", showFirstColumn=False,
        showLastColumn=False, showRowStripes=True, showColumnStripes=False,
    )
    ws.add_table(table)


def _excel_value(val: Any) -> Any:
    if val is None or val is pd.NA:
        return None
    if isinstance(val, str):
        if val.startswith("'"):
            return val
        # openpyxl stores any string starting with "=" as a formula.
        if val.startswith("="):
            return f"'{val}"
        return val
    item = getattr(val, "item", None)
    if callable(item):
        return item()
    return val


def _df_to_sheet(wb: Workbook, name: str, df: pd.DataFrame) -> None:
    ws = wb.create_sheet(title=name)
    col_names = [str(c) for c in df.columns]
    for c_idx, col_name in enumerate(col_names, 1):
        ws.cell(row=1, column=c_idx, value=col_name)
    for r_idx, row_vals in enumerate(df.itertuples(index=False, name=None), 2):
        for c_idx, val in enumerate(row_vals, 1):
            ws.cell(row=r_idx, column=c_idx, value=_excel_value(val))
    _style_header(ws, len(col_names))
    ws.freeze_panes = "A2"
    _auto_width(ws)
    _add_excel_table(ws, name, len(col_names), len(df))


# ── Summaries ────────────────────────────────────────────────────


def compute_seller_counts(listings: pd.DataFrame) -> pd.DataFrame:
    """Listings per seller, in first-seen order."""
    if listings.empty:
        return pd.DataFrame(columns=["Seller", "Contact", "Listings"])
    return (
        listings.groupby(["Seller", "Contact"], sort=False, as_index=False)
        .size()
        .rename(columns={"size": "Listings"})
    )


def _write_overview(wb: Workbook, year: str, listings: pd.DataFrame, sellers: pd.DataFrame) -> None:
    ws = wb.create_sheet(title="Overview", index=0)
    ws.cell(row=1, column=1, value=f"Shirt trades {year}").font = TITLE_FONT
    generated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    ws.cell(row=2, column=1, value=f"Generated {generated}").font = SUBTITLE_FONT
    ws.cell(row=4, column=1, value="Listings").font = VALUE_FONT
    ws.cell(row=4, column=2, value=len(listings)).font = VALUE_FONT
    ws.cell(row=5, column=1, value="Sellers").font = VALUE_FONT
    ws.cell(row=5, column=2, value=len(sellers)).font = VALUE_FONT
    ws.column_dimensions["A"].width = 22
    ws.column_dimensions["B"].width = 14


# ── Public API ───────────────────────────────────────────────────


def write_report(report_path: Path, year: str, listings: pd.DataFrame) -> Path:
    """Write the listings workbook to *report_path* and return the path."""
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    sellers = compute_seller_counts(listings)

    wb = Workbook()
    active_sheet = wb.active
    if active_sheet is not None:
        wb.remove(active_sheet)

    _df_to_sheet(wb, "Listings", listings)
    _df_to_sheet(wb, "Sellers", sellers)
    _write_overview(wb, year, listings, sellers)

    tmp_path = report_path.with_name(report_path.stem + ".tmp.xlsx")
    try:
        wb.save(tmp_path)
        tmp_path.replace(report_path)
    except OSError as exc:
        raise WriteError(f"Could not write report {report_path}: {exc}") from exc
    return report_path
