"""CLI entry point for shirt-trades."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table as RichTable

from shirt_trades import __version__
from shirt_trades.aggregate import aggregate
from shirt_trades.errors import ArgumentError, ShirtsError
from shirt_trades.io import (
    ListingWriter,
    config_path,
    load_listings,
    load_sheet_configs,
    output_path,
    write_json,
)
from shirt_trades.report import write_report
from shirt_trades.sheets import GoogleSheetsClient, RangeFetcher
from shirt_trades.utils import sha256_file

app = typer.Typer(
    name="shirts",
    help="shirt-trades — Aggregate FRC shirt-trade spreadsheets into one CSV per year.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    # Messages carry seller names and paths from config; print them verbatim.
    return _noop if quiet else partial(console.print, markup=False)


def _err(msg: str) -> None:
    console.print(f"[red]x[/red] {escape(msg)}", highlight=False)


# ── Helpers ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"shirt-trades v{__version__}")
        raise typer.Exit()


def find_year(args: Sequence[str]) -> str:
    """Return the first 4-character argument, taken to be the year."""
    for arg in args:
        if len(arg) == 4:
            return arg
    raise ArgumentError("Required 4-digit year parameter not found")


def _make_fetcher(credentials: Path, token: Path) -> RangeFetcher:
    return GoogleSheetsClient.from_files(credentials, token)


# ── Callbacks ────────────────────────────────────────────────────


@app.callback()
def main(
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """shirt-trades CLI."""


# ── run command ──────────────────────────────────────────────────


@app.command()
def run(
    args: list[str] | None = typer.Argument(
        None, help="Arguments; the first 4-character one is the year.",
    ),
    in_dir: Path = typer.Option(
        Path("in"), "--in-dir",
        help="Directory holding shirt-sheets-<year>.json.",
    ),
    out_dir: Path = typer.Option(
        Path("out"), "--out-dir", "-o",
        help="Directory for shirts-<year>.csv and its summary.",
    ),
    credentials: Path = typer.Option(
        Path("credentials.json"), "--credentials",
        help="Google service-account or OAuth client JSON.",
    ),
    token: Path = typer.Option(
        Path("token.json"), "--token",
        help="Cached OAuth token (written after the first login).",
    ),
    xlsx: bool = typer.Option(
        False, "--xlsx",
        help="Also write shirts-<year>.xlsx.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress informational output.",
    ),
) -> None:
    """Fetch every configured sheet and write the year's listings CSV."""
    echo = _printer(quiet)
    try:
        year = find_year(args or [])
        sheets = load_sheet_configs(config_path(in_dir, year))

        if not quiet:
            console.print(Panel(
                f"[bold]shirt-trades[/bold] v{__version__}\n"
                f"Year:   {year}\nSheets: {len(sheets)}\nOutput: {escape(str(out_dir))}",
                title="Aggregation Start", border_style="blue",
            ))

        fetcher = _make_fetcher(credentials, token)
        csv_path = output_path(out_dir, year)
        with ListingWriter.open(csv_path) as writer:
            summary = aggregate(year, sheets, fetcher, writer, echo=echo)

        summary.sha256 = sha256_file(csv_path)
        summary_path = write_json(output_path(out_dir, year, ".summary.json"), summary.to_dict())
        echo(f"  CSV     -> {csv_path}")
        echo(f"  Summary -> {summary_path}")

        if xlsx:
            report_path = write_report(
                output_path(out_dir, year, ".xlsx"), year, load_listings(csv_path)
            )
            echo(f"  Report  -> {report_path}")
    except ShirtsError as exc:
        _err(str(exc))
        raise typer.Exit(code=1)

    if not quiet:
        console.print(Panel(
            f"[green]Done[/green] — {summary.listings_written} total listings written "
            f"for {summary.sheets_processed} sellers",
            title="Aggregation Complete", border_style="green",
        ))


# ── check command ────────────────────────────────────────────────


@app.command()
def check(
    args: list[str] | None = typer.Argument(
        None, help="Arguments; the first 4-character one is the year.",
    ),
    in_dir: Path = typer.Option(
        Path("in"), "--in-dir",
        help="Directory holding shirt-sheets-<year>.json.",
    ),
) -> None:
    """Validate a year's config and show the range each sheet will fetch.

    Nothing is fetched. Exit 0 = OK, exit 1 = bad config.
    """
    try:
        year = find_year(args or [])
        sheets = load_sheet_configs(config_path(in_dir, year))
    except ShirtsError as exc:
        _err(str(exc))
        raise typer.Exit(code=1)

    tbl = RichTable(title=f"Sheets for {year}", show_lines=True)
    tbl.add_column("Seller", style="bold")
    tbl.add_column("Sheet ID", overflow="fold")
    tbl.add_column("Range", no_wrap=True)
    tbl.add_column("Excluded rows", no_wrap=True)
    for sheet in sheets:
        excluded = ", ".join(str(rule) for rule in sheet.exclusion_rules)
        tbl.add_row(escape(sheet.seller), escape(sheet.sheet_id), sheet.fetch_range, excluded or "[dim]none[/dim]")
    console.print(tbl)
    console.print(f"  {len(sheets)} sheets OK")


# ── report command ───────────────────────────────────────────────


@app.command()
def report(
    args: list[str] | None = typer.Argument(
        None, help="Arguments; the first 4-character one is the year.",
    ),
    out_dir: Path = typer.Option(
        Path("out"), "--out-dir", "-o",
        help="Directory holding shirts-<year>.csv.",
    ),
) -> None:
    """Build shirts-<year>.xlsx from an existing listings CSV."""
    try:
        year = find_year(args or [])
        listings = load_listings(output_path(out_dir, year))
        report_path = write_report(output_path(out_dir, year, ".xlsx"), year, listings)
    except ShirtsError as exc:
        _err(str(exc))
        raise typer.Exit(code=1)
    console.print(f"  {len(listings)} listings -> {escape(str(report_path))}")
