"""I/O helpers — load sheet configs, write listings and JSON artifacts."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import IO, Any

import pandas as pd

from shirt_trades import OUTPUT_COLUMNS
from shirt_trades.errors import ConfigParseError, ConfigReadError, WriteError
from shirt_trades.models import SheetConfig, ShirtListing

# ── Loading ──────────────────────────────────────────────────────

# JSON key (lower-cased) -> SheetConfig field
_CONFIG_KEYS: dict[str, str] = {
    "id": "sheet_id",
    "seller": "seller",
    "contact": "contact",
    "startrow": "start_row",
    "excluderows": "exclude_rows",
    "teamnumcol": "team_num_col",
    "teamnamecol": "team_name_col",
    "sizecol": "size_col",
    "yearcol": "year_col",
    "desccol": "desc_col",
}


def config_path(in_dir: Path, year: str) -> Path:
    return Path(in_dir) / f"shirt-sheets-{year}.json"


def output_path(out_dir: Path, year: str, suffix: str = ".csv") -> Path:
    return Path(out_dir) / f"shirts-{year}{suffix}"


def _to_start_row(value: Any, sheet_id: str) -> int:
    if value is None or value == "":
        return 1
    if isinstance(value, bool):
        raise ConfigParseError(f"startRow for {sheet_id} must be a row number")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise ConfigParseError(f"startRow for {sheet_id} must be a row number, got {value!r}")


def sheet_from_dict(raw: Any, position: int = 0) -> SheetConfig:
    """Build a :class:`SheetConfig` from one decoded JSON object.

    Keys match case-insensitively; unknown keys are ignored and missing
    ones default to empty.
    """
    if not isinstance(raw, dict):
        raise ConfigParseError(f"Sheet entry {position} must be an object")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _CONFIG_KEYS.get(str(key).lower())
        if name is None:
            continue
        if name != "start_row" and value is not None and not isinstance(value, str):
            raise ConfigParseError(f"Sheet entry {position}: {key!r} must be a string")
        values[name] = value

    sheet_id = values.get("sheet_id") or ""
    values["start_row"] = _to_start_row(values.get("start_row"), sheet_id or f"entry {position}")
    for name in _CONFIG_KEYS.values():
        if name != "start_row" and values.get(name) is None:
            values[name] = ""
    return SheetConfig(**values)


def load_sheet_configs(path: Path) -> list[SheetConfig]:
    """Load the per-year sheet list from *path*.

    Raises
    ------
    ConfigReadError
        If *path* does not exist or cannot be read.
    ConfigParseError
        If the JSON is malformed or an entry is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigReadError(f"Could not read input file at {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Could not read input file at {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list):
        raise ConfigParseError(f"{path} must contain a JSON array of sheets")

    return [sheet_from_dict(entry, position) for position, entry in enumerate(data)]


def load_listings(path: Path) -> pd.DataFrame:
    """Load an aggregated listings CSV, keeping every value as text."""
    path = Path(path)
    if not path.exists():
        raise ConfigReadError(f"Listings file not found: {path}")
    try:
        df = pd.read_csv(path, dtype="string", keep_default_na=False, encoding="utf-8")
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ConfigParseError(f"Could not parse listings CSV {path}") from exc
    missing = [col for col in OUTPUT_COLUMNS if col not in df.columns]
    if missing:
        raise ConfigParseError(f"{path} is missing columns: {', '.join(missing)}")
    return df


# ── Writing ──────────────────────────────────────────────────────


class ListingWriter:
    """CSV writer that flushes after every listing.

    A crashed run leaves every listing written so far on disk.
    """

    def __init__(self, stream: IO[str], *, name: str = "<stream>") -> None:
        self._stream = stream
        self._csv = csv.writer(stream, lineterminator="\n")
        self.name = name
        self.count = 0

    @classmethod
    def open(cls, path: Path) -> ListingWriter:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(path, "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise WriteError(f"Cannot create output CSV file {path}: {exc}") from exc
        return cls(stream, name=str(path))

    def _write_row(self, row: list[str]) -> None:
        try:
            self._csv.writerow(row)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise WriteError(f"Could not write to {self.name}: {exc}") from exc

    def write_header(self) -> None:
        self._write_row(list(OUTPUT_COLUMNS))

    def write(self, listing: ShirtListing) -> None:
        self._write_row(listing.to_row())
        self.count += 1

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> ListingWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as pretty-printed JSON to *path* (atomic + deterministic)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise WriteError(f"Could not write {path}: {exc}") from exc
    return path
