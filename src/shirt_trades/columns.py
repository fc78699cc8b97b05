"""Column addressing: letters, character codes, and fetch ranges.

Columns are addressed by the character code of their letter (``ord("A")``
is 65).  The codes are only ever compared and subtracted from each other, so
they work as offsets without being shifted to a 0-based index.
"""

from __future__ import annotations

from collections.abc import Iterable

_FIRST = ord("A")
_LAST = ord("Z")


def _is_column_letter(char: str) -> bool:
    return len(char) == 1 and _FIRST <= ord(char) <= _LAST


def letter_to_index(letter: str) -> int:
    """Return the character code of a single column letter ``A``-``Z``."""
    if not _is_column_letter(letter):
        raise ValueError(f"Invalid column letter: {letter!r} (expected A-Z)")
    return ord(letter)


def index_to_letter(index: int) -> str:
    """Inverse of :func:`letter_to_index`."""
    if not _FIRST <= index <= _LAST:
        raise ValueError(f"Column code out of range: {index}")
    return chr(index)


def column_letters(column_ref: str) -> list[str]:
    """Return the column letters of *column_ref* in order.

    Anything that is not an uppercase letter is a separator, so ``"C,D"``,
    ``"C D"`` and ``"C+D"`` all give ``["C", "D"]``.
    """
    return [char for char in column_ref if _is_column_letter(char)]


def bounding_range(column_refs: Iterable[str]) -> tuple[int, int]:
    """Return ``(min_code, max_code)`` over every letter in *column_refs*.

    Raises
    ------
    ValueError
        If none of the references contains a column letter.
    """
    low: int | None = None
    high: int | None = None
    for ref in column_refs:
        for letter in column_letters(ref or ""):
            code = letter_to_index(letter)
            if low is None or code < low:
                low = code
            if high is None or code > high:
                high = code
    if low is None or high is None:
        raise ValueError("No column letters found in column references")
    return low, high


def fetch_range(column_refs: Iterable[str], start_row: int) -> str:
    """Return the open-ended A1 range covering *column_refs*, e.g. ``"A1:E"``."""
    low, high = bounding_range(column_refs)
    return f"{index_to_letter(low)}{start_row}:{index_to_letter(high)}"
