from __future__ import annotations

import pytest

from shirt_trades.columns import (
    bounding_range,
    column_letters,
    fetch_range,
    index_to_letter,
    letter_to_index,
)


def test_letter_to_index_uses_character_codes() -> None:
    assert letter_to_index("A") == 65
    assert letter_to_index("Z") == 90
    assert letter_to_index("E") - letter_to_index("A") == 4


@pytest.mark.parametrize("bad", ["a", "AB", "", "1", ","])
def test_letter_to_index_rejects_non_letters(bad: str) -> None:
    with pytest.raises(ValueError, match="column letter"):
        letter_to_index(bad)


def test_index_to_letter_inverts_letter_to_index() -> None:
    assert index_to_letter(letter_to_index("Q")) == "Q"
    with pytest.raises(ValueError):
        index_to_letter(91)


def test_column_letters_skips_separators() -> None:
    assert column_letters("C,D") == ["C", "D"]
    assert column_letters("C + D + F") == ["C", "D", "F"]
    assert column_letters("") == []


def test_bounding_range_scans_compound_references() -> None:
    assert bounding_range(["B", "", "D,G", "C", ""]) == (ord("B"), ord("G"))


def test_bounding_range_single_letter_updates_both_bounds() -> None:
    assert bounding_range(["C", "C", "", "", "C"]) == (ord("C"), ord("C"))


def test_bounding_range_descending_letters() -> None:
    assert bounding_range(["E", "D", "C", "B", "A"]) == (ord("A"), ord("E"))


def test_bounding_range_without_letters_raises() -> None:
    with pytest.raises(ValueError, match="No column letters"):
        bounding_range(["", ",", ""])


def test_fetch_range_is_open_ended() -> None:
    assert fetch_range(["A", "B", "C", "D", "E"], 1) == "A1:E"
    assert fetch_range(["B", "B", "", "", "B"], 3) == "B3:B"
