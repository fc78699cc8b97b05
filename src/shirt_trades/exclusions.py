"""Row exclusion specs like ``"2,5:7,:3,40:"``."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass

from shirt_trades.errors import ExclusionParseError

NO_UPPER_LIMIT = sys.maxsize


@dataclass(frozen=True)
class ExclusionRule:
    """Inclusive row interval; an exact rule has ``lower == upper``."""

    lower: int
    upper: int

    @classmethod
    def exact(cls, row: int) -> ExclusionRule:
        return cls(row, row)

    def matches(self, row: int) -> bool:
        return self.lower <= row <= self.upper

    def __str__(self) -> str:
        if self.lower == self.upper:
            return str(self.lower)
        low = "" if self.lower == 0 else str(self.lower)
        high = "" if self.upper == NO_UPPER_LIMIT else str(self.upper)
        return f"{low}:{high}"


def _parse_bound(text: str, spec: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise ExclusionParseError(
            f"Invalid row number {text!r} in excludeRows {spec!r}"
        ) from exc


def parse_exclusions(spec: str | None) -> tuple[ExclusionRule, ...]:
    """Parse a comma-separated exclusion spec into rules.

    ``"5"`` excludes row 5, ``"5:7"`` rows 5 to 7, ``":7"`` every row up to 7
    and ``"5:"`` every row from 5 on.  Empty terms are ignored.

    Raises
    ------
    ExclusionParseError
        If a non-empty bound is not an integer.
    """
    if not spec:
        return ()
    rules: list[ExclusionRule] = []
    for raw_term in spec.split(","):
        term = raw_term.strip()
        if not term:
            continue
        if ":" in term:
            low_text, high_text = (part.strip() for part in term.split(":", 1))
            lower = _parse_bound(low_text, spec) if low_text else 0
            upper = _parse_bound(high_text, spec) if high_text else NO_UPPER_LIMIT
            rules.append(ExclusionRule(lower, upper))
        else:
            rules.append(ExclusionRule.exact(_parse_bound(term, spec)))
    return tuple(rules)


def is_excluded(row: int, rules: Iterable[ExclusionRule]) -> bool:
    """Return True if *row* (1-based sheet row number) matches any rule."""
    return any(rule.matches(row) for rule in rules)
