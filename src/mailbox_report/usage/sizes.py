"""Size string parsing — converts Exchange size text to megabytes."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

NOT_AVAILABLE = "N/A"

_NUMBER = r"(?<![\d.,\-])(\d[\d,]*(?:\.\d+)?)"


@dataclass(frozen=True)
class ParsedSize:
    """A size normalised to megabytes, with the text to display for it."""

    size_mb: float
    display: str


@dataclass(frozen=True)
class _UnitRule:
    unit: str
    factor: float
    display_rounded: bool

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(rf"{_NUMBER}\s+{self.unit}\b", re.IGNORECASE)


# Evaluated in order; the first matching unit wins.
_RULES: tuple[_UnitRule, ...] = (
    _UnitRule(unit="GB", factor=1024.0, display_rounded=False),
    _UnitRule(unit="MB", factor=1.0, display_rounded=True),
    _UnitRule(unit="KB", factor=1.0 / 1024, display_rounded=False),
)
_PATTERNS = tuple((rule, rule.pattern) for rule in _RULES)


def _format_number(value: float) -> str:
    """Format a number with at most two decimals and no trailing zeros."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def match_size(raw_text: str | None) -> ParsedSize | None:
    """Parse a size string, returning None when no known unit is present.

    Args:
        raw_text: Text such as "1.5 GB (1,610,612,736 bytes)", "512 MB" or "340 KB".

    Returns:
        ParsedSize in megabytes, or None if the text has no GB, MB or KB value
        or the value is too large to represent.
    """
    if not raw_text:
        return None
    for rule, pattern in _PATTERNS:
        match = pattern.search(raw_text)
        if match is None:
            continue
        number_text = match.group(1).replace(",", "")
        number = float(number_text)
        size_mb = round(number * rule.factor, 2)
        if not math.isfinite(size_mb):
            return None
        shown = _format_number(round(number, 2)) if rule.display_rounded else number_text
        return ParsedSize(size_mb=size_mb, display=f"{shown} {rule.unit}")
    return None


def parse_size(raw_text: str | None) -> ParsedSize:
    """Parse a size string into megabytes, degrading to zero on unknown input.

    Unrecognised text ("0 B", "3 TB", "abc", empty) never raises; it yields
    ``ParsedSize(0.0, "N/A")`` so a single odd folder cannot break a report.

    Args:
        raw_text: Human-readable size text from the server.

    Returns:
        ParsedSize with the size in megabytes and its display string.
    """
    parsed = match_size(raw_text)
    if parsed is None:
        return ParsedSize(size_mb=0.0, display=NOT_AVAILABLE)
    return parsed
