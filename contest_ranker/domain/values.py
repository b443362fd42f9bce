"""
Value parsing helpers shared by the decoder and the ranking engine.

Submission feeds come from a spreadsheet export, so numbers carry locale
thousands separators and timestamps use the day-first `DD/MM/YYYY HH:MM:SS`
layout. These helpers never raise; unparsable input yields `None` (or the raw
text, for display formatting).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
DISPLAY_FORMAT = "%H:%M:%S %d/%m/%Y"

_SEPARATORS = str.maketrans("", "", ".,")
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def parse_integer(text: Optional[str]) -> Optional[int]:
    """
    Parse a loosely formatted integer.

    Every `.` and `,` is removed first, so "1.234.567", "1,234,567" and
    "1234567" are the same number. After leading whitespace, an optional sign
    and the leading run of digits are read; anything after them is ignored.

    Only ASCII digits count. Returns None when no digits can be read, or when
    the digit run is too long for int conversion.
    """
    if not text:
        return None
    match = _LEADING_INTEGER.match(text.translate(_SEPARATORS))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        return None


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """Parse a `DD/MM/YYYY HH:MM:SS` timestamp, or return None."""
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def format_timestamp(text: str) -> str:
    """
    Render a submission timestamp as `HH:MM:SS DD/MM/YYYY` for display.

    Text that does not parse is returned unchanged.
    """
    instant = parse_timestamp(text)
    if instant is None:
        return text
    return instant.strftime(DISPLAY_FORMAT)


def parse_validity(text: Optional[str]) -> bool:
    """True only when the trimmed flag equals "TRUE", ignoring case."""
    return (text or "").strip().upper() == "TRUE"


__all__ = [
    "DISPLAY_FORMAT",
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "parse_integer",
    "parse_timestamp",
    "parse_validity",
]
