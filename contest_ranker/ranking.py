"""
Ranking engine: find the submissions closest to the announced target.

`rank` filters valid records by an optional case-insensitive substring of
their choice, attaches the absolute distance to the target, sorts, and keeps
the first `limit` entries. The first entry is the winner.

Ordering is total and deterministic:
1. smaller distance first;
2. earlier submission time, when both timestamps parse;
   otherwise the raw timestamp text compared lexicographically;
3. smaller `sequence_index`.

An unparsable target or an empty candidate set yields an empty ranking rather
than an error; `explain_empty` tells the two apart.
"""

from __future__ import annotations

import enum
from functools import cmp_to_key
from typing import Iterable, List, Optional

from contest_ranker.domain.models import RankedRecord, Record
from contest_ranker.domain.values import parse_integer, parse_timestamp
from contest_ranker.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_LIMIT = 5


class EmptyReason(str, enum.Enum):
    """Why a ranking came back empty."""

    INVALID_TARGET = "invalid_target"
    NO_CANDIDATES = "no_candidates"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_ranked(a: RankedRecord, b: RankedRecord) -> int:
    """Three-way comparison implementing the ranking order."""
    if a.distance != b.distance:
        return _sign(a.distance - b.distance)

    time_a = parse_timestamp(a.timestamp)
    time_b = parse_timestamp(b.timestamp)
    if time_a is not None and time_b is not None:
        if time_a != time_b:
            return -1 if time_a < time_b else 1
    elif a.timestamp != b.timestamp:
        return -1 if a.timestamp < b.timestamp else 1

    return _sign(a.sequence_index - b.sequence_index)


def filter_records(records: Iterable[Record], text_filter: str = "") -> List[Record]:
    """
    Keep valid records whose choice contains `text_filter`, ignoring case.

    A blank filter keeps every valid record. Input order is preserved.
    """
    needle = (text_filter or "").strip().casefold()
    return [
        record
        for record in records
        if record.is_valid and (not needle or needle in record.choice.casefold())
    ]


def count_candidates(records: Iterable[Record], text_filter: str = "") -> int:
    """Number of valid records the filter lets through."""
    return len(filter_records(records, text_filter))


def explain_empty(
    records: Iterable[Record], text_filter: str, target: str
) -> Optional[EmptyReason]:
    """
    Return the reason `rank` would produce no entries, or None if it would not.
    """
    if parse_integer(target) is None:
        return EmptyReason.INVALID_TARGET
    if not filter_records(records, text_filter):
        return EmptyReason.NO_CANDIDATES
    return None


def rank(
    records: Iterable[Record],
    text_filter: str,
    target: str,
    limit: int = DEFAULT_LIMIT,
) -> List[RankedRecord]:
    """
    Rank the filtered records by closeness to `target`.

    Parameters
    ----------
    records : Iterable[Record]
        Decoded records; invalid ones are ignored.
    text_filter : str
        Case-insensitive substring the choice must contain. Blank keeps all.
    target : str
        Reference value as typed by the user; `.` and `,` separators allowed.
    limit : int
        Maximum number of entries to return.

    Returns
    -------
    List[RankedRecord]
        At most `limit` entries, closest first. Empty when the target does not
        parse or no record passes the filter.
    """
    target_value = parse_integer(target)
    if target_value is None:
        log.debug("Target is not a number; no ranking", extra={"target": target})
        return []

    candidates = filter_records(records, text_filter)
    if not candidates:
        log.debug("No candidates match filter", extra={"text_filter": text_filter})
        return []

    ranked = [RankedRecord.from_record(record, target_value) for record in candidates]
    ranked.sort(key=cmp_to_key(compare_ranked))
    top = ranked[:limit]

    log.debug(
        "Ranking computed",
        extra={
            "target": target_value,
            "candidates": len(candidates),
            "returned": len(top),
            "winner_index": top[0].sequence_index,
        },
    )
    return top


__all__ = [
    "DEFAULT_LIMIT",
    "EmptyReason",
    "compare_ranked",
    "count_candidates",
    "explain_empty",
    "filter_records",
    "rank",
]
