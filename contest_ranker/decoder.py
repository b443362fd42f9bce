"""
Tabular decoder for the submission feed.

Turns the raw CSV-like export into typed `Record` values. The first row is a
header and is discarded. Rows that split into fewer than `MIN_FIELDS` fields
are reported as `MalformedRow` outcomes and logged, never raised; decoding
always continues with the remaining rows.

Usage:
    from contest_ranker.decoder import decode, decode_feed

    records = decode(raw_text)          # valid records only
    report = decode_feed(raw_text)      # every outcome, for diagnostics
    print(report.malformed_count)
"""

from __future__ import annotations

from typing import List

from contest_ranker.domain.models import DecodeReport, MalformedRow, ParsedRow, Record
from contest_ranker.domain.values import parse_integer, parse_validity
from contest_ranker.utils.logging import get_logger

log = get_logger(__name__)

DELIMITER = ","
QUOTE = '"'
MIN_FIELDS = 5


def _closing_quote(row: str, start: int) -> int:
    """
    Index of the quote closing a field opened at `start`, or -1.

    A closing quote must be followed by the delimiter or the end of the row;
    doubled quotes inside the field are skipped as escapes.
    """
    pos = start + 1
    end = len(row)
    while pos < end:
        if row[pos] == QUOTE:
            if pos + 1 < end and row[pos + 1] == QUOTE:
                pos += 2
                continue
            if pos + 1 == end or row[pos + 1] == DELIMITER:
                return pos
            return -1
        pos += 1
    return -1


def split_fields(row: str) -> List[str]:
    """
    Split one row into fields.

    A field wrapped in double quotes may contain the delimiter, and `""`
    inside it stands for a literal quote. A quote-opened field that is not
    closed right before a delimiter (or the end of the row) is taken verbatim.
    An empty row yields a single empty field.
    """
    fields: List[str] = []
    pos = 0
    end = len(row)
    while True:
        closing = _closing_quote(row, pos) if pos < end and row[pos] == QUOTE else -1
        if closing >= 0:
            fields.append(row[pos + 1 : closing].replace(QUOTE * 2, QUOTE))
            pos = closing + 1
        else:
            stop = row.find(DELIMITER, pos)
            if stop < 0:
                stop = end
            fields.append(row[pos:stop])
            pos = stop
        if pos >= end:
            return fields
        pos += 1  # step over the delimiter


def _data_rows(raw_text: str) -> List[str]:
    rows = [row.rstrip("\r") for row in raw_text.strip().split("\n")]
    return rows[1:]


def decode_row(row: str, sequence_index: int) -> ParsedRow | MalformedRow:
    """Decode a single post-header row into a tagged outcome."""
    values = split_fields(row)
    if len(values) < MIN_FIELDS:
        return MalformedRow(
            sequence_index=sequence_index,
            line_number=sequence_index + 2,
            raw=row,
            field_count=len(values),
        )

    timestamp, phone, choice, prediction, validity = values[:MIN_FIELDS]
    record = Record(
        sequence_index=sequence_index,
        timestamp=timestamp,
        phone=phone,
        choice=choice,
        prediction=parse_integer(prediction) or 0,
        is_valid=parse_validity(validity),
    )
    return ParsedRow(record=record)


def decode_feed(raw_text: str) -> DecodeReport:
    """
    Decode the whole feed, keeping every per-row outcome in input order.
    """
    outcomes: List[ParsedRow | MalformedRow] = []
    for index, row in enumerate(_data_rows(raw_text)):
        outcome = decode_row(row, index)
        if isinstance(outcome, MalformedRow):
            log.warning(
                "Skipping malformed row",
                extra={
                    "line_number": outcome.line_number,
                    "raw": row,
                    "field_count": outcome.field_count,
                },
            )
        outcomes.append(outcome)

    report = DecodeReport(outcomes=outcomes)
    log.info(
        "Feed decoded",
        extra={
            "rows": len(outcomes),
            "valid": len(report.valid_records),
            "invalid": report.invalid_count,
            "malformed": report.malformed_count,
        },
    )
    return report


def decode(raw_text: str) -> List[Record]:
    """
    Decode the feed and return only the valid records, in input order.
    """
    return decode_feed(raw_text).valid_records


__all__ = ["MIN_FIELDS", "decode", "decode_feed", "decode_row", "split_fields"]
