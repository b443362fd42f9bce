"""
Domain package for the contest ranker.

Exports the submission models and the value parsers shared by the decoder and
the ranking engine. Keep this package focused on data definitions and
validation concerns.
"""

from contest_ranker.domain.models import (
    DecodeReport,
    MalformedRow,
    ParsedRow,
    RankedRecord,
    Record,
    RowOutcome,
)
from contest_ranker.domain.values import (
    format_timestamp,
    parse_integer,
    parse_timestamp,
    parse_validity,
)

__all__ = [
    "DecodeReport",
    "MalformedRow",
    "ParsedRow",
    "RankedRecord",
    "Record",
    "RowOutcome",
    "format_timestamp",
    "parse_integer",
    "parse_timestamp",
    "parse_validity",
]
