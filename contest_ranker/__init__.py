"""
Contest Ranker - find the submissions closest to an announced number.

This package decodes a contest's published submission feed (a loosely
formatted CSV export) and ranks the valid submissions by how close their
prediction is to the final reference number:

- Tabular decoding with quoted fields and malformed-row diagnostics
- Case-insensitive choice filtering
- Deterministic top-N ranking with timestamp and row-order tie-breaks
- Explicit board state for presentation layers (loading, error, winner)
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from contest_ranker.board import (
    BoardState,
    ContestBoard,
    HasWinner,
    Loading,
    NoWinner,
    Ready,
    SourceError,
)
from contest_ranker.config import Settings, get_settings
from contest_ranker.decoder import decode, decode_feed, split_fields
from contest_ranker.domain.models import DecodeReport, MalformedRow, RankedRecord, Record
from contest_ranker.errors import ContestRankerError, SourceUnavailable
from contest_ranker.infrastructure.feed import FeedFetcher, FileFeedFetcher, HttpFeedFetcher
from contest_ranker.ranking import EmptyReason, count_candidates, explain_empty, rank
from contest_ranker.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "DecodeReport",
    "MalformedRow",
    "RankedRecord",
    "Record",
    # Decoding
    "decode",
    "decode_feed",
    "split_fields",
    # Ranking
    "EmptyReason",
    "count_candidates",
    "explain_empty",
    "rank",
    # Board state
    "BoardState",
    "ContestBoard",
    "HasWinner",
    "Loading",
    "NoWinner",
    "Ready",
    "SourceError",
    # Feed
    "FeedFetcher",
    "FileFeedFetcher",
    "HttpFeedFetcher",
    # Errors
    "ContestRankerError",
    "SourceUnavailable",
    # Logging
    "configure_logging",
    "get_logger",
]
