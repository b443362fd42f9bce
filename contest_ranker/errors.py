"""
Exception types for the contest ranker.

Only the feed boundary raises. Row-level problems and empty rankings are
represented as values (see `contest_ranker.domain.models.MalformedRow` and
`contest_ranker.ranking.EmptyReason`).
"""

from __future__ import annotations


class ContestRankerError(Exception):
    """Base class for all contest ranker errors."""


class SourceUnavailable(ContestRankerError):
    """
    The raw submission feed could not be obtained.

    Attributes
    ----------
    source : str
        Human-readable description of where the feed was expected (URL or path).
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Feed unavailable from {source}: {reason}")


__all__ = ["ContestRankerError", "SourceUnavailable"]
