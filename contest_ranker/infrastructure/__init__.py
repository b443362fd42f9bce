"""
Infrastructure package for the contest ranker.

Centralizes feed acquisition (HTTP download, local export files). Keep this
layer focused on I/O, decoupled from decoding and ranking logic.
"""

from contest_ranker.infrastructure.feed import (
    FeedFetcher,
    FileFeedFetcher,
    HttpFeedFetcher,
)

__all__ = [
    "FeedFetcher",
    "FileFeedFetcher",
    "HttpFeedFetcher",
]
