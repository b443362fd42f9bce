"""
Contest board: the stateful shell a presentation layer talks to.

The board wires fetch -> decode -> rank and exposes an explicit state instead
of loose loading/error/result flags:

- `Loading`       a refresh is in flight (also the initial state)
- `SourceError`   the last refresh could not obtain the feed
- `Ready`         records are loaded, no winner requested yet
- `NoWinner`      a ranking was requested but came back empty
- `HasWinner`     a ranking with at least one entry

Usage:
    board = ContestBoard(HttpFeedFetcher())
    await board.refresh()
    state = board.find_winner(text_filter="red", target="1.000.020")
    if isinstance(state, HasWinner):
        print(state.winner.phone)
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from contest_ranker.config import get_settings
from contest_ranker.decoder import decode_feed
from contest_ranker.domain.models import RankedRecord, Record
from contest_ranker.errors import SourceUnavailable
from contest_ranker.infrastructure.feed import FeedFetcher
from contest_ranker.ranking import EmptyReason, count_candidates, explain_empty, rank
from contest_ranker.utils.logging import get_logger

log = get_logger(__name__)

_FROZEN = {"frozen": True}


class Loading(BaseModel):
    kind: Literal["loading"] = "loading"

    model_config = _FROZEN


class SourceError(BaseModel):
    kind: Literal["source_error"] = "source_error"
    message: str

    model_config = _FROZEN


class Ready(BaseModel):
    kind: Literal["ready"] = "ready"
    records: List[Record] = Field(default_factory=list)

    model_config = _FROZEN


class NoWinner(BaseModel):
    kind: Literal["no_winner"] = "no_winner"
    records: List[Record] = Field(default_factory=list)
    reason: EmptyReason

    model_config = _FROZEN


class HasWinner(BaseModel):
    kind: Literal["has_winner"] = "has_winner"
    records: List[Record] = Field(default_factory=list)
    ranking: List[RankedRecord] = Field(..., min_length=1)

    model_config = _FROZEN

    @property
    def winner(self) -> RankedRecord:
        return self.ranking[0]

    @property
    def runners_up(self) -> List[RankedRecord]:
        return self.ranking[1:]


BoardState = Annotated[
    Union[Loading, SourceError, Ready, NoWinner, HasWinner],
    Field(discriminator="kind"),
]


class ContestBoard:
    """
    Holds the latest decoded records and the current presentation state.

    A refresh fully replaces earlier records. When refreshes overlap, only the
    most recently started one may update the state.
    """

    def __init__(self, fetcher: FeedFetcher, limit: Optional[int] = None) -> None:
        self.fetcher = fetcher
        self.limit = limit if limit is not None else get_settings().ranking_limit
        if self.limit < 1:
            raise ValueError(f"Ranking limit must be at least 1, got {self.limit}")
        self._state: BoardState = Loading()
        self._generation = 0

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def records(self) -> List[Record]:
        """Valid records of the last successful refresh (empty otherwise)."""
        return list(getattr(self._state, "records", []))

    async def refresh(self) -> BoardState:
        """
        Fetch and decode the feed.

        Raises
        ------
        SourceUnavailable
            If the feed cannot be obtained. A fetcher failing with any other
            exception is reported the same way, chained to the original error.
            The state becomes `SourceError` before the error propagates.
        """
        self._generation += 1
        generation = self._generation
        self._state = Loading()

        try:
            raw_text = await self.fetcher.fetch()
        except SourceUnavailable as exc:
            self._fail(generation, exc)
            raise
        except Exception as exc:  # noqa: BLE001 - fetchers are third-party code
            log.exception("Feed fetcher failed", extra={"source": self.fetcher.source})
            error = SourceUnavailable(self.fetcher.source, str(exc) or type(exc).__name__)
            self._fail(generation, error)
            raise error from exc

        try:
            report = decode_feed(raw_text)
        except Exception as exc:
            log.exception("Feed decoding failed", extra={"source": self.fetcher.source})
            self._fail(generation, exc)
            raise

        if generation != self._generation:
            log.info("Discarding superseded refresh", extra={"generation": generation})
            return self._state

        self._state = Ready(records=report.valid_records)
        log.info(
            "Board refreshed",
            extra={"source": self.fetcher.source, "valid": len(report.valid_records)},
        )
        return self._state

    def _fail(self, generation: int, exc: Exception) -> None:
        if generation == self._generation:
            self._state = SourceError(message=str(exc) or type(exc).__name__)

    def candidate_count(self, text_filter: str = "") -> int:
        return count_candidates(self.records, text_filter)

    def find_winner(self, text_filter: str, target: str) -> BoardState:
        """
        Rank the loaded records and move to `HasWinner` or `NoWinner`.

        While loading or after a source error there is nothing to rank, so the
        current state is returned unchanged.
        """
        if isinstance(self._state, (Loading, SourceError)):
            return self._state

        records = self.records
        ranking = rank(records, text_filter, target, limit=self.limit)
        if ranking:
            self._state = HasWinner(records=records, ranking=ranking)
        else:
            reason = explain_empty(records, text_filter, target) or EmptyReason.NO_CANDIDATES
            self._state = NoWinner(records=records, reason=reason)
        return self._state


__all__ = [
    "BoardState",
    "ContestBoard",
    "HasWinner",
    "Loading",
    "NoWinner",
    "Ready",
    "SourceError",
]
