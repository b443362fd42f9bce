"""
End-to-end flow: feed source -> decoder -> ranking -> board state.

Runs against a local CSV export and an in-process HTTP transport, so no
network access is needed.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from contest_ranker import (
    ContestBoard,
    FileFeedFetcher,
    HasWinner,
    HttpFeedFetcher,
    NoWinner,
    SourceError,
    SourceUnavailable,
    decode,
    rank,
)


def test_documented_example_ranks_rows_one_and_two(sample_feed: str):
    result = rank(decode(sample_feed), "", "1.000.020")

    assert [(r.sequence_index, r.distance) for r in result] == [(0, 20), (1, 30)]


def test_invalid_row_is_never_ranked(sample_feed: str):
    # Row 3 is marked FALSE; its prediction would otherwise tie for closest.
    result = rank(decode(sample_feed), "red", "999.950")

    assert [r.sequence_index for r in result] == [0]


@pytest.mark.asyncio
async def test_board_over_local_export(feed_file: Path):
    board = ContestBoard(FileFeedFetcher(feed_file))
    await board.refresh()

    state = board.find_winner("", "1.000.020")

    assert isinstance(state, HasWinner)
    assert state.winner.sequence_index == 0
    assert board.candidate_count("BLUE") == 1


@pytest.mark.asyncio
async def test_board_over_http_feed(messy_feed: str, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FEED_URL", "https://sheets.example.test/feed.csv")
    monkeypatch.setenv("RANKING_LIMIT", "1")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text=messy_feed))
    board = ContestBoard(HttpFeedFetcher(transport=transport))

    await board.refresh()
    state = board.find_winner("", "0")

    assert isinstance(state, HasWinner)
    assert len(state.ranking) == 1
    assert state.winner.choice == 'Say "hi"'
    assert isinstance(board.find_winner("green", "5000"), NoWinner)


@pytest.mark.asyncio
async def test_unavailable_feed_surfaces_error(tmp_path: Path):
    board = ContestBoard(FileFeedFetcher(tmp_path / "missing.csv"))

    with pytest.raises(SourceUnavailable):
        await board.refresh()

    assert isinstance(board.state, SourceError)
