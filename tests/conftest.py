"""
Pytest configuration for the contest ranker.

Provides fixtures for:
- Sample submission feeds (well-formed and messy)
- A record builder for ranking tests
- Settings isolation from the developer's environment
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from contest_ranker.config import get_settings
from contest_ranker.domain.models import Record

SAMPLE_FEED = (
    "timestamp,phone,choice,prediction,valid\n"
    '01/01/2024 10:00:00,0900000001,Red,"1.000.000",TRUE\n'
    '01/01/2024 09:00:00,0900000002,Blue,"1.000.050",TRUE\n'
    '01/01/2024 11:00:00,0900000003,Red,"999.950",FALSE\n'
)

MESSY_FEED = (
    "timestamp,phone,choice,prediction,valid\r\n"
    '02/01/2024 08:00:00,0900000010,"Red, dark",1234,true\r\n'
    "too,short\r\n"
    "\r\n"
    '02/01/2024 08:05:00,0900000011,"Say ""hi""",abc, TRUE \r\n'
    "02/01/2024 08:10:00,0900000012,Green,5.000,no\r\n"
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """
    Clear feed/ranking environment overrides and the settings cache per test.
    """
    for name in (
        "FEED_URL",
        "FEED_TIMEOUT_SECONDS",
        "FEED_FETCH_ATTEMPTS",
        "RANKING_LIMIT",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_feed() -> str:
    return SAMPLE_FEED


@pytest.fixture
def messy_feed() -> str:
    return MESSY_FEED


@pytest.fixture
def feed_file(tmp_path: Path, sample_feed: str) -> Path:
    path = tmp_path / "submissions.csv"
    path.write_text(sample_feed, encoding="utf-8")
    return path


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """
    Build valid records with sensible defaults; override fields by keyword.
    """
    counter = {"next": 0}

    def _make(**overrides) -> Record:
        index = overrides.pop("sequence_index", counter["next"])
        counter["next"] = index + 1
        fields = {
            "sequence_index": index,
            "timestamp": "01/01/2024 10:00:00",
            "phone": f"09000000{index:02d}",
            "choice": "Red",
            "prediction": 0,
            "is_valid": True,
        }
        fields.update(overrides)
        return Record(**fields)

    return _make
