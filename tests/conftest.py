"""
Shared pytest configuration and fixtures for election-timeseries.

This module provides common test fixtures and utilities used across
all test modules.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.data import (  # noqa: E402
    BIDEN,
    TRUMP,
    VotingSnapshot,
    VotingTimeSeries,
)

START_TIME = datetime(2020, 11, 4, 1, 0, 0, tzinfo=timezone.utc)


def make_snapshot(shares, total_votes, minutes=0, seconds=0):
    """Snapshot with the given trumpd/bidenj shares, `minutes` after START_TIME."""
    trump_share, biden_share = shares
    return VotingSnapshot.create(
        {"trumpd": trump_share, "bidenj": biden_share},
        total_votes,
        START_TIME + timedelta(minutes=minutes, seconds=seconds),
    )


def empty_snapshot(minutes=0):
    return make_snapshot(("0", "0"), 0, minutes=minutes)


def vote_dump_json(shares, total_votes, timestamp):
    """One vote dump as it appears in the input JSON feeds."""
    trump_share, biden_share = shares
    return {
        "vote_shares": {"trumpd": trump_share, "bidenj": biden_share},
        "votes": total_votes,
        "eevp": 10,
        "eevp_source": "edison",
        "timestamp": timestamp,
    }


@pytest.fixture
def candidates():
    """The two tracked candidates."""
    return TRUMP, BIDEN


@pytest.fixture
def simple_series():
    """Empty snapshot followed by 3 vote dumps with growing vote totals."""
    return VotingTimeSeries.from_snapshots(
        [
            empty_snapshot(),
            make_snapshot(("0.6", "0.35"), 1000, minutes=10),
            make_snapshot(("0.55", "0.4"), 2000, minutes=20),
            make_snapshot(("0.5", "0.45"), 4000, minutes=30),
        ]
    )


@pytest.fixture
def series_with_lost_votes():
    """Vote dumps in which both candidates lose votes between index 2 and 3."""
    return VotingTimeSeries.from_snapshots(
        [
            empty_snapshot(),
            make_snapshot(("0.5", "0.45"), 10000, minutes=10),
            make_snapshot(("0.5", "0.45"), 20000, minutes=20),
            make_snapshot(("0.49", "0.44"), 19000, minutes=30),
        ]
    )


@pytest.fixture
def feed_json():
    """Input JSON document in the layout of the election result feeds."""
    return {
        "data": {
            "races": [
                {
                    "timeseries": [
                        vote_dump_json((0, 0), 0, "2020-11-04T01:00:00Z"),
                        vote_dump_json((0.6, 0.35), 1000, "2020-11-04T01:10:00Z"),
                        vote_dump_json((0.55, 0.4), 2000, "2020-11-04T01:20:00Z"),
                    ]
                }
            ]
        }
    }


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests "
        "(medium speed, file system required)",
    )
    config.addinivalue_line(
        "markers",
        "golden: marks tests as golden dataset validation (hand-computed results)",
    )
    config.addinivalue_line(
        "markers", "invariant: marks tests as mathematical invariant validation"
    )
    config.addinivalue_line(
        "markers", "smoke: marks tests as smoke tests (basic functionality check)"
    )
