"""
Input data: candidates, voting snapshots (vote dumps) and time series.
"""

from .candidate import BIDEN, THIRD_PARTY, TRUMP, Candidate
from .loader import load_time_series, time_series_from_json
from .snapshot import IndexedSnapshot, SnapshotApi, VotingSnapshot
from .time_series import VotingTimeSeries

__all__ = [
    "Candidate",
    "THIRD_PARTY",
    "TRUMP",
    "BIDEN",
    "VotingSnapshot",
    "IndexedSnapshot",
    "SnapshotApi",
    "VotingTimeSeries",
    "load_time_series",
    "time_series_from_json",
]
