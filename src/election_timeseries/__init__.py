"""
Election time series analyzer.

Derives delta-annotated reports from the vote dumps of a single contest, and
applies the lost votes and vote swap heuristics to subsequent vote dumps.
"""

from .analysis import FindFraud, LostVotes, VoteLossData, VoteSwapData
from .data import THIRD_PARTY, Candidate, VotingSnapshot, VotingTimeSeries
from .exceptions import ParseError, PreconditionError, ValidationError
from .report import (
    AnnotatedTimeSeriesReport,
    ReportEntry,
    SortCriteria,
    TimeSeriesReport,
)

__version__ = "0.1.0"

__all__ = [
    "Candidate",
    "THIRD_PARTY",
    "VotingSnapshot",
    "VotingTimeSeries",
    "TimeSeriesReport",
    "ReportEntry",
    "AnnotatedTimeSeriesReport",
    "SortCriteria",
    "LostVotes",
    "VoteLossData",
    "FindFraud",
    "VoteSwapData",
    "ValidationError",
    "PreconditionError",
    "ParseError",
]
