"""
Time series report.

A report entry corresponds to a voting snapshot and the deltas compared to the
preceding snapshot. The report immediately gives more information to the reader
than the original time series: vote totals per candidate, delta votes, and the
share of each candidate in the delta votes.

Values are kept exact (Decimal). Rounding to 3 decimal places only happens in
rounded() and in the JSON representation produced by to_dict().
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Tuple, Union

from ..data.candidate import THIRD_PARTY, Candidate
from ..data.loader import parse_decimal, parse_integer, parse_timestamp, read_json
from ..data.snapshot import ONE, ZERO, IndexedSnapshot, SnapshotApi
from ..data.time_series import VotingTimeSeries
from ..exceptions import ParseError

logger = logging.getLogger(__name__)

PRESENTATION_SCALE = Decimal("0.001")

ANOMALIES_KEY = "anomalies"
TIMESERIES_KEY = "timeseries"
ENTRY_KEYS = ("index", "timestamp", "delta_seconds", "total_votes", "delta_votes")
CANDIDATE_KEYS = ("vote_share", "total_votes", "delta_votes", "delta_vote_share")


def round_for_presentation(value: Decimal) -> Decimal:
    """Round half up to 3 decimal places."""
    return value.quantize(PRESENTATION_SCALE, rounding=ROUND_HALF_UP)


def whole_seconds_between(start: datetime, end: datetime) -> int:
    """Elapsed whole seconds from start to end, truncated toward zero."""
    delta: timedelta = end - start
    microseconds = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    seconds = abs(microseconds) // 1_000_000
    return seconds if microseconds >= 0 else -seconds


def _delta_vote_share(delta_votes: Decimal, total_delta_votes: int) -> Decimal:
    # Share of the delta votes; 0 by convention if there are no delta votes
    if total_delta_votes == 0:
        return ZERO
    return delta_votes / Decimal(total_delta_votes)


@dataclass(frozen=True)
class CandidateData:
    """Per-candidate part of a report entry."""

    candidate: Candidate
    vote_share: Decimal
    total_votes: Decimal
    delta_votes: Decimal
    delta_vote_share: Decimal

    @classmethod
    def from_snapshots(
        cls,
        prev_snapshot: SnapshotApi,
        snapshot: SnapshotApi,
        candidate: Candidate,
    ) -> "CandidateData":
        total_votes = snapshot.total_votes_of_as_decimal(candidate)
        delta_votes = total_votes - prev_snapshot.total_votes_of_as_decimal(candidate)
        return cls(
            candidate,
            snapshot.vote_share_of(candidate),
            total_votes,
            delta_votes,
            _delta_vote_share(
                delta_votes, snapshot.total_votes - prev_snapshot.total_votes
            ),
        )

    def rounded(self) -> "CandidateData":
        return CandidateData(
            self.candidate,
            round_for_presentation(self.vote_share),
            round_for_presentation(self.total_votes),
            round_for_presentation(self.delta_votes),
            round_for_presentation(self.delta_vote_share),
        )

    def to_dict(self) -> Dict[str, Any]:
        rounded = self.rounded()
        return {
            "vote_share": float(rounded.vote_share),
            "total_votes": float(rounded.total_votes),
            "delta_votes": float(rounded.delta_votes),
            "delta_vote_share": float(rounded.delta_vote_share),
        }

    @classmethod
    def from_dict(cls, key: str, obj: Any) -> "CandidateData":
        if not isinstance(obj, dict):
            raise ParseError(f"Data of candidate {key} is not a JSON object")
        missing = [k for k in CANDIDATE_KEYS if k not in obj]
        if missing:
            raise ParseError(f"Data of candidate {key} misses keys {missing}")

        values = [
            round_for_presentation(parse_decimal(obj[k], f"{key} {k}"))
            for k in CANDIDATE_KEYS
        ]
        return cls(Candidate(key), *values)


@dataclass(frozen=True)
class ReportEntry:
    """Report entry for one snapshot, with deltas to the preceding snapshot."""

    original_index: int
    timestamp: datetime
    delta_seconds: int
    total_votes: int
    delta_votes: int
    candidate1_data: CandidateData
    candidate2_data: CandidateData
    third_party_data: CandidateData

    @classmethod
    def from_snapshot_pair(
        cls,
        prev_snapshot: IndexedSnapshot,
        snapshot: IndexedSnapshot,
        candidate1: Candidate,
        candidate2: Candidate,
    ) -> "ReportEntry":
        """
        Build the entry of `snapshot`, using `prev_snapshot` for the deltas.

        The third party is always derived as the complement of the two
        candidates, and its delta vote share as 1 minus theirs. Rounding errors
        in the inputs therefore add up in the third party numbers.
        """
        candidate1_data = CandidateData.from_snapshots(
            prev_snapshot, snapshot, candidate1
        )
        candidate2_data = CandidateData.from_snapshots(
            prev_snapshot, snapshot, candidate2
        )

        delta_votes = snapshot.total_votes - prev_snapshot.total_votes

        third_party_votes = snapshot.total_votes_of_third_party_as_decimal(
            candidate1, candidate2
        )
        prev_third_party_votes = prev_snapshot.total_votes_of_third_party_as_decimal(
            candidate1, candidate2
        )
        if delta_votes == 0:
            third_party_delta_vote_share = ZERO
        else:
            third_party_delta_vote_share = (
                ONE
                - candidate1_data.delta_vote_share
                - candidate2_data.delta_vote_share
            )

        third_party_data = CandidateData(
            THIRD_PARTY,
            snapshot.vote_share_of_third_party(candidate1, candidate2),
            third_party_votes,
            third_party_votes - prev_third_party_votes,
            third_party_delta_vote_share,
        )

        return cls(
            snapshot.index,
            snapshot.timestamp,
            whole_seconds_between(prev_snapshot.timestamp, snapshot.timestamp),
            snapshot.total_votes,
            delta_votes,
            candidate1_data,
            candidate2_data,
            third_party_data,
        )

    @property
    def candidate_data(self) -> Tuple[CandidateData, CandidateData, CandidateData]:
        return (self.candidate1_data, self.candidate2_data, self.third_party_data)

    @property
    def delta_votes_candidate1(self) -> Decimal:
        return self.candidate1_data.delta_votes

    @property
    def delta_votes_candidate2(self) -> Decimal:
        return self.candidate2_data.delta_votes

    @property
    def delta_votes_third_party(self) -> Decimal:
        return self.third_party_data.delta_votes

    def data_of(self, candidate: Candidate) -> CandidateData:
        for data in self.candidate_data:
            if data.candidate == candidate:
                return data
        raise KeyError(
            f"No data for candidate {candidate} in entry {self.original_index}"
        )

    def delta_vote_shares_per_candidate(self) -> Dict[Candidate, Decimal]:
        return {data.candidate: data.delta_vote_share for data in self.candidate_data}

    def rounded(self) -> "ReportEntry":
        return ReportEntry(
            self.original_index,
            self.timestamp,
            self.delta_seconds,
            self.total_votes,
            self.delta_votes,
            self.candidate1_data.rounded(),
            self.candidate2_data.rounded(),
            self.third_party_data.rounded(),
        )

    def to_dict(self) -> Dict[str, Any]:
        obj: Dict[str, Any] = {
            "index": self.original_index,
            "timestamp": self.timestamp.isoformat(),
            "delta_seconds": self.delta_seconds,
            "total_votes": self.total_votes,
            "delta_votes": self.delta_votes,
        }
        for data in self.candidate_data:
            obj[str(data.candidate)] = data.to_dict()
        return obj

    @classmethod
    def from_dict(cls, obj: Any) -> "ReportEntry":
        """
        Parse an entry as produced by to_dict(). The three candidate objects
        are taken in order of appearance; "anomalies" keys are ignored.
        """
        if not isinstance(obj, dict):
            raise ParseError(f"Report entry is not a JSON object: {obj!r}")
        missing = [k for k in ENTRY_KEYS if k not in obj]
        if missing:
            raise ParseError(f"Report entry misses keys {missing}")

        candidate_keys = [
            k for k in obj if k not in ENTRY_KEYS and k != ANOMALIES_KEY
        ]
        if len(candidate_keys) != 3:
            raise ParseError(
                f"Expected data of 3 candidates in report entry, found {candidate_keys}"
            )
        candidate1_data, candidate2_data, third_party_data = [
            CandidateData.from_dict(k, obj[k]) for k in candidate_keys
        ]

        return cls(
            parse_integer(obj["index"], "index"),
            parse_timestamp(obj["timestamp"]),
            parse_integer(obj["delta_seconds"], "delta_seconds"),
            parse_integer(obj["total_votes"], "total_votes"),
            parse_integer(obj["delta_votes"], "delta_votes"),
            candidate1_data,
            candidate2_data,
            third_party_data,
        )


@dataclass(frozen=True)
class TimeSeriesReport:
    """Report corresponding to a voting time series."""

    entries: Tuple[ReportEntry, ...]

    @classmethod
    def from_time_series(
        cls, series: VotingTimeSeries, candidate1: Candidate, candidate2: Candidate
    ) -> "TimeSeriesReport":
        """
        Derive a report from a time series, one entry per subsequent pair.

        Args:
            series: Time series starting with an empty snapshot
            candidate1: First tracked candidate
            candidate2: Second tracked candidate

        Returns:
            TimeSeriesReport with len(series) - 1 entries

        Raises:
            ValidationError: If the time series does not pass validation
        """
        series.validate(candidate1, candidate2)

        logger.info(
            f"Creating report for {candidate1} and {candidate2} "
            f"from {len(series)} snapshots"
        )

        entries = tuple(
            ReportEntry.from_snapshot_pair(
                prev_snapshot, snapshot, candidate1, candidate2
            )
            for prev_snapshot, snapshot in series.snapshot_pairs()
        )
        logger.info(f"Created report with {len(entries)} entries")
        return cls(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ReportEntry]:
        return iter(self.entries)

    @property
    def candidate1(self) -> Candidate:
        return self._first_entry().candidate1_data.candidate

    @property
    def candidate2(self) -> Candidate:
        return self._first_entry().candidate2_data.candidate

    @property
    def third_party(self) -> Candidate:
        return self._first_entry().third_party_data.candidate

    def _first_entry(self) -> ReportEntry:
        if not self.entries:
            raise ValueError("Empty report has no candidates")
        return self.entries[0]

    def rounded(self) -> "TimeSeriesReport":
        """The report as it reads back from its JSON form."""
        return TimeSeriesReport(tuple(entry.rounded() for entry in self.entries))

    def sort_by_desc(
        self, metric: Callable[[ReportEntry], Union[Decimal, int]]
    ) -> "TimeSeriesReport":
        """
        Sort the entries by descending metric value. Entries with equal values
        keep their relative order. The result is no longer chronological.
        """
        return TimeSeriesReport(tuple(sorted(self.entries, key=metric, reverse=True)))

    def to_dict(self) -> Dict[str, Any]:
        return {TIMESERIES_KEY: [entry.to_dict() for entry in self.entries]}

    @classmethod
    def from_dict(cls, obj: Any) -> "TimeSeriesReport":
        if not isinstance(obj, dict) or TIMESERIES_KEY not in obj:
            raise ParseError(f"Report misses key '{TIMESERIES_KEY}'")
        raw_entries = obj[TIMESERIES_KEY]
        if not isinstance(raw_entries, list):
            raise ParseError(f"'{TIMESERIES_KEY}' is not a JSON array")
        return cls(tuple(ReportEntry.from_dict(entry) for entry in raw_entries))


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        as_float = float(value)
        if Decimal(repr(as_float)) != value:
            logger.warning(f"Writing {value} as the nearest float {as_float!r}")
        return as_float
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_json(obj: Dict[str, Any], path: Union[str, Path]):
    """
    Write JSON with an indentation of 2, as all reports are written.

    Decimal values (as produced by `read_json`) are written as floats. A value
    with more significant digits than a float holds is written as the nearest
    float, and a warning is logged for it.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, default=_json_default)
        f.write("\n")


def read_report(path: Union[str, Path]) -> TimeSeriesReport:
    """Read a report (plain or annotated) from a JSON file."""
    return TimeSeriesReport.from_dict(read_json(path))


def write_report(report: TimeSeriesReport, path: Union[str, Path]):
    write_json(report.to_dict(), path)
    logger.info(f"Wrote report with {len(report)} entries to: {path}")
