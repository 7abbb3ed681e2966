"""
Reports annotated with the anomalies found in them.

Anomalies come in two kinds. Local anomalies concern one entry (or one
candidate within an entry), such as a negative delta of votes. Runs concern
the report as a whole: the same delta vote share of a candidate in 2 or more
subsequent entries.

Annotations never change the report itself: report() strips them again.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from ..data.candidate import Candidate
from .report import (
    ANOMALIES_KEY,
    TIMESERIES_KEY,
    CandidateData,
    ReportEntry,
    TimeSeriesReport,
)

logger = logging.getLogger(__name__)


def _local_anomalies(
    total_votes, delta_votes, messages: Tuple[str, str, str, str]
) -> List[str]:
    checks = (
        total_votes < 0,
        total_votes == 0,
        delta_votes < 0,
        delta_votes == 0,
    )
    return [message for check, message in zip(checks, messages) if check]


@dataclass(frozen=True)
class AnnotatedCandidateData:
    candidate_data: CandidateData

    @property
    def candidate(self) -> Candidate:
        return self.candidate_data.candidate

    @property
    def anomalies(self) -> List[str]:
        c = self.candidate
        return _local_anomalies(
            self.candidate_data.total_votes,
            self.candidate_data.delta_votes,
            (
                f"Candidate {c} has a negative total of votes",
                f"Candidate {c} has a total of votes of 0",
                f"Candidate {c} has a negative delta of votes",
                f"Candidate {c} has a delta of votes of 0",
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        obj = self.candidate_data.to_dict()
        anomalies = self.anomalies
        if anomalies:
            obj[ANOMALIES_KEY] = anomalies
        return obj


@dataclass(frozen=True)
class AnnotatedReportEntry:
    entry: ReportEntry

    @classmethod
    def from_entry(cls, entry: ReportEntry) -> "AnnotatedReportEntry":
        return cls(entry)

    @property
    def original_index(self) -> int:
        return self.entry.original_index

    @property
    def candidate_data(self) -> List[AnnotatedCandidateData]:
        return [AnnotatedCandidateData(data) for data in self.entry.candidate_data]

    @property
    def anomalies(self) -> List[str]:
        return _local_anomalies(
            self.entry.total_votes,
            self.entry.delta_votes,
            (
                "Negative total of votes",
                "Total of votes of 0",
                "Negative delta of votes",
                "Delta of votes of 0",
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        obj = self.entry.to_dict()
        for data in self.candidate_data:
            obj[str(data.candidate)] = data.to_dict()

        anomalies = self.anomalies
        if anomalies:
            obj[ANOMALIES_KEY] = anomalies
        return obj


@dataclass(frozen=True)
class DeltaVoteShareRun:
    """Subsequent report entries sharing the same delta vote share of a candidate."""

    candidate: Candidate
    delta_vote_share: Decimal
    length: int
    start_index: int

    def describe(self) -> str:
        return (
            f"Candidate {self.candidate} has the same deltaVoteShare of "
            f"{self.delta_vote_share} {self.length} times in succession, "
            f"starting with original index {self.start_index}"
        )


@dataclass(frozen=True)
class AnnotatedTimeSeriesReport:
    entries: Tuple[AnnotatedReportEntry, ...]

    def __post_init__(self):
        if not self.entries:
            raise ValueError("No report entries found")

    @classmethod
    def from_report(cls, report: TimeSeriesReport) -> "AnnotatedTimeSeriesReport":
        return cls(tuple(AnnotatedReportEntry.from_entry(e) for e in report.entries))

    def report(self) -> TimeSeriesReport:
        """The report without annotations."""
        return TimeSeriesReport(tuple(e.entry for e in self.entries))

    @property
    def candidates(self) -> Tuple[Candidate, Candidate, Candidate]:
        first = self.entries[0].entry
        return tuple(data.candidate for data in first.candidate_data)

    def find_runs_with_same_delta_vote_share(
        self, candidate: Candidate
    ) -> List[DeltaVoteShareRun]:
        """
        Find the maximal runs of at least 2 subsequent entries in which the
        candidate has the same delta vote share. Runs do not overlap.
        """
        values = [e.entry.data_of(candidate).delta_vote_share for e in self.entries]
        runs = []

        start = 0
        while start < len(values):
            end = start + 1
            while end < len(values) and values[end] == values[start]:
                end += 1
            if end - start >= 2:
                runs.append(
                    DeltaVoteShareRun(
                        candidate,
                        values[start],
                        end - start,
                        self.entries[start].original_index,
                    )
                )
            start = end
        return runs

    def runs(self) -> List[DeltaVoteShareRun]:
        return [
            run
            for candidate in self.candidates
            for run in self.find_runs_with_same_delta_vote_share(candidate)
        ]

    @property
    def anomalies(self) -> List[str]:
        return [run.describe() for run in self.runs()]

    def to_dict(self) -> Dict[str, Any]:
        anomalies = self.anomalies
        logger.info(f"Found {len(anomalies)} report level anomalies")
        return {
            TIMESERIES_KEY: [e.to_dict() for e in self.entries],
            ANOMALIES_KEY: anomalies,
        }
