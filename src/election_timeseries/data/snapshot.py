"""
Voting snapshots (vote dumps) of a single contest.

A snapshot holds cumulative vote shares per candidate and the total number of
votes at one point in time. All arithmetic uses Decimal, so vote counts derived
from shares are exact and rounding only happens where an integer is needed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Mapping, Optional, Protocol, Union

from ..exceptions import PreconditionError
from .candidate import Candidate

Number = Union[Decimal, int, str, float]

ZERO = Decimal(0)
ONE = Decimal(1)


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without going through binary floating point.

    Floats are converted via their shortest repr, so 0.6 becomes Decimal("0.6").
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Not a number: {value!r}")
    if isinstance(value, (int, str)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    raise TypeError(f"Not a number: {value!r}")


def round_half_up(value: Decimal) -> int:
    """Round to an integer, so 2.5 becomes 3 and 2.4 becomes 2."""
    return int(value.quantize(ONE, rounding=ROUND_HALF_UP))


class SnapshotApi(Protocol):
    """Read-only capabilities shared by plain and indexed snapshots."""

    @property
    def vote_shares(self) -> Mapping[Candidate, Decimal]: ...

    @property
    def total_votes(self) -> int: ...

    @property
    def timestamp(self) -> datetime: ...

    @property
    def other_data(self) -> Mapping[str, str]: ...

    def vote_share_of(self, candidate: Candidate) -> Decimal: ...

    def total_votes_of(self, candidate: Candidate) -> int: ...

    def total_votes_of_as_decimal(self, candidate: Candidate) -> Decimal: ...

    def vote_share_of_third_party(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal: ...

    def total_votes_of_third_party_as_decimal(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal: ...

    def contains_all_candidates(self, candidates: Iterable[Candidate]) -> bool: ...

    def vote_shares_within_bounds(self) -> bool: ...

    def is_before(self, other: "SnapshotApi") -> bool: ...

    def is_after(self, other: "SnapshotApi") -> bool: ...

    @property
    def is_empty(self) -> bool: ...

    @property
    def non_empty(self) -> bool: ...


@dataclass(frozen=True)
class VotingSnapshot:
    """One vote dump: vote shares per candidate, total votes and timestamp."""

    vote_shares: Dict[Candidate, Decimal]
    total_votes: int
    timestamp: datetime
    other_data: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        vote_shares: Mapping[Union[Candidate, str], Number],
        total_votes: int,
        timestamp: datetime,
        other_data: Optional[Mapping[str, str]] = None,
    ) -> "VotingSnapshot":
        """
        Build a snapshot, converting candidate keys and shares as needed.

        Args:
            vote_shares: Vote share per candidate (Candidate or plain name)
            total_votes: Total votes for all candidates combined
            timestamp: Zoned timestamp of the vote dump
            other_data: Extra fields of the vote dump, kept for reference

        Returns:
            VotingSnapshot
        """
        shares = {
            (key if isinstance(key, Candidate) else Candidate(key)): to_decimal(share)
            for key, share in vote_shares.items()
        }
        return cls(shares, int(total_votes), timestamp, dict(other_data or {}))

    def vote_share_of(self, candidate: Candidate) -> Decimal:
        return self.vote_shares.get(candidate, ZERO)

    def total_votes_of(self, candidate: Candidate) -> int:
        return round_half_up(self.total_votes_of_as_decimal(candidate))

    def total_votes_of_as_decimal(self, candidate: Candidate) -> Decimal:
        return self.vote_share_of(candidate) * self.total_votes

    def vote_share_of_third_party(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal:
        """Share of everyone but the two given candidates, as a complement."""
        return ONE - self.vote_share_of(candidate1) - self.vote_share_of(candidate2)

    def total_votes_of_third_party_as_decimal(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal:
        return self.vote_share_of_third_party(candidate1, candidate2) * self.total_votes

    def contains_all_candidates(self, candidates: Iterable[Candidate]) -> bool:
        return all(candidate in self.vote_shares for candidate in candidates)

    def vote_shares_within_bounds(self) -> bool:
        """True if every share, and the sum of all shares, lies in [0, 1]."""
        shares = list(self.vote_shares.values())
        total = sum(shares, ZERO)
        return ZERO <= total <= ONE and all(ZERO <= share <= ONE for share in shares)

    def is_before(self, other: SnapshotApi) -> bool:
        return self.timestamp < other.timestamp

    def is_after(self, other: SnapshotApi) -> bool:
        return self.timestamp > other.timestamp

    @property
    def is_empty(self) -> bool:
        return self.total_votes == 0

    @property
    def non_empty(self) -> bool:
        return not self.is_empty


@dataclass(frozen=True)
class IndexedSnapshot:
    """A snapshot paired with its zero-based position in the input series."""

    snapshot: VotingSnapshot
    index: int

    @property
    def vote_shares(self) -> Mapping[Candidate, Decimal]:
        return self.snapshot.vote_shares

    @property
    def total_votes(self) -> int:
        return self.snapshot.total_votes

    @property
    def timestamp(self) -> datetime:
        return self.snapshot.timestamp

    @property
    def other_data(self) -> Mapping[str, str]:
        return self.snapshot.other_data

    def vote_share_of(self, candidate: Candidate) -> Decimal:
        return self.snapshot.vote_share_of(candidate)

    def total_votes_of(self, candidate: Candidate) -> int:
        return self.snapshot.total_votes_of(candidate)

    def total_votes_of_as_decimal(self, candidate: Candidate) -> Decimal:
        return self.snapshot.total_votes_of_as_decimal(candidate)

    def vote_share_of_third_party(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal:
        return self.snapshot.vote_share_of_third_party(candidate1, candidate2)

    def total_votes_of_third_party_as_decimal(
        self, candidate1: Candidate, candidate2: Candidate
    ) -> Decimal:
        return self.snapshot.total_votes_of_third_party_as_decimal(
            candidate1, candidate2
        )

    def contains_all_candidates(self, candidates: Iterable[Candidate]) -> bool:
        return self.snapshot.contains_all_candidates(candidates)

    def vote_shares_within_bounds(self) -> bool:
        return self.snapshot.vote_shares_within_bounds()

    def is_before(self, other: SnapshotApi) -> bool:
        return self.snapshot.is_before(other)

    def is_after(self, other: SnapshotApi) -> bool:
        return self.snapshot.is_after(other)

    @property
    def is_empty(self) -> bool:
        return self.snapshot.is_empty

    @property
    def non_empty(self) -> bool:
        return self.snapshot.non_empty


def require_not_after(snapshot1: SnapshotApi, snapshot2: SnapshotApi):
    """Raise a PreconditionError if `snapshot1` is after `snapshot2`."""
    if snapshot1.is_after(snapshot2):
        raise PreconditionError(
            f"Snapshot at {snapshot1.timestamp} is after snapshot at "
            f"{snapshot2.timestamp}"
        )


def gained_total_votes(snapshot1: SnapshotApi, snapshot2: SnapshotApi) -> int:
    require_not_after(snapshot1, snapshot2)
    return snapshot2.total_votes - snapshot1.total_votes


def gained_votes_of_candidate(
    candidate: Candidate, snapshot1: SnapshotApi, snapshot2: SnapshotApi
) -> int:
    require_not_after(snapshot1, snapshot2)
    return snapshot2.total_votes_of(candidate) - snapshot1.total_votes_of(candidate)


def gained_votes_of_candidate_as_decimal(
    candidate: Candidate, snapshot1: SnapshotApi, snapshot2: SnapshotApi
) -> Decimal:
    require_not_after(snapshot1, snapshot2)
    return snapshot2.total_votes_of_as_decimal(
        candidate
    ) - snapshot1.total_votes_of_as_decimal(candidate)


def gained_vote_share_of_candidate(
    candidate: Candidate, snapshot1: SnapshotApi, snapshot2: SnapshotApi
) -> Decimal:
    require_not_after(snapshot1, snapshot2)
    return snapshot2.vote_share_of(candidate) - snapshot1.vote_share_of(candidate)
