import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..exceptions import ValidationError
from .candidate import THIRD_PARTY, Candidate
from .snapshot import IndexedSnapshot, VotingSnapshot

logger = logging.getLogger(__name__)

SnapshotPair = Tuple[IndexedSnapshot, IndexedSnapshot]


def _adjacent_pairs(snapshots: List[IndexedSnapshot]) -> List[SnapshotPair]:
    return list(zip(snapshots, snapshots[1:]))


@dataclass(frozen=True)
class VotingTimeSeries:
    """
    Ordered sequence of vote dumps for one contest.

    The first snapshot of a well-formed series is "empty" (no votes yet).
    Empty snapshots are otherwise ignored by the anomaly queries.
    """

    snapshots: Tuple[IndexedSnapshot, ...]

    @classmethod
    def from_snapshots(cls, snapshots: Iterable[VotingSnapshot]) -> "VotingTimeSeries":
        """Index the given snapshots by their position in the input."""
        return cls(
            tuple(
                IndexedSnapshot(snapshot, index)
                for index, snapshot in enumerate(snapshots)
            )
        )

    def __len__(self) -> int:
        return len(self.snapshots)

    def non_empty_snapshots(self) -> List[IndexedSnapshot]:
        return [snapshot for snapshot in self.snapshots if snapshot.non_empty]

    def is_in_chronological_order(self) -> bool:
        """
        Returns True if all non-empty snapshots are in chronological order.
        Subsequent snapshots with the same timestamp are still in order.
        """
        return all(
            not prev.is_after(curr)
            for prev, curr in _adjacent_pairs(self.non_empty_snapshots())
        )

    def sorted_chronologically(self) -> "VotingTimeSeries":
        # sorted() is stable, and the original indices are kept
        return VotingTimeSeries(
            tuple(sorted(self.snapshots, key=lambda snapshot: snapshot.timestamp))
        )

    def snapshot_pairs(self) -> List[SnapshotPair]:
        return _adjacent_pairs(list(self.snapshots))

    def non_empty_snapshot_pairs(self) -> List[SnapshotPair]:
        return _adjacent_pairs(self.non_empty_snapshots())

    def validate(self, candidate1: Candidate, candidate2: Candidate):
        """
        Check the structural preconditions for deriving a report.

        Chronological order is only checked and logged; derivation proceeds
        regardless of the outcome.

        Args:
            candidate1: First tracked candidate
            candidate2: Second tracked candidate

        Raises:
            ValidationError: If any precondition does not hold
        """
        if candidate1 == candidate2:
            raise ValidationError(f"Candidates must differ, got {candidate1} twice")
        if THIRD_PARTY in (candidate1, candidate2):
            raise ValidationError(f"'{THIRD_PARTY}' is reserved for the third party")

        if not self.snapshots:
            raise ValidationError("Missing voting snapshots")

        if not self.snapshots[0].is_empty:
            raise ValidationError(
                "Time series not starting with 'empty' snapshot (all zeroes)"
            )

        expected = (candidate1, candidate2)

        for snapshot in self.non_empty_snapshots():
            if not snapshot.contains_all_candidates(expected):
                raise ValidationError(
                    f"Snapshot {snapshot.index} does not contain candidates "
                    f"{candidate1}, {candidate2}"
                )
            if snapshot.total_votes <= 0:
                raise ValidationError(
                    f"Snapshot {snapshot.index} has total votes "
                    f"{snapshot.total_votes}, not > 0"
                )
            for candidate in expected:
                if snapshot.total_votes_of(candidate) <= 0:
                    raise ValidationError(
                        f"Snapshot {snapshot.index}: {candidate} votes not > 0"
                    )
            if not snapshot.vote_shares_within_bounds():
                raise ValidationError(
                    f"Snapshot {snapshot.index}: vote shares not within bounds "
                    f"(>= 0 and <= 1, also in total)"
                )

        if not self.is_in_chronological_order():
            logger.warning(
                "Time series is not in chronological order, continuing anyway"
            )
