"""
Lost votes heuristic.

Flags snapshot pairs where both main candidates' vote shares changed
noticeably while the total votes and the votes of both candidates went down.
The amounts reported are the raw (normally negative) deltas.
"""

import logging
from dataclasses import dataclass, fields
from decimal import Decimal

from ..data.candidate import Candidate
from ..data.snapshot import (
    ZERO,
    SnapshotApi,
    gained_total_votes,
    gained_vote_share_of_candidate,
    gained_votes_of_candidate_as_decimal,
    require_not_after,
)
from ..exceptions import PreconditionError

logger = logging.getLogger(__name__)

# Minimal vote share change (either direction) for both candidates
SHARE_CHANGE_MARGIN = Decimal("0.001")


@dataclass(frozen=True)
class VoteLossData:
    """Signed vote deltas of snapshot pairs flagged as losing votes."""

    candidate1_vote_loss: Decimal = ZERO
    candidate2_vote_loss: Decimal = ZERO
    third_party_vote_loss: Decimal = ZERO
    total_votes_lost: int = 0

    @classmethod
    def empty(cls) -> "VoteLossData":
        return cls()

    def plus(self, other: "VoteLossData") -> "VoteLossData":
        return VoteLossData(
            *(getattr(self, f.name) + getattr(other, f.name) for f in fields(self))
        )

    __add__ = plus


def require_valid_pair(snapshot1: SnapshotApi, snapshot2: SnapshotApi):
    """
    Precondition of the vote loss and vote swap heuristics.

    Vote shares must be within bounds and vote totals > 0, so vote totals of
    candidates are >= 0. The first snapshot must not be after the second.
    """
    for snapshot in (snapshot1, snapshot2):
        if not snapshot.vote_shares_within_bounds():
            raise PreconditionError("Vote shares not all within bounds (0 and 1)")
        if snapshot.total_votes <= 0:
            raise PreconditionError(f"Total votes {snapshot.total_votes} not > 0")
    require_not_after(snapshot1, snapshot2)


class LostVotes:
    """Callable applying the lost votes heuristic to a snapshot pair."""

    def __init__(self, candidate1: Candidate, candidate2: Candidate):
        if candidate1 == candidate2:
            raise PreconditionError(f"Candidates must differ, got {candidate1} twice")
        self.candidate1 = candidate1
        self.candidate2 = candidate2

    def __repr__(self) -> str:
        return f"LostVotes({self.candidate1!s}, {self.candidate2!s})"

    def __call__(self, snapshot1: SnapshotApi, snapshot2: SnapshotApi) -> VoteLossData:
        require_valid_pair(snapshot1, snapshot2)

        if not (
            self._vote_share_changed_substantially(
                self.candidate1, snapshot1, snapshot2
            )
            and self._vote_share_changed_substantially(
                self.candidate2, snapshot1, snapshot2
            )
        ):
            return VoteLossData.empty()

        candidate1_delta = gained_votes_of_candidate_as_decimal(
            self.candidate1, snapshot1, snapshot2
        )
        candidate2_delta = gained_votes_of_candidate_as_decimal(
            self.candidate2, snapshot1, snapshot2
        )
        total_delta = gained_total_votes(snapshot1, snapshot2)

        if total_delta >= 0 or candidate1_delta >= 0 or candidate2_delta >= 0:
            return VoteLossData.empty()

        third_party_delta = snapshot2.total_votes_of_third_party_as_decimal(
            self.candidate1, self.candidate2
        ) - snapshot1.total_votes_of_third_party_as_decimal(
            self.candidate1, self.candidate2
        )

        logger.debug(
            f"Votes lost between {snapshot1.timestamp} and {snapshot2.timestamp}: "
            f"total {total_delta}"
        )

        return VoteLossData(
            candidate1_delta, candidate2_delta, third_party_delta, total_delta
        )

    @staticmethod
    def _vote_share_changed_substantially(
        candidate: Candidate, snapshot1: SnapshotApi, snapshot2: SnapshotApi
    ) -> bool:
        change = gained_vote_share_of_candidate(candidate, snapshot1, snapshot2)
        return abs(change) > SHARE_CHANGE_MARGIN
