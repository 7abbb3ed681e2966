"""
Vote swap ("fraud") heuristic.

For a pair of subsequent snapshots, votes lost by one entity (candidate 1,
candidate 2 or the third party) beyond a noise margin are apportioned to the
entities that gained votes at the same time.

The apportionment is order dependent. A losing candidate's votes go to the
other candidate first and then to the third party. Votes lost by the third
party go first to the candidate selected by the bias flag. This asymmetry is
part of the method; callers compare both bias directions via swap_bias().
"""

import logging
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Dict, List, Tuple

from ..data.candidate import Candidate
from ..data.snapshot import ZERO, SnapshotApi
from ..exceptions import PreconditionError
from .lost_votes import require_valid_pair

logger = logging.getLogger(__name__)

# margin = MARGIN_FACTOR * total votes + MARGIN_OFFSET
MARGIN_FACTOR = Decimal("0.00049999")
MARGIN_OFFSET = Decimal(50)


@dataclass(frozen=True)
class VoteSwapData:
    """Votes apportioned from a losing entity to a gaining one."""

    candidate1_to_candidate2: Decimal = ZERO
    candidate1_to_third: Decimal = ZERO
    candidate2_to_candidate1: Decimal = ZERO
    candidate2_to_third: Decimal = ZERO
    third_to_candidate1: Decimal = ZERO
    third_to_candidate2: Decimal = ZERO

    @classmethod
    def empty(cls) -> "VoteSwapData":
        return cls()

    @property
    def total_votes_lost_candidate1(self) -> Decimal:
        return self.candidate1_to_candidate2 + self.candidate1_to_third

    @property
    def total_votes_lost_candidate2(self) -> Decimal:
        return self.candidate2_to_candidate1 + self.candidate2_to_third

    @property
    def total_votes_lost_third_party(self) -> Decimal:
        return self.third_to_candidate1 + self.third_to_candidate2

    @property
    def total_votes_lost(self) -> Decimal:
        return (
            self.total_votes_lost_candidate1
            + self.total_votes_lost_candidate2
            + self.total_votes_lost_third_party
        )

    def plus(self, other: "VoteSwapData") -> "VoteSwapData":
        return VoteSwapData(
            *(getattr(self, f.name) + getattr(other, f.name) for f in fields(self))
        )

    __add__ = plus


def margin(snapshot: SnapshotApi) -> Decimal:
    """Vote count decrease below which a loss is treated as noise."""
    return MARGIN_FACTOR * snapshot.total_votes + MARGIN_OFFSET


def _apportion(lost: Decimal, gains: List[Tuple[str, Decimal]]) -> Dict[str, Decimal]:
    """
    Hand out the lost votes to the gainers in the given order, each up to
    its own gain. Whatever remains after the last gainer is dropped.
    """
    remaining = lost
    swaps: Dict[str, Decimal] = {}
    for field_name, gain in gains:
        if gain > 0:
            amount = min(gain, remaining)
            swaps[field_name] = amount
            remaining -= amount
    return swaps


class FindFraud:
    """Callable applying the vote swap heuristic to a snapshot pair."""

    def __init__(
        self,
        candidate1: Candidate,
        candidate2: Candidate,
        biased_against_candidate1: bool = False,
    ):
        """
        Args:
            candidate1: First tracked candidate
            candidate2: Second tracked candidate
            biased_against_candidate1: When the third party loses votes, try
                to apportion them to candidate 1 first (else candidate 2 first)
        """
        if candidate1 == candidate2:
            raise PreconditionError(f"Candidates must differ, got {candidate1} twice")
        self.candidate1 = candidate1
        self.candidate2 = candidate2
        self.biased_against_candidate1 = biased_against_candidate1

    def __repr__(self) -> str:
        return (
            f"FindFraud({self.candidate1!s}, {self.candidate2!s}, "
            f"biased_against_candidate1={self.biased_against_candidate1})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, FindFraud):
            return NotImplemented
        return (self.candidate1, self.candidate2, self.biased_against_candidate1) == (
            other.candidate1,
            other.candidate2,
            other.biased_against_candidate1,
        )

    def __hash__(self) -> int:
        return hash((self.candidate1, self.candidate2, self.biased_against_candidate1))

    def swap_bias(self) -> "FindFraud":
        """Swaps the candidate we are biased against when third party votes get lost."""
        return FindFraud(
            self.candidate1, self.candidate2, not self.biased_against_candidate1
        )

    def having_bias_against_candidate1(self) -> "FindFraud":
        return FindFraud(self.candidate1, self.candidate2, True)

    def having_bias_against_candidate2(self) -> "FindFraud":
        return FindFraud(self.candidate1, self.candidate2, False)

    def __call__(self, snapshot1: SnapshotApi, snapshot2: SnapshotApi) -> VoteSwapData:
        require_valid_pair(snapshot1, snapshot2)

        result = (
            self._candidate_vote_swaps(
                self.candidate1, self.candidate2, snapshot1, snapshot2
            )
            .plus(
                self._candidate_vote_swaps(
                    self.candidate2, self.candidate1, snapshot1, snapshot2
                )
            )
            .plus(self._third_party_vote_swaps(snapshot1, snapshot2))
        )

        if result.total_votes_lost > 0:
            logger.debug(
                f"Vote swaps between {snapshot1.timestamp} and {snapshot2.timestamp}: "
                f"{result.total_votes_lost} votes"
            )
        return result

    def _third_party_delta(
        self, snapshot1: SnapshotApi, snapshot2: SnapshotApi
    ) -> Decimal:
        return snapshot2.total_votes_of_third_party_as_decimal(
            self.candidate1, self.candidate2
        ) - snapshot1.total_votes_of_third_party_as_decimal(
            self.candidate1, self.candidate2
        )

    def _candidate_vote_swaps(
        self,
        candidate: Candidate,
        other_candidate: Candidate,
        snapshot1: SnapshotApi,
        snapshot2: SnapshotApi,
    ) -> VoteSwapData:
        candidate_delta = snapshot2.total_votes_of_as_decimal(
            candidate
        ) - snapshot1.total_votes_of_as_decimal(candidate)
        other_candidate_delta = snapshot2.total_votes_of_as_decimal(
            other_candidate
        ) - snapshot1.total_votes_of_as_decimal(other_candidate)
        third_party_delta = self._third_party_delta(snapshot1, snapshot2)

        if candidate_delta >= 0 or -candidate_delta <= margin(snapshot2):
            return VoteSwapData.empty()
        if other_candidate_delta <= 0 and third_party_delta <= 0:
            return VoteSwapData.empty()
        if not (
            candidate_delta <= other_candidate_delta
            or candidate_delta <= third_party_delta
        ):
            return VoteSwapData.empty()

        # The other candidate is served before the third party
        if candidate == self.candidate1:
            gains = [
                ("candidate1_to_candidate2", other_candidate_delta),
                ("candidate1_to_third", third_party_delta),
            ]
        else:
            gains = [
                ("candidate2_to_candidate1", other_candidate_delta),
                ("candidate2_to_third", third_party_delta),
            ]
        return VoteSwapData(**_apportion(-candidate_delta, gains))

    def _third_party_vote_swaps(
        self, snapshot1: SnapshotApi, snapshot2: SnapshotApi
    ) -> VoteSwapData:
        if self.biased_against_candidate1:
            first, second = self.candidate1, self.candidate2
        else:
            first, second = self.candidate2, self.candidate1

        third_party_delta = self._third_party_delta(snapshot1, snapshot2)
        first_delta = snapshot2.total_votes_of_as_decimal(
            first
        ) - snapshot1.total_votes_of_as_decimal(first)
        second_delta = snapshot2.total_votes_of_as_decimal(
            second
        ) - snapshot1.total_votes_of_as_decimal(second)

        if third_party_delta >= 0 or -third_party_delta <= margin(snapshot2):
            return VoteSwapData.empty()
        if first_delta <= 0 and second_delta <= 0:
            return VoteSwapData.empty()
        if not (third_party_delta <= first_delta or third_party_delta <= second_delta):
            return VoteSwapData.empty()

        def field_for(candidate: Candidate) -> str:
            return (
                "third_to_candidate1"
                if candidate == self.candidate1
                else "third_to_candidate2"
            )

        gains = [(field_for(first), first_delta), (field_for(second), second_delta)]
        return VoteSwapData(**_apportion(-third_party_delta, gains))
