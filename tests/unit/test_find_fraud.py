"""
Unit tests for the vote swap heuristic.
"""

from decimal import Decimal

import pytest
from conftest import make_snapshot

from election_timeseries.analysis import FindFraud, VoteSwapData
from election_timeseries.analysis.find_fraud import margin
from election_timeseries.data import BIDEN, TRUMP
from election_timeseries.exceptions import PreconditionError

# trumpd 5000, bidenj 4000, third 1000
SNAPSHOT1 = make_snapshot(("0.5", "0.4"), 10000, minutes=10)


@pytest.mark.unit
class TestVoteSwapData:
    def test_totals(self):
        data = VoteSwapData(
            candidate1_to_candidate2=Decimal(1),
            candidate1_to_third=Decimal(2),
            candidate2_to_candidate1=Decimal(4),
            candidate2_to_third=Decimal(8),
            third_to_candidate1=Decimal(16),
            third_to_candidate2=Decimal(32),
        )
        assert data.total_votes_lost_candidate1 == 3
        assert data.total_votes_lost_candidate2 == 12
        assert data.total_votes_lost_third_party == 48
        assert data.total_votes_lost == 63

    def test_plus(self):
        data = VoteSwapData(candidate1_to_third=Decimal(2))
        assert data + data == VoteSwapData(candidate1_to_third=Decimal(4))
        assert data.plus(VoteSwapData.empty()) == data


@pytest.mark.unit
class TestFindFraud:
    def setup_method(self):
        self.find_fraud = FindFraud(TRUMP, BIDEN)

    def test_margin(self):
        assert margin(SNAPSHOT1) == Decimal("54.9999")

    def test_candidate_loss_goes_to_other_candidate_first(self):
        # trumpd -200, bidenj +100, third +100
        snapshot2 = make_snapshot(("0.48", "0.41"), 10000, minutes=20)

        result = self.find_fraud(SNAPSHOT1, snapshot2)

        assert result == VoteSwapData(
            candidate1_to_candidate2=Decimal(100),
            candidate1_to_third=Decimal(100),
        )

    def test_loss_of_candidate2(self):
        # trumpd +100, bidenj -200, third +100
        snapshot2 = make_snapshot(("0.51", "0.38"), 10000, minutes=20)

        result = self.find_fraud(SNAPSHOT1, snapshot2)

        assert result == VoteSwapData(
            candidate2_to_candidate1=Decimal(100),
            candidate2_to_third=Decimal(100),
        )

    def test_remainder_of_loss_is_dropped(self):
        # trumpd 5000 -> 4606, bidenj 4000 -> 4116, third 1000 -> 1078
        snapshot2 = make_snapshot(("0.47", "0.42"), 9800, minutes=20)

        result = self.find_fraud(SNAPSHOT1, snapshot2)

        assert result.candidate1_to_candidate2 == Decimal(116)
        assert result.candidate1_to_third == Decimal(78)
        assert result.total_votes_lost_candidate1 < 394

    def test_loss_within_margin_ignored(self):
        # trumpd -30, bidenj +30
        snapshot2 = make_snapshot(("0.497", "0.403"), 10000, minutes=20)
        assert self.find_fraud(SNAPSHOT1, snapshot2) == VoteSwapData.empty()

    def test_nobody_gains(self):
        # trumpd -100, bidenj -200, third -100
        snapshot1 = make_snapshot(("0.5", "0.4"), 2000, minutes=10)
        snapshot2 = make_snapshot(("0.5625", "0.375"), 1600, minutes=20)
        assert self.find_fraud(snapshot1, snapshot2) == VoteSwapData.empty()

    def test_third_party_loss_goes_to_candidate2_first_by_default(self):
        # trumpd +1000, bidenj +1400, third -400
        snapshot2 = make_snapshot(("0.5", "0.45"), 12000, minutes=20)

        result = self.find_fraud(SNAPSHOT1, snapshot2)

        assert result == VoteSwapData(
            third_to_candidate1=Decimal(0), third_to_candidate2=Decimal(400)
        )

    def test_third_party_loss_with_bias_against_candidate1(self):
        snapshot2 = make_snapshot(("0.5", "0.45"), 12000, minutes=20)

        result = self.find_fraud.having_bias_against_candidate1()(SNAPSHOT1, snapshot2)

        assert result == VoteSwapData(
            third_to_candidate1=Decimal(400), third_to_candidate2=Decimal(0)
        )

    def test_bias_flag(self):
        assert not self.find_fraud.biased_against_candidate1
        assert self.find_fraud.swap_bias().biased_against_candidate1
        assert self.find_fraud.swap_bias().swap_bias() == self.find_fraud
        assert self.find_fraud.having_bias_against_candidate2() == self.find_fraud
        assert hash(FindFraud(TRUMP, BIDEN)) == hash(self.find_fraud)

    def test_same_candidates_not_allowed(self):
        with pytest.raises(PreconditionError):
            FindFraud(BIDEN, BIDEN)

    def test_wrong_order(self):
        snapshot2 = make_snapshot(("0.48", "0.41"), 10000, minutes=5)
        with pytest.raises(PreconditionError):
            self.find_fraud(SNAPSHOT1, snapshot2)


@pytest.mark.invariant
@pytest.mark.parametrize(
    "shares,total_votes",
    [
        (("0.48", "0.41"), 10000),
        (("0.51", "0.38"), 10000),
        (("0.47", "0.42"), 9800),
        (("0.5", "0.45"), 12000),
        (("0.45", "0.35"), 9000),
        (("0.2", "0.7"), 10000),
        (("0.6", "0.2"), 11000),
    ],
)
@pytest.mark.parametrize("biased_against_candidate1", [False, True])
def test_swaps_non_negative_and_bounded_by_loss(
    shares, total_votes, biased_against_candidate1
):
    """Apportioned votes are >= 0 and never exceed the loss of the entity."""
    snapshot2 = make_snapshot(shares, total_votes, minutes=20)
    find_fraud = FindFraud(TRUMP, BIDEN, biased_against_candidate1)

    result = find_fraud(SNAPSHOT1, snapshot2)

    assert all(
        value >= 0
        for value in (
            result.candidate1_to_candidate2,
            result.candidate1_to_third,
            result.candidate2_to_candidate1,
            result.candidate2_to_third,
            result.third_to_candidate1,
            result.third_to_candidate2,
        )
    )

    def loss(before, after):
        return max(before - after, Decimal(0))

    assert result.total_votes_lost_candidate1 <= loss(
        SNAPSHOT1.total_votes_of_as_decimal(TRUMP),
        snapshot2.total_votes_of_as_decimal(TRUMP),
    )
    assert result.total_votes_lost_candidate2 <= loss(
        SNAPSHOT1.total_votes_of_as_decimal(BIDEN),
        snapshot2.total_votes_of_as_decimal(BIDEN),
    )
    assert result.total_votes_lost_third_party <= loss(
        SNAPSHOT1.total_votes_of_third_party_as_decimal(TRUMP, BIDEN),
        snapshot2.total_votes_of_third_party_as_decimal(TRUMP, BIDEN),
    )
