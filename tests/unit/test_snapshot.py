"""
Unit tests for candidates and voting snapshots.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from conftest import empty_snapshot, make_snapshot

from election_timeseries.data import (
    BIDEN,
    THIRD_PARTY,
    TRUMP,
    Candidate,
    IndexedSnapshot,
    VotingSnapshot,
)
from election_timeseries.data.snapshot import (
    gained_total_votes,
    gained_vote_share_of_candidate,
    gained_votes_of_candidate,
    round_half_up,
    to_decimal,
)
from election_timeseries.exceptions import PreconditionError


@pytest.mark.unit
class TestCandidate:
    def test_candidates_compare_by_name(self):
        assert Candidate("trumpd") == TRUMP
        assert Candidate("bidenj") == BIDEN
        assert TRUMP != BIDEN

    def test_str_is_name(self):
        assert str(THIRD_PARTY) == "other"
        assert str(TRUMP) == "trumpd"

    def test_candidates_are_hashable(self):
        assert {TRUMP: 1, Candidate("trumpd"): 2} == {TRUMP: 2}


@pytest.mark.unit
class TestNumbers:
    def test_float_converted_via_repr(self):
        assert to_decimal(0.6) == Decimal("0.6")
        assert to_decimal(0.35) == Decimal("0.35")

    def test_int_and_str(self):
        assert to_decimal(3) == Decimal(3)
        assert to_decimal("0.001") == Decimal("0.001")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_round_half_up(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("2.4")) == 2
        assert round_half_up(Decimal("-2.5")) == -3


@pytest.mark.unit
class TestVotingSnapshot:
    def setup_method(self):
        self.snapshot = make_snapshot(("0.6", "0.35"), 1000, minutes=10)

    def test_vote_totals_per_candidate(self):
        assert self.snapshot.total_votes_of_as_decimal(TRUMP) == Decimal("600")
        assert self.snapshot.total_votes_of_as_decimal(BIDEN) == Decimal("350")
        assert self.snapshot.total_votes_of(TRUMP) == 600

    def test_unknown_candidate_has_share_zero(self):
        assert self.snapshot.vote_share_of(Candidate("jorgensenj")) == 0
        assert self.snapshot.total_votes_of(Candidate("jorgensenj")) == 0

    def test_third_party_is_complement(self):
        assert self.snapshot.vote_share_of_third_party(TRUMP, BIDEN) == Decimal("0.05")
        assert self.snapshot.total_votes_of_third_party_as_decimal(
            TRUMP, BIDEN
        ) == Decimal("50")

    def test_total_votes_rounded_half_up(self):
        snapshot = make_snapshot(("0.5", "0.4"), 1001)
        assert snapshot.total_votes_of_as_decimal(TRUMP) == Decimal("500.5")
        assert snapshot.total_votes_of(TRUMP) == 501

    def test_shares_within_bounds(self):
        assert self.snapshot.vote_shares_within_bounds()
        assert not make_snapshot(("0.6", "0.5"), 1000).vote_shares_within_bounds()
        assert not make_snapshot(("-0.1", "0.5"), 1000).vote_shares_within_bounds()

    def test_contains_all_candidates(self):
        assert self.snapshot.contains_all_candidates([TRUMP, BIDEN])
        assert not self.snapshot.contains_all_candidates([TRUMP, Candidate("x")])

    def test_empty(self):
        assert empty_snapshot().is_empty
        assert not empty_snapshot().non_empty
        assert self.snapshot.non_empty

    def test_chronology(self):
        earlier = make_snapshot(("0.6", "0.35"), 1000, minutes=5)
        same_time = make_snapshot(("0.5", "0.45"), 2000, minutes=10)

        assert earlier.is_before(self.snapshot)
        assert self.snapshot.is_after(earlier)
        assert not same_time.is_before(self.snapshot)
        assert not same_time.is_after(self.snapshot)

    def test_create_keeps_other_data(self):
        snapshot = make_snapshot(("0.6", "0.35"), 1000)
        assert snapshot.other_data == {}

        with_data = VotingSnapshot.create(
            {"trumpd": 0.6},
            10,
            datetime(2020, 11, 4, tzinfo=timezone.utc),
            {"eevp": "10"},
        )
        assert with_data.other_data == {"eevp": "10"}
        assert with_data.vote_shares == {TRUMP: Decimal("0.6")}


@pytest.mark.unit
class TestIndexedSnapshot:
    def test_delegates_to_snapshot(self):
        snapshot = make_snapshot(("0.6", "0.35"), 1000, minutes=10)
        indexed = IndexedSnapshot(snapshot, 7)

        assert indexed.index == 7
        assert indexed.total_votes == 1000
        assert indexed.timestamp == snapshot.timestamp
        assert indexed.vote_shares == snapshot.vote_shares
        assert indexed.total_votes_of(TRUMP) == 600
        assert indexed.vote_share_of_third_party(TRUMP, BIDEN) == Decimal("0.05")
        assert indexed.non_empty


@pytest.mark.unit
class TestGains:
    def setup_method(self):
        self.snapshot1 = make_snapshot(("0.6", "0.35"), 1000, minutes=10)
        self.snapshot2 = make_snapshot(("0.55", "0.4"), 2000, minutes=20)

    def test_gained_votes(self):
        assert gained_total_votes(self.snapshot1, self.snapshot2) == 1000
        assert gained_votes_of_candidate(TRUMP, self.snapshot1, self.snapshot2) == 500
        assert gained_votes_of_candidate(BIDEN, self.snapshot1, self.snapshot2) == 450

    def test_gained_vote_share(self):
        assert gained_vote_share_of_candidate(
            TRUMP, self.snapshot1, self.snapshot2
        ) == Decimal("-0.05")

    def test_wrong_order_fails(self):
        with pytest.raises(PreconditionError):
            gained_total_votes(self.snapshot2, self.snapshot1)
