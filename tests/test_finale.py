"""Tests for lip syncs and the finale bracket."""

import pytest

from src.season_engine.finale import run_finale_bracket, shows_growth
from src.season_engine.lip_sync import run_lip_sync
from src.season_engine.models import Placement, Queen
from src.season_engine.randomness import RandomSource
from src.season_engine.season_rules import InvariantViolation


def _make_queen(queen_id, **attrs):
    return Queen(queen_id=queen_id, name=queen_id, **attrs)


# ── Lip sync ─────────────────────────────────────────────────────────


class TestRunLipSync:
    def test_tie_goes_to_second(self, midpoint_rng):
        result = run_lip_sync(_make_queen("a"), _make_queen("b"), midpoint_rng)
        assert (result.winner_id, result.loser_id) == ("b", "a")

    def test_better_lip_syncer_wins(self, midpoint_rng):
        result = run_lip_sync(
            _make_queen("a", lip_sync_prowess=10.0), _make_queen("b"), midpoint_rng
        )
        assert result.winner_id == "a"
        assert result.performances["a"] == pytest.approx(7.0)

    def test_production_bias_favours_winners(self, midpoint_rng):
        result = run_lip_sync(
            _make_queen("a"), _make_queen("b"), midpoint_rng,
            win_counts={"a": 2}, bottom_counts={"b": 2},
        )
        assert result.winner_id == "a"
        assert result.scores["a"] == pytest.approx(5.96)

    def test_clean_contest_ignores_track_record(self, midpoint_rng):
        result = run_lip_sync(
            _make_queen("a"), _make_queen("b"), midpoint_rng,
            win_counts={"a": 3}, with_bias=False,
        )
        assert result.scores == {"a": 5.0, "b": 5.0}
        assert result.winner_id == "b"

    def test_song_recorded(self, midpoint_rng):
        result = run_lip_sync(_make_queen("a"), _make_queen("b"), midpoint_rng, song="Roar by Katy Perry")
        assert result.to_dict()["song"] == "Roar by Katy Perry"


# ── Growth ───────────────────────────────────────────────────────────


class TestShowsGrowth:
    def test_struggle_then_success(self):
        history = [Placement.BTM2, Placement.SAFE, Placement.HIGH, Placement.WIN]
        assert shows_growth(history) is True

    def test_success_then_struggle(self):
        history = [Placement.WIN, Placement.HIGH, Placement.LOW, Placement.BTM2]
        assert shows_growth(history) is False

    def test_too_short(self):
        assert shows_growth([Placement.LOW, Placement.WIN]) is False


# ── Bracket ──────────────────────────────────────────────────────────


class TestRunFinaleBracket:
    def test_exactly_one_of_each_placement(self, cast):
        for seed in range(20):
            bracket = run_finale_bracket(cast[:4], RandomSource(seed))
            labels = sorted(p.value for p in bracket.placements.values())
            assert labels == sorted(["WINNER", "TOP2", "3RD", "4TH"])
            assert len(bracket.placements) == 4

    def test_midpoint_bracket(self, cast, midpoint_rng):
        bracket = run_finale_bracket(cast[:4], midpoint_rng, songs=["x", "y", "z"])
        # every lip sync ties, so the second queen of each pair wins
        first, second = bracket.first_pair, bracket.second_pair
        assert bracket.first_semifinal.winner_id == first[1]
        assert bracket.second_semifinal.winner_id == second[1]
        assert bracket.winner_id == second[1]
        assert bracket.rankings[2] == (first[0], Placement.THIRD)
        assert bracket.rankings[3] == (second[0], Placement.FOURTH)
        assert [ls.song for ls in bracket.lip_syncs] == ["x", "y", "z"]

    def test_pairs_cover_finalists(self, cast, rng):
        bracket = run_finale_bracket(cast[:4], rng)
        assert sorted(bracket.first_pair + bracket.second_pair) == ["q1", "q2", "q3", "q4"]

    @pytest.mark.parametrize("n", [3, 5])
    def test_not_four_raises(self, cast, rng, n):
        with pytest.raises(InvariantViolation):
            run_finale_bracket(cast[:n], rng)

    def test_oversized_pool_logged(self, cast, rng, caplog):
        with caplog.at_level("WARNING"), pytest.raises(InvariantViolation):
            run_finale_bracket(cast[:6], rng)
        assert "refusing to truncate" in caplog.text
