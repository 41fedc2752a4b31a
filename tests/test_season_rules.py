"""Tests for season rules and step preconditions."""

import pytest

from src.season_engine.season_rules import (
    InvariantViolation,
    PreconditionError,
    SeasonRules,
    SimulationError,
)


@pytest.fixture
def rules():
    return SeasonRules()


def _ids(n):
    return [f"q{i}" for i in range(n)]


class TestValidateFormat:
    @pytest.mark.parametrize("fmt", ["regular", "legacy"])
    def test_valid(self, rules, fmt):
        assert rules.validate_format(fmt) == (True, None)

    def test_invalid(self, rules):
        is_valid, error = rules.validate_format("all_stars")
        assert is_valid is False
        assert "all_stars" in error


class TestValidateEpisode:
    def test_minimum(self, rules):
        assert rules.validate_episode(_ids(4), 1) == (True, None)

    def test_too_few_queens(self, rules):
        is_valid, error = rules.validate_episode(_ids(3), 5)
        assert is_valid is False
        assert "4 queens" in error

    def test_no_songs(self, rules):
        is_valid, error = rules.validate_episode(_ids(6), 0)
        assert is_valid is False
        assert "song" in error

    def test_duplicates(self, rules):
        is_valid, error = rules.validate_episode(["a", "b", "c", "a"], 1)
        assert is_valid is False
        assert "'a'" in error


class TestValidateSeason:
    def test_minimum(self, rules):
        assert rules.validate_season(_ids(6), 5) == (True, None)

    @pytest.mark.parametrize("queens, songs", [(5, 5), (6, 4)])
    def test_below_tier(self, rules, queens, songs):
        assert rules.validate_season(_ids(queens), songs)[0] is False


class TestValidateFinale:
    def test_exactly_four(self, rules):
        assert rules.validate_finale(_ids(4), 1) == (True, None)

    @pytest.mark.parametrize("n", [3, 5, 8])
    def test_other_sizes(self, rules, n):
        is_valid, error = rules.validate_finale(_ids(n), 3)
        assert is_valid is False
        assert "exactly 4" in error


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(PreconditionError, SimulationError)
        assert issubclass(InvariantViolation, SimulationError)

    def test_precondition_to_dict(self):
        err = PreconditionError("Need at least 4 queens (got 2)")
        assert err.to_dict() == {
            "status": "precondition_failed",
            "error": "Need at least 4 queens (got 2)",
        }
