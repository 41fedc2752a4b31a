"""Tests for ranking and placement assignment."""

from collections import Counter

import pytest

from src.season_engine.models import Placement
from src.season_engine.placements import (
    assign_placements,
    placement_slots,
    queens_with,
    rank_queens,
)
from src.season_engine.season_rules import InvariantViolation


# ── Helpers ──────────────────────────────────────────────────────────

def _make_ranked(n):
    """q1..qN with strictly decreasing scores."""
    return [(f"q{i}", float(100 - i)) for i in range(1, n + 1)]


def _counts(placements):
    return Counter(p for p in placements.values())


# ── Ranking ──────────────────────────────────────────────────────────


class TestRankQueens:
    def test_descending(self):
        ranked = rank_queens({"a": 1.0, "b": 3.0, "c": 2.0}, ["a", "b", "c"])
        assert [qid for qid, _ in ranked] == ["b", "c", "a"]

    def test_ties_keep_remaining_order(self):
        scores = {"a": 5.0, "b": 5.0, "c": 5.0, "d": 7.0}
        ranked = rank_queens(scores, ["c", "a", "b", "d"])
        assert [qid for qid, _ in ranked] == ["d", "c", "a", "b"]


# ── Placement table ──────────────────────────────────────────────────


class TestPlacementSlots:
    @pytest.mark.parametrize("n, expected", [
        (12, (2, True)),
        (8, (2, True)),
        (7, (2, False)),
        (6, (1, True)),
        (5, (0, True)),
        (4, (0, False)),
    ])
    def test_table(self, n, expected):
        assert placement_slots(n) == expected


class TestAssignPlacements:
    @pytest.mark.parametrize("n, expected", [
        (8, {"WIN": 1, "HIGH": 2, "SAFE": 2, "LOW": 1, "BTM2": 2}),
        (7, {"WIN": 1, "HIGH": 2, "SAFE": 2, "BTM2": 2}),
        (6, {"WIN": 1, "HIGH": 1, "SAFE": 1, "LOW": 1, "BTM2": 2}),
        (5, {"WIN": 1, "SAFE": 1, "LOW": 1, "BTM2": 2}),
        (4, {"WIN": 1, "SAFE": 1, "BTM2": 2}),
    ])
    def test_counts_per_cast_size(self, n, expected):
        placements = assign_placements(_make_ranked(n), n)
        counts = {p.value: c for p, c in _counts(placements).items()}
        assert counts == expected

    @pytest.mark.parametrize("n", range(4, 15))
    def test_everyone_placed_once(self, n):
        placements = assign_placements(_make_ranked(n), n)
        assert len(placements) == n
        assert _counts(placements)[Placement.WIN] == 1
        assert _counts(placements)[Placement.BTM2] == 2

    def test_positions(self):
        placements = assign_placements(_make_ranked(8), 8)
        assert placements["q1"] is Placement.WIN
        assert placements["q2"] is Placement.HIGH
        assert placements["q3"] is Placement.HIGH
        assert placements["q6"] is Placement.LOW
        assert placements["q7"] is Placement.BTM2
        assert placements["q8"] is Placement.BTM2

    def test_three_queens_no_high_or_low(self):
        placements = assign_placements(_make_ranked(3), 3)
        assert set(placements.values()) == {Placement.WIN, Placement.BTM2}

    def test_too_few_raises(self):
        with pytest.raises(InvariantViolation):
            assign_placements(_make_ranked(2), 2)


class TestQueensWith:
    def test_filters_in_order(self):
        placements = assign_placements(_make_ranked(6), 6)
        assert queens_with(placements, Placement.BTM2) == ["q5", "q6"]
        assert queens_with(placements, Placement.HIGH) == ["q2"]
