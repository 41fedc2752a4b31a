"""Tests for the track record table."""

import pandas as pd
import pytest

from src.season_engine.models import Queen, Song
from src.season_engine.randomness import FixedRandomSource, RandomSource
from src.season_engine.season_controller import SeasonController
from src.season_engine.season_state import SeasonState
from src.season_engine.track_record import PLACEMENT_ORDER, build_track_record, ordinal, placement_counts


# ── Helpers ──────────────────────────────────────────────────────────


def _make_controller(n=6, rng=None):
    rng = rng or FixedRandomSource(0.5)
    queens = [Queen(queen_id=f"q{i}", name=f"Queen {i}") for i in range(1, n + 1)]
    songs = [Song(song_id=f"s{i}", title=f"Song {i}", artist="Artist") for i in range(1, 7)]
    state = SeasonState.create_new(queens, songs, rng)
    return SeasonController(state, rng=rng)


# ── Ordinal ──────────────────────────────────────────────────────────


class TestOrdinal:
    @pytest.mark.parametrize(
        "n, expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"),
         (12, "12th"), (13, "13th"), (21, "21st"), (22, "22nd"), (101, "101st")],
    )
    def test_suffixes(self, n, expected):
        assert ordinal(n) == expected


# ── Build ────────────────────────────────────────────────────────────


class TestBuildTrackRecord:
    def test_before_any_episode(self):
        ctrl = _make_controller()
        table = build_track_record(ctrl.season_state)
        assert list(table.columns) == ["Queen", "Rank"]
        assert len(table) == 6
        assert set(table["Rank"]) == {""}

    def test_after_one_episode(self):
        ctrl = _make_controller()
        ctrl.simulate_episode()
        table = build_track_record(ctrl.season_state)

        assert list(table.columns) == ["Queen", "Ep. 1", "Rank"]
        assert list(table.index) == ["q1", "q2", "q3", "q4", "q6", "q5"]
        assert table.loc["q1", "Ep. 1"] == "WIN"
        assert table.loc["q2", "Ep. 1"] == "HIGH"
        assert table.loc["q4", "Ep. 1"] == "LOW"
        assert table.loc["q6", "Ep. 1"] == "BTM2"
        assert table.loc["q5", "Ep. 1"] == "ELIM"
        assert table.loc["q5", "Rank"] == "6th"
        assert table.loc["q1", "Rank"] == ""

    def test_blank_after_elimination(self):
        ctrl = _make_controller(rng=RandomSource(3))
        ctrl.simulate_episode()
        ctrl.simulate_episode()
        table = build_track_record(ctrl.season_state)
        first_out = ctrl.season_state.episodes[0].eliminated
        assert table.loc[first_out, "Ep. 1"] == "ELIM"
        assert table.loc[first_out, "Ep. 2"] == ""

    def test_full_season_order(self):
        ctrl = _make_controller(n=7, rng=RandomSource(8))
        result = ctrl.run_season()
        table = build_track_record(ctrl.season_state)

        assert list(table.columns)[-2:] == ["Finale", "Rank"]
        assert list(table.index[:4]) == result.final_four
        eliminated = [ep.eliminated for ep in result.episodes if not ep.is_finale]
        assert list(table.index[4:]) == list(reversed(eliminated))
        assert list(table["Rank"]) == [ordinal(i) for i in range(1, 8)]
        assert table.loc[result.winner_id, "Finale"] == "WINNER"


# ── Counts ───────────────────────────────────────────────────────────


class TestPlacementCounts:
    def test_counts_per_queen(self):
        table = pd.DataFrame(
            {
                "Queen": ["A", "B"],
                "Ep. 1": ["WIN", "BTM2"],
                "Ep. 2": ["HIGH", "ELIM"],
                "Rank": ["", "2nd"],
            },
            index=["a", "b"],
        )
        counts = placement_counts(table)
        assert list(counts.columns) == PLACEMENT_ORDER
        assert counts.loc["a", "WIN"] == 1
        assert counts.loc["a", "HIGH"] == 1
        assert counts.loc["b", "BTM2"] == 1
        assert counts.loc["b", "ELIM"] == 1
        assert counts.loc["b", "WIN"] == 0

    def test_ignores_blanks(self):
        ctrl = _make_controller()
        ctrl.simulate_episode()
        counts = placement_counts(build_track_record(ctrl.season_state))
        assert counts.loc["q5"].sum() == 1
        assert counts["WIN"].sum() == 1

    def test_no_episodes(self):
        ctrl = _make_controller()
        counts = placement_counts(build_track_record(ctrl.season_state))
        assert (counts.values == 0).all()
        assert list(counts.index) == ["q1", "q2", "q3", "q4", "q5", "q6"]
