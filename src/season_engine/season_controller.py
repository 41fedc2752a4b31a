"""Season controller - orchestrates episode flow and state updates."""

import logging
from typing import Dict, List, Tuple

import pandas as pd

from src.season_engine.config import (
    FINALE_CHALLENGE,
    FINALE_LABEL,
    GIRL_GROUPS,
    MORALE_BOTTOM_DROP,
    MORALE_GROWTH_BONUS,
    MORALE_SURVIVAL_BOOST,
    MORALE_WIN_BOOST,
)
from src.season_engine.finale import run_finale_bracket, shows_growth
from src.season_engine.girl_groups import form_groups
from src.season_engine.legacy import resolve_legacy
from src.season_engine.lip_sync import run_lip_sync
from src.season_engine.models import (
    EpisodeRecord,
    FinaleResult,
    Placement,
    Queen,
    SeasonResult,
)
from src.season_engine.placements import assign_placements, queens_with, rank_queens
from src.season_engine.pressure import pressure_state
from src.season_engine.randomness import RandomSource
from src.season_engine.relationships import RelationshipGraph
from src.season_engine.scoring import challenge_score, combined_score, risk_taking, runway_score
from src.season_engine.season_rules import InvariantViolation, PreconditionError, SeasonRules
from src.season_engine.season_state import SeasonState
from src.season_engine.selection import select_challenge, select_song, select_songs
from src.season_engine.track_record import build_track_record

logger = logging.getLogger(__name__)

Scores = Tuple[Dict[str, str], Dict[str, float], Dict[str, float], Dict[str, float]]


class SeasonController:
    """Main controller for season orchestration.

    Coordinates scoring, placements, lip syncs and the relationship graph
    to advance a :class:`SeasonState` one episode (or the finale) at a time.
    One controller drives both season formats. Without an explicit
    ``rng`` it continues the random source the state was created with.
    """

    def __init__(self, season_state: SeasonState, rng: RandomSource = None):
        self.season_state = season_state
        self.rules = SeasonRules()
        self.rng = rng or season_state.rng or RandomSource(season_state.config.seed)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def simulate_episode(self) -> EpisodeRecord:
        """Run one regular or legacy episode and advance the season.

        Returns:
            The immutable record of the episode.

        Raises:
            PreconditionError: If the season is over, the format is unknown,
                or fewer than 4 queens / 1 song are available. Nothing is
                mutated in that case.
        """
        state = self.season_state
        self._check(not state.is_complete, "Season is already complete")
        self._check(*self.rules.validate_format(state.config.season_format))
        self._check(*self.rules.validate_episode(state.remaining, len(state.songs)))

        episode_number = state.episode_number
        queens = state.remaining_queens()
        remaining_count = len(queens)

        challenge = select_challenge(state.used_challenges, remaining_count, self.rng)
        pressure, runway, risk, challenge_scores = self._score_queens(queens, challenge)

        combined = {
            qid: combined_score(challenge_scores[qid], runway[qid]) for qid in state.remaining
        }
        ranked = rank_queens(combined, state.remaining)
        placements = assign_placements(ranked, remaining_count)

        groups = None
        if challenge == GIRL_GROUPS:
            groups = form_groups(queens, state.relationships, self.rng)

        bottom2 = queens_with(placements, Placement.BTM2)
        if len(bottom2) != 2:
            raise InvariantViolation(f"Expected 2 queens in the bottom, got {len(bottom2)}")

        song = select_song(state.used_songs, state.songs, self.rng)

        if state.config.season_format == "legacy":
            extra = self._legacy_elimination(
                episode_number, ranked, bottom2, placements, challenge_scores, song.descriptor
            )
        else:
            extra = self._regular_elimination(ranked[0][0], bottom2, song.descriptor)

        eliminated = extra.pop("eliminated")
        winner = extra.pop("winner")
        lows = queens_with(placements, Placement.LOW)

        state.record_placements(placements)
        state.eliminate(eliminated)

        if state.config.narrative:
            state.relationships.drift(state.remaining_queens(), episode_number, self.rng)
        if "top2" in extra:
            extra["relationships"] = state.relationships.to_dict()

        record = EpisodeRecord(
            episode_number=episode_number,
            challenge=challenge,
            challenge_scores=challenge_scores,
            runway_scores=runway,
            winner=winner,
            high=queens_with(placements, Placement.HIGH),
            low=lows[0] if lows else None,
            bottom2=bottom2,
            lip_sync_song=song.descriptor,
            lip_sync_song_id=song.song_id,
            eliminated=eliminated,
            remaining=list(state.remaining),
            risk_taking=risk,
            pressure_state=pressure,
            placements=placements,
            season_format=state.config.season_format,
            groups=groups,
            **extra,
        )
        state.advance_episode(record)

        logger.info(
            "Episode %d (%s): %s wins, %s vs %s in the bottom, %s sashays away",
            episode_number,
            challenge,
            self._name(winner),
            self._name(bottom2[0]),
            self._name(bottom2[1]),
            self._name(eliminated),
        )
        return record

    def run_finale(self) -> FinaleResult:
        """Run the finale bracket on the last four queens and crown a winner.

        Raises:
            PreconditionError: If the season is over or the pool is not
                exactly four queens. Oversized pools are never truncated.
        """
        state = self.season_state
        self._check(not state.is_complete, "Season is already complete")
        is_valid, error = self.rules.validate_finale(state.remaining, len(state.songs))
        if not is_valid and len(state.remaining) > 4:
            logger.warning("Finale requested with %d queens remaining", len(state.remaining))
        self._check(is_valid, error)

        episode_number = state.episode_number
        finalists = state.remaining_queens()

        for queen in finalists:
            if shows_growth(state.history(queen.queen_id)):
                state.adjust_morale(queen.queen_id, MORALE_GROWTH_BONUS)

        pressure, runway, risk, challenge_scores = self._score_queens(finalists, FINALE_CHALLENGE)
        songs = select_songs(state.used_songs, state.songs, 3, self.rng)

        bracket = run_finale_bracket(
            finalists,
            self.rng,
            bottom_counts=state.bottom_counts,
            win_counts=state.win_counts,
            morale=state.morale,
            songs=[s.descriptor for s in songs],
        )

        # each queen's semifinal performance; the final is in finale_lip_syncs
        lip_sync_scores: Dict[str, float] = {}
        for result in (bracket.first_semifinal, bracket.second_semifinal):
            lip_sync_scores.update(result.performances)

        placements = bracket.placements
        ranked_ids = [qid for qid, _ in bracket.rankings]
        state.add_win(bracket.winner_id)
        state.record_placements(placements)

        record = EpisodeRecord(
            episode_number=episode_number,
            challenge=FINALE_LABEL,
            challenge_scores=challenge_scores,
            runway_scores=runway,
            winner=bracket.winner_id,
            high=[],
            low=None,
            bottom2=[bracket.final.winner_id, bracket.final.loser_id],
            lip_sync_song=songs[2].descriptor,
            lip_sync_song_id=songs[2].song_id,
            eliminated=None,
            remaining=ranked_ids,
            risk_taking=risk,
            pressure_state=pressure,
            placements=placements,
            lip_sync_scores=lip_sync_scores,
            season_format=state.config.season_format,
            finale_lip_syncs=bracket.lip_syncs,
        )
        state.advance_episode(record)
        state.is_complete = True
        state.winner_id = bracket.winner_id

        logger.info("%s is the winner of the season!", self._name(bracket.winner_id))
        return FinaleResult(winner_id=bracket.winner_id, rankings=bracket.rankings, episode=record)

    def run_season(self) -> SeasonResult:
        """Play every remaining episode, then the finale.

        Raises:
            PreconditionError: If the cast is below the full-season tier
                (6 queens, 5 songs) when the season starts.
        """
        state = self.season_state
        if state.episode_number == 1:
            self._check(*self.rules.validate_season(state.remaining, len(state.songs)))

        while len(state.remaining) > 4:
            self.simulate_episode()

        finale = self.run_finale()
        return SeasonResult(
            winner_id=finale.winner_id,
            episodes=list(state.episodes),
            final_four=[qid for qid, _ in finale.rankings],
            placements=dict(finale.rankings),
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        """Whether the winner has been crowned."""
        return self.season_state.is_complete

    def get_remaining_queens(self) -> List[Queen]:
        return self.season_state.remaining_queens()

    def get_relationships(self) -> RelationshipGraph:
        return self.season_state.relationships

    def get_track_record(self) -> pd.DataFrame:
        """Placement table for every queen so far."""
        return build_track_record(self.season_state)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check(self, is_valid: bool, error_msg: str = None):
        if not is_valid:
            logger.warning("Step rejected: %s", error_msg)
            raise PreconditionError(error_msg)

    def _name(self, queen_id: str) -> str:
        return self.season_state.get_queen(queen_id).name

    def _score_queens(self, queens: List[Queen], challenge: str) -> Scores:
        """Pressure, runway, risk and challenge scores, drawn in that order."""
        state = self.season_state
        pressure = {
            q.queen_id: pressure_state(q, state.history(q.queen_id), self.rng) for q in queens
        }
        runway = {q.queen_id: runway_score(q, self.rng) for q in queens}
        risk = {q.queen_id: risk_taking(q, pressure[q.queen_id], self.rng) for q in queens}
        scores = {
            q.queen_id: challenge_score(
                q, challenge, runway[q.queen_id], pressure[q.queen_id], risk[q.queen_id], self.rng
            )
            for q in queens
        }
        for q in queens:
            logger.debug(
                "%s: %s, runway %.2f, risk %.2f, challenge %.2f",
                q.name, pressure[q.queen_id], runway[q.queen_id],
                risk[q.queen_id], scores[q.queen_id],
            )
        return pressure, runway, risk, scores

    def _regular_elimination(self, winner: str, bottom2: List[str], song: str) -> Dict:
        """Bottom two lip sync for their lives; counters update first."""
        state = self.season_state
        state.add_win(winner)
        state.adjust_morale(winner, MORALE_WIN_BOOST)
        for qid in bottom2:
            state.add_bottom(qid)
            state.adjust_morale(qid, -MORALE_BOTTOM_DROP)

        result = run_lip_sync(
            state.get_queen(bottom2[0]),
            state.get_queen(bottom2[1]),
            self.rng,
            bottom_counts=state.bottom_counts,
            win_counts=state.win_counts,
            morale=state.morale,
            song=song,
        )
        state.adjust_morale(result.winner_id, MORALE_SURVIVAL_BOOST)

        return {
            "winner": winner,
            "eliminated": result.loser_id,
            "lip_sync_scores": dict(result.performances),
        }

    def _legacy_elimination(
        self,
        episode_number: int,
        ranked: List[Tuple[str, float]],
        bottom2: List[str],
        placements: Dict[str, Placement],
        challenge_scores: Dict[str, float],
        song: str,
    ) -> Dict:
        """Top two lip sync for their legacy; the winner picks who goes home."""
        state = self.season_state
        top2 = [state.get_queen(ranked[0][0]), state.get_queen(ranked[1][0])]
        bottom = [state.get_queen(qid) for qid in bottom2]

        outcome = resolve_legacy(
            top2, bottom, challenge_scores, state.relationships, self.rng, song=song
        )
        if outcome.eliminated_id not in bottom2:
            raise InvariantViolation(
                f"Legacy choice {outcome.eliminated_id} is not in the bottom two"
            )

        placements[outcome.winner_id] = Placement.WIN
        placements[outcome.loser_id] = Placement.TOP2

        for qid in (outcome.winner_id, outcome.loser_id):
            state.add_win(qid)
        state.adjust_morale(outcome.winner_id, MORALE_WIN_BOOST)
        for qid in bottom2:
            state.add_bottom(qid)
            state.adjust_morale(qid, -MORALE_BOTTOM_DROP)
        state.adjust_morale(outcome.saved_id, MORALE_SURVIVAL_BOOST)

        state.relationships.update_after_legacy(
            winner=state.get_queen(outcome.winner_id),
            loser=state.get_queen(outcome.loser_id),
            eliminated=state.get_queen(outcome.eliminated_id),
            saved=state.get_queen(outcome.saved_id),
            loser_choice=state.get_queen(outcome.loser_choice_id),
            episode_number=episode_number,
        )

        return {
            "winner": outcome.winner_id,
            "eliminated": outcome.eliminated_id,
            "lip_sync_scores": dict(outcome.lip_sync.performances),
            "top2": [q.queen_id for q in top2],
            "lipstick_choices": outcome.lipstick_choices,
            "loser_would_have_chosen": outcome.loser_choice_id,
            "elimination_basis": outcome.basis,
        }
