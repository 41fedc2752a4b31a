"""Finale bracket: two semifinal lip syncs, then a lip sync for the crown."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from src.season_engine.config import FINALE_SIZE, GROWTH_MIN_PLACEMENTS
from src.season_engine.lip_sync import run_lip_sync
from src.season_engine.models import LipSyncResult, Placement, Queen
from src.season_engine.randomness import RandomSource
from src.season_engine.season_rules import InvariantViolation

logger = logging.getLogger(__name__)

_STRUGGLES = {Placement.LOW, Placement.BTM2}
_SUCCESSES = {Placement.WIN, Placement.HIGH}


@dataclass(frozen=True)
class FinaleBracket:
    """Every lip sync in the finale and the resulting top four."""

    first_pair: Tuple[str, str]
    second_pair: Tuple[str, str]
    first_semifinal: LipSyncResult
    second_semifinal: LipSyncResult
    final: LipSyncResult

    @property
    def winner_id(self) -> str:
        return self.final.winner_id

    @property
    def rankings(self) -> List[Tuple[str, Placement]]:
        """Queens 1st to 4th with their finale placement.

        The first semifinal's loser takes 3rd.
        """
        return [
            (self.final.winner_id, Placement.WINNER),
            (self.final.loser_id, Placement.TOP2),
            (self.first_semifinal.loser_id, Placement.THIRD),
            (self.second_semifinal.loser_id, Placement.FOURTH),
        ]

    @property
    def placements(self) -> Dict[str, Placement]:
        return dict(self.rankings)

    @property
    def lip_syncs(self) -> List[LipSyncResult]:
        return [self.first_semifinal, self.second_semifinal, self.final]


def shows_growth(history: Sequence[Placement]) -> bool:
    """Early struggles followed by late success."""
    if len(history) < GROWTH_MIN_PLACEMENTS:
        return False
    half = len(history) // 2
    early, late = history[:half], history[half:]
    return bool(set(early) & _STRUGGLES) and bool(set(late) & _SUCCESSES)


def run_finale_bracket(
    finalists: Sequence[Queen],
    rng: RandomSource,
    bottom_counts: Optional[Mapping[str, int]] = None,
    win_counts: Optional[Mapping[str, int]] = None,
    morale: Optional[Mapping[str, float]] = None,
    songs: Sequence[str] = (),
) -> FinaleBracket:
    """Shuffle four finalists into two pairs and lip sync down to one.

    Args:
        finalists: Exactly four queens.
        songs: Up to three song descriptors, one per lip sync in order.

    Raises:
        InvariantViolation: If there are not exactly four finalists.
    """
    if len(finalists) != FINALE_SIZE:
        if len(finalists) > FINALE_SIZE:
            logger.warning(
                "Finale called with %d queens; refusing to truncate to %d",
                len(finalists), FINALE_SIZE,
            )
        raise InvariantViolation(
            f"Finale needs exactly {FINALE_SIZE} queens, got {len(finalists)}"
        )

    songs = list(songs) + [None] * (3 - len(songs))
    order = rng.shuffled(finalists)
    by_id = {q.queen_id: q for q in finalists}

    def _lip_sync(a: Queen, b: Queen, song: Optional[str]) -> LipSyncResult:
        return run_lip_sync(
            a, b, rng,
            bottom_counts=bottom_counts,
            win_counts=win_counts,
            morale=morale,
            finale=True,
            song=song,
        )

    first = _lip_sync(order[0], order[1], songs[0])
    second = _lip_sync(order[2], order[3], songs[1])
    final = _lip_sync(by_id[first.winner_id], by_id[second.winner_id], songs[2])

    logger.info(
        "Finale: %s beats %s for the crown",
        by_id[final.winner_id].name, by_id[final.loser_id].name,
    )

    return FinaleBracket(
        first_pair=(order[0].queen_id, order[1].queen_id),
        second_pair=(order[2].queen_id, order[3].queen_id),
        first_semifinal=first,
        second_semifinal=second,
        final=final,
    )
