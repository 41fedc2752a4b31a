"""Non-repeating challenge and song selection.

Both selectors record their pick in the ``used`` set they are handed (a
field of :class:`SeasonState`) and clear it once every option has been used.
"""

import logging
from typing import List, Sequence, Set

from src.season_engine.config import CHALLENGES, GIRL_GROUPS, GIRL_GROUPS_MIN_QUEENS
from src.season_engine.models import Song
from src.season_engine.randomness import RandomSource

logger = logging.getLogger(__name__)


def girl_groups_allowed(remaining_count: int) -> bool:
    """Girl Groups needs two even teams of at least three."""
    return remaining_count >= GIRL_GROUPS_MIN_QUEENS and remaining_count % 2 == 0


def eligible_challenges(remaining_count: int) -> List[str]:
    allow_groups = girl_groups_allowed(remaining_count)
    return [c for c in CHALLENGES if c != GIRL_GROUPS or allow_groups]


def select_challenge(used: Set[str], remaining_count: int, rng: RandomSource) -> str:
    """Pick a challenge not used since the last reset."""
    if len(used) >= len(CHALLENGES):
        logger.debug("All %d challenges used, resetting", len(CHALLENGES))
        used.clear()

    eligible = eligible_challenges(remaining_count)
    pool = [c for c in eligible if c not in used]
    if not pool:
        # every eligible category is used while an ineligible one is not
        used.clear()
        pool = eligible

    challenge = rng.choice(pool)
    used.add(challenge)
    return challenge


def select_song(used: Set[str], songs: Sequence[Song], rng: RandomSource) -> Song:
    """Pick a song not used since the last reset."""
    if not songs:
        raise ValueError("No songs to choose from")

    if all(song.song_id in used for song in songs):
        logger.debug("All %d songs used, resetting", len(songs))
        used.clear()

    pool = [song for song in songs if song.song_id not in used]
    song = rng.choice(pool)
    used.add(song.song_id)
    return song


def select_songs(used: Set[str], songs: Sequence[Song], count: int, rng: RandomSource) -> List[Song]:
    """Pick ``count`` songs, distinct from each other while the list allows it."""
    picked: List[Song] = []
    for _ in range(count):
        if all(song.song_id in used for song in songs):
            used.clear()
            used.update(song.song_id for song in picked)
        picked.append(select_song(used, songs, rng))
    return picked
