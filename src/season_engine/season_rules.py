"""Season rule enforcement and step preconditions."""

from typing import Dict, Optional, Sequence, Tuple

from src.season_engine.config import (
    EPISODE_MIN_QUEENS,
    EPISODE_MIN_SONGS,
    FINALE_SIZE,
    SEASON_FORMATS,
    SEASON_MIN_QUEENS,
    SEASON_MIN_SONGS,
)


class SimulationError(Exception):
    """Base class for season engine errors."""


class PreconditionError(SimulationError):
    """Raised when a step is requested with inputs it cannot run on.

    Raised before any state is touched.
    """

    def to_dict(self) -> Dict[str, str]:
        return {"status": "precondition_failed", "error": str(self)}


class InvariantViolation(SimulationError):
    """Raised when the engine reaches a state that should be impossible."""


class SeasonRules:
    """Validates that a season step may run.

    Each check returns ``(is_valid, error_message)``; ``(True, None)`` if valid.
    """

    def validate_format(self, season_format: str) -> Tuple[bool, Optional[str]]:
        if season_format not in SEASON_FORMATS:
            return False, (
                f"Invalid season format '{season_format}'. "
                f"Must be one of: {', '.join(SEASON_FORMATS)}"
            )
        return True, None

    def validate_cast(
        self,
        queen_ids: Sequence[str],
        song_count: int,
        min_queens: int,
        min_songs: int,
    ) -> Tuple[bool, Optional[str]]:
        if len(queen_ids) < min_queens:
            return False, f"Need at least {min_queens} queens (got {len(queen_ids)})"

        if song_count < min_songs:
            return False, f"Need at least {min_songs} songs (got {song_count})"

        if len(set(queen_ids)) != len(queen_ids):
            seen, dupes = set(), set()
            for qid in queen_ids:
                if qid in seen:
                    dupes.add(qid)
                seen.add(qid)
            return False, f"Duplicate queen ids: {sorted(dupes)}"

        return True, None

    def validate_episode(
        self, queen_ids: Sequence[str], song_count: int
    ) -> Tuple[bool, Optional[str]]:
        """Single-episode tier: at least 4 queens and 1 song."""
        return self.validate_cast(queen_ids, song_count, EPISODE_MIN_QUEENS, EPISODE_MIN_SONGS)

    def validate_season(
        self, queen_ids: Sequence[str], song_count: int
    ) -> Tuple[bool, Optional[str]]:
        """Full-season tier: at least 6 queens and 5 songs."""
        return self.validate_cast(queen_ids, song_count, SEASON_MIN_QUEENS, SEASON_MIN_SONGS)

    def validate_finale(
        self, queen_ids: Sequence[str], song_count: int
    ) -> Tuple[bool, Optional[str]]:
        if len(queen_ids) != FINALE_SIZE:
            return False, (
                f"Finale needs exactly {FINALE_SIZE} queens (got {len(queen_ids)})"
            )
        if song_count < EPISODE_MIN_SONGS:
            return False, f"Need at least {EPISODE_MIN_SONGS} songs (got {song_count})"
        return True, None
