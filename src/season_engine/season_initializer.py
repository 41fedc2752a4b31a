"""Season initialization - creates new season instances from a cast."""

import logging
from typing import Optional, Sequence

from src.season_engine.config import DEFAULT_SEASON_FORMAT
from src.season_engine.models import Queen, Song
from src.season_engine.randomness import RandomSource
from src.season_engine.relationships import RelationshipGraph
from src.season_engine.season_rules import PreconditionError, SeasonRules
from src.season_engine.season_state import SeasonConfig, SeasonState

logger = logging.getLogger(__name__)


class SeasonInitializer:
    """Handles creation of new season instances."""

    VALID_TIERS = {"episode", "season"}

    def __init__(self, rules: Optional[SeasonRules] = None):
        self.rules = rules or SeasonRules()

    def create_season(
        self,
        queens: Sequence[Queen],
        songs: Sequence[Song],
        season_format: str = DEFAULT_SEASON_FORMAT,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        narrative: bool = True,
        tier: str = "season",
        relationships: Optional[RelationshipGraph] = None,
    ) -> SeasonState:
        """
        Create a new season instance.

        Args:
            queens: The cast, ids unique
            songs: Lip sync songs
            season_format: "regular" or "legacy"
            rng: Random source used to seed relationships (default: seeded from ``seed``)
            seed: Seed recorded in the config
            narrative: Whether relationships drift between episodes
            tier: "season" (6 queens / 5 songs) or "episode" (4 queens / 1 song)
            relationships: Starting graph; seeded from the cast when omitted

        Returns:
            SeasonState ready for episode 1

        Raises:
            PreconditionError: If the cast, songs or format fail validation
        """
        if tier not in self.VALID_TIERS:
            raise ValueError(
                f"Invalid tier '{tier}'. Must be one of: {sorted(self.VALID_TIERS)}"
            )

        queen_ids = [q.queen_id for q in queens]
        for is_valid, error in (
            self.rules.validate_format(season_format),
            self.rules.validate_season(queen_ids, len(songs))
            if tier == "season"
            else self.rules.validate_episode(queen_ids, len(songs)),
        ):
            if not is_valid:
                logger.warning("Season rejected: %s", error)
                raise PreconditionError(error)

        config = SeasonConfig(season_format=season_format, narrative=narrative, seed=seed)
        season_state = SeasonState.create_new(
            queens=queens,
            songs=songs,
            rng=rng or RandomSource(seed),
            config=config,
            relationships=relationships,
        )

        logger.info(
            "Created season %s: %d queens, %d songs, %s format",
            season_state.season_id,
            len(queens),
            len(songs),
            season_format,
        )

        return season_state

    @staticmethod
    def get_default_season_format() -> str:
        """Get default season format."""
        return DEFAULT_SEASON_FORMAT
