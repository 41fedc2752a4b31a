"""Random queens and sample songs for quick casts."""

import logging
from typing import List, Optional

from src.cast_pipeline.cleaning import CastCleaner
from src.cast_pipeline.config import (
    ATTRIBUTE_COLUMNS,
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    DEFAULT_SAMPLE_SONG_COUNT,
    NAME_SUFFIX_MAX,
    SAMPLE_QUEEN_NAMES,
    SAMPLE_SONGS,
)
from src.season_engine.models import Queen, Song
from src.season_engine.randomness import RandomSource

logger = logging.getLogger(__name__)


def random_attribute(rng: RandomSource) -> int:
    """Integer in [ATTRIBUTE_MIN, ATTRIBUTE_MAX]."""
    return ATTRIBUTE_MIN + rng.index(ATTRIBUTE_MAX - ATTRIBUTE_MIN + 1)


def generate_random_queen(rng: RandomSource, queen_id: Optional[str] = None) -> Queen:
    """A queen with a sample name plus a number, and integer attributes 1-10."""
    name = f"{rng.choice(SAMPLE_QUEEN_NAMES)} {rng.index(NAME_SUFFIX_MAX) + 1}"
    attributes = {col: float(random_attribute(rng)) for col in ATTRIBUTE_COLUMNS}
    return Queen(
        queen_id=queen_id or CastCleaner.slugify(name),
        name=name,
        **attributes,
    )


def generate_random_cast(count: int, rng: RandomSource) -> List[Queen]:
    """``count`` random queens with unique ids ``queen_1`` .. ``queen_N``."""
    if count < 1:
        raise ValueError(f"Cast size must be positive, got {count}")
    cast = [generate_random_queen(rng, queen_id=f"queen_{i}") for i in range(1, count + 1)]
    logger.info("Generated random cast of %d queens", len(cast))
    return cast


def generate_sample_songs(count: int = DEFAULT_SAMPLE_SONG_COUNT) -> List[Song]:
    """The first ``count`` songs of the built-in sample list."""
    if not 1 <= count <= len(SAMPLE_SONGS):
        raise ValueError(f"Sample song count must be between 1 and {len(SAMPLE_SONGS)}")
    return [
        Song(song_id=f"song_{i}", title=title, artist=artist, genre=genre)
        for i, (title, artist, genre) in enumerate(SAMPLE_SONGS[:count], start=1)
    ]
