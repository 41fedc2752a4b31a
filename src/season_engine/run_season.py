"""Simulate a complete season from cast and song files.

Usage:
    python -m src.season_engine.run_season [cast_file] [songs_file] [regular|legacy] [seed]

With no files given, the sample cast in data/casts/ is used.

Examples:
    python -m src.season_engine.run_season
    python -m src.season_engine.run_season queens.json songs.json legacy 42
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from src.cast_pipeline.config import CAST_DATA_DIR
from src.cast_pipeline.pipeline import load_cast
from src.logging_config import setup_logging
from src.season_engine.config import DEFAULT_SEASON_FORMAT
from src.season_engine.models import SeasonResult
from src.season_engine.randomness import RandomSource
from src.season_engine.season_controller import SeasonController
from src.season_engine.season_initializer import SeasonInitializer
from src.season_engine.season_rules import PreconditionError

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m src.season_engine.run_season [cast_file] [songs_file] [regular|legacy] [seed]"


def run_season(
    cast_path: Path,
    songs_path: Path,
    season_format: str = DEFAULT_SEASON_FORMAT,
    seed: Optional[int] = None,
) -> tuple[SeasonResult, pd.DataFrame]:
    """Load a cast and play the whole season.

    Returns:
        The season result and the final track record table.

    Raises:
        PreconditionError: If the cast is too small or the format is unknown.
    """
    queens, songs = load_cast(cast_path, songs_path)

    rng = RandomSource(seed)
    state = SeasonInitializer().create_season(
        queens, songs, season_format=season_format, rng=rng, seed=seed
    )
    controller = SeasonController(state, rng=rng)
    result = controller.run_season()
    track_record = controller.get_track_record()

    winner = state.get_queen(result.winner_id)
    logger.info("Season complete after %d episodes", len(result.episodes))
    logger.info("  Winner: %s", winner.name)
    logger.info(
        "  Final four: %s",
        ", ".join(state.get_queen(qid).name for qid in result.final_four),
    )
    return result, track_record


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) == 2:
        print(USAGE)
        sys.exit(1)

    cast_file = Path(sys.argv[1]) if len(sys.argv) > 1 else CAST_DATA_DIR / "queens.csv"
    songs_file = Path(sys.argv[2]) if len(sys.argv) > 2 else CAST_DATA_DIR / "songs.csv"
    season_format = sys.argv[3] if len(sys.argv) > 3 else DEFAULT_SEASON_FORMAT
    seed = int(sys.argv[4]) if len(sys.argv) > 4 else None

    try:
        _, table = run_season(cast_file, songs_file, season_format, seed)
        with pd.option_context("display.max_columns", None, "display.width", 200):
            print(table.to_string(index=False))
    except PreconditionError as e:
        print(json.dumps(e.to_dict()))
        sys.exit(2)
    except Exception:
        logger.exception("Season simulation failed")
        sys.exit(1)
