"""Run the cast pipeline end to end: ingest, clean, transform."""

import logging
from pathlib import Path
from typing import List, Tuple

from src.cast_pipeline.cleaning import CastCleaner
from src.cast_pipeline.ingestion import CastIngester
from src.cast_pipeline.transformation import CastTransformer
from src.season_engine.models import Queen, Song

logger = logging.getLogger(__name__)


def load_cast(cast_path: Path, songs_path: Path) -> Tuple[List[Queen], List[Song]]:
    """Read a cast file and a song file into engine records.

    Raises:
        CastIngestionError: If either file is missing or cannot be read.
        ValueError: If either file has no usable rows.
    """
    logger.info("Step 1/3: Ingesting cast files...")
    raw = CastIngester().read_all(cast_path, songs_path)

    logger.info("Step 2/3: Cleaning cast data...")
    cleaned = CastCleaner().clean_all(raw)

    logger.info("Step 3/3: Building queens and songs...")
    records = CastTransformer().transform(cleaned)

    logger.info(
        "Cast loaded: %d queens, %d songs",
        len(records["queens"]), len(records["songs"]),
    )
    return records["queens"], records["songs"]
