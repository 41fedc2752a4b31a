"""Turn cleaned cast and song frames into engine records."""

import logging
import math
from typing import List, Sequence

import pandas as pd

from src.cast_pipeline.config import (
    ATTRIBUTE_COLUMNS,
    DEFAULT_ATTRIBUTE,
    QUEEN_ID_COLUMN,
    QUEEN_IMAGE_COLUMN,
    QUEEN_NAME_COLUMN,
    SONG_ID_COLUMN,
    SONG_OPTIONAL_COLUMNS,
)
from src.season_engine.models import Queen, Song

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = {"queens", "songs"}


class CastTransformer:
    """Builds :class:`Queen` and :class:`Song` records from cleaned frames."""

    @staticmethod
    def _optional(val):
        """None for NaN/None/pd.NA, else the value."""
        if val is None or val is pd.NA:
            return None
        if isinstance(val, float) and math.isnan(val):
            return None
        return val

    def to_queens(self, df: pd.DataFrame) -> List[Queen]:
        queens = []
        for _, row in df.iterrows():
            attributes = {
                col: float(row[col]) if self._optional(row.get(col)) is not None else DEFAULT_ATTRIBUTE
                for col in ATTRIBUTE_COLUMNS
            }
            queens.append(Queen(
                queen_id=str(row[QUEEN_ID_COLUMN]),
                name=str(row[QUEEN_NAME_COLUMN]),
                image_url=self._optional(row.get(QUEEN_IMAGE_COLUMN)),
                **attributes,
            ))
        return queens

    def to_songs(self, df: pd.DataFrame) -> List[Song]:
        songs = []
        for _, row in df.iterrows():
            optional = {col: self._optional(row.get(col)) for col in SONG_OPTIONAL_COLUMNS}
            optional["genre"] = optional["genre"] or ""
            songs.append(Song(
                song_id=str(row[SONG_ID_COLUMN]),
                title=str(row["title"]),
                artist=str(row["artist"]),
                **optional,
            ))
        return songs

    @staticmethod
    def queens_to_frame(queens: Sequence[Queen]) -> pd.DataFrame:
        """Inverse of :meth:`to_queens`, in canonical column order."""
        columns = [QUEEN_ID_COLUMN, QUEEN_NAME_COLUMN] + ATTRIBUTE_COLUMNS + [QUEEN_IMAGE_COLUMN]
        rows = []
        for queen in queens:
            row = queen.to_dict()
            row.setdefault(QUEEN_IMAGE_COLUMN, None)
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)

    def transform(self, cleaned: dict[str, pd.DataFrame]) -> dict[str, list]:
        """Run the conversion on the output of :meth:`CastCleaner.clean_all`.

        Returns:
            dict with keys 'queens' (list of Queen) and 'songs' (list of Song).

        Raises:
            ValueError: if *cleaned* is missing any required keys.
        """
        missing = _REQUIRED_KEYS - cleaned.keys()
        if missing:
            raise ValueError(f"Missing required DataFrames: {missing}")

        queens = self.to_queens(cleaned["queens"])
        songs = self.to_songs(cleaned["songs"])
        logger.info("Transformation complete: %d queens, %d songs", len(queens), len(songs))
        return {"queens": queens, "songs": songs}
