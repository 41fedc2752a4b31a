"""Cleaning for cast and song DataFrames.

Handles the shapes cast files turn up in:
- camelCase headers from the web cast builder (``lipSyncProwess``)
- snake_case and spaced headers (``lip_sync_prowess``, ``Lip Sync Prowess``)
- missing or non-numeric attributes (default 5)
- rows without a name, which are dropped
- missing or duplicated ids, which are regenerated
"""

import logging
import re
from typing import Optional

import pandas as pd

from src.cast_pipeline.config import (
    ATTRIBUTE_COLUMNS,
    COLUMN_ALIASES,
    DEFAULT_ATTRIBUTE,
    QUEEN_ID_COLUMN,
    QUEEN_IMAGE_COLUMN,
    QUEEN_NAME_COLUMN,
    SONG_ID_COLUMN,
    SONG_OPTIONAL_COLUMNS,
    SONG_REQUIRED_COLUMNS,
)

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")
_NON_SLUG = re.compile(r"[^a-z0-9_]")


class CastCleaner:
    """Normalizes raw cast and song frames into canonical columns."""

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_header(header: str, id_column: str = QUEEN_ID_COLUMN) -> str:
        """Map a raw header onto its canonical column name.

        Examples:
            "lipSyncProwess"    -> "lip_sync_prowess"
            "Conceptual Depth"  -> "conceptual_depth"
            "imageUrl"          -> "image_url"
            "id"                -> ``id_column``
        """
        raw = str(header).strip()
        if raw.lower() == "id":
            return id_column
        if raw.lower() in COLUMN_ALIASES:
            return COLUMN_ALIASES[raw.lower()]

        snake = _CAMEL_BOUNDARY.sub(r"_\1", raw).lower()
        snake = _SEPARATORS.sub("_", snake)
        snake = re.sub(r"_+", "_", snake).strip("_")
        return COLUMN_ALIASES.get(snake, snake)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    @staticmethod
    def coerce_attribute(value) -> float:
        """Parse an attribute value, falling back to the default of 5.

        Examples:
            "7"   -> 7.0
            8     -> 8.0
            ""    -> 5.0
            "n/a" -> 5.0
        """
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return DEFAULT_ATTRIBUTE
        try:
            return float(str(value).strip())
        except ValueError:
            return DEFAULT_ATTRIBUTE

    @staticmethod
    def clean_text(value) -> Optional[str]:
        """Strip quotes and whitespace; None for missing or blank values."""
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return None
        text = str(value).strip().strip('"').strip()
        return text or None

    @staticmethod
    def slugify(text: str) -> str:
        """``"Velvet Storm 12"`` -> ``"velvet_storm_12"``."""
        slug = _SEPARATORS.sub("_", text.lower().replace("'", ""))
        slug = _NON_SLUG.sub("", slug)
        return slug or "unknown"

    # ------------------------------------------------------------------
    # Ids
    # ------------------------------------------------------------------
    def assign_ids(self, df: pd.DataFrame, id_column: str, source_column: str) -> pd.DataFrame:
        """Fill missing ids from a slug of ``source_column`` and
        disambiguate collisions with a numeric suffix."""
        out = df.copy()
        if id_column not in out.columns:
            out[id_column] = None

        ids = out[id_column].apply(self.clean_text).astype(object)
        slugs = out[source_column].apply(self.slugify)
        out[id_column] = ids.where(ids.notna(), slugs).astype(str)

        dupes = out[id_column].duplicated(keep=False)
        if dupes.any():
            dupe_ids = out.loc[dupes, id_column].unique().tolist()
            logger.warning("Duplicate ids detected, adding suffixes: %s", dupe_ids)
            for dupe in dupe_ids:
                mask = out[id_column] == dupe
                out.loc[mask, id_column] = [
                    f"{dupe}_{i}" for i in range(1, mask.sum() + 1)
                ]
        return out

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def clean_queens(self, df: pd.DataFrame) -> pd.DataFrame:
        """Canonical cast frame: id, name, image_url and every attribute.

        Raises:
            ValueError: If no row has a name.
        """
        out = df.rename(columns=lambda c: self.normalize_header(c, QUEEN_ID_COLUMN))
        out = out.loc[:, ~out.columns.duplicated()].copy()

        if QUEEN_NAME_COLUMN not in out.columns:
            raise ValueError("Cast file has no name column")

        out[QUEEN_NAME_COLUMN] = out[QUEEN_NAME_COLUMN].apply(self.clean_text)
        nameless = out[QUEEN_NAME_COLUMN].isna()
        if nameless.any():
            logger.warning("Dropping %d cast rows with no name", nameless.sum())
            out = out[~nameless]
        if out.empty:
            raise ValueError("Cast file has no usable rows")
        out = out.reset_index(drop=True)

        for col in ATTRIBUTE_COLUMNS:
            if col in out.columns:
                out[col] = out[col].apply(self.coerce_attribute)
            else:
                out[col] = DEFAULT_ATTRIBUTE

        if QUEEN_IMAGE_COLUMN in out.columns:
            out[QUEEN_IMAGE_COLUMN] = out[QUEEN_IMAGE_COLUMN].apply(self.clean_text)
        else:
            out[QUEEN_IMAGE_COLUMN] = None

        out = self.assign_ids(out, QUEEN_ID_COLUMN, QUEEN_NAME_COLUMN)
        columns = [QUEEN_ID_COLUMN, QUEEN_NAME_COLUMN] + ATTRIBUTE_COLUMNS + [QUEEN_IMAGE_COLUMN]
        logger.info("Cleaned cast: %d queens", len(out))
        return out[columns]

    def clean_songs(self, df: pd.DataFrame) -> pd.DataFrame:
        """Canonical song frame: id, title, artist and optional metadata.

        Raises:
            ValueError: If no row has both a title and an artist.
        """
        out = df.rename(columns=lambda c: self.normalize_header(c, SONG_ID_COLUMN))
        out = out.loc[:, ~out.columns.duplicated()].copy()

        missing_cols = [c for c in SONG_REQUIRED_COLUMNS if c not in out.columns]
        if missing_cols:
            raise ValueError(f"Song file missing required columns: {missing_cols}")

        for col in SONG_REQUIRED_COLUMNS + SONG_OPTIONAL_COLUMNS:
            if col in out.columns:
                out[col] = out[col].apply(self.clean_text)
            else:
                out[col] = None

        incomplete = out["title"].isna() | out["artist"].isna()
        if incomplete.any():
            logger.warning("Dropping %d song rows without title or artist", incomplete.sum())
            out = out[~incomplete]
        if out.empty:
            raise ValueError("Song file has no usable rows")
        out = out.reset_index(drop=True)

        out["genre"] = out["genre"].fillna("")
        out["_slug_source"] = out["title"] + " " + out["artist"]
        out = self.assign_ids(out, SONG_ID_COLUMN, "_slug_source")

        columns = [SONG_ID_COLUMN] + SONG_REQUIRED_COLUMNS + SONG_OPTIONAL_COLUMNS
        logger.info("Cleaned songs: %d songs", len(out))
        return out[columns]

    def clean_all(self, raw: dict[str, pd.DataFrame]) -> dict[str, pd.DataFrame]:
        """Clean the output of :meth:`CastIngester.read_all`."""
        return {
            "queens": self.clean_queens(raw["queens"]),
            "songs": self.clean_songs(raw["songs"]),
        }
