"""Tests for the cast data cleaning module.

Fixture ``cleaner`` is provided by conftest.py.
"""

import pandas as pd
import pytest

from src.cast_pipeline.config import ATTRIBUTE_COLUMNS, DEFAULT_ATTRIBUTE


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

class TestNormalizeHeader:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("lipSyncProwess", "lip_sync_prowess"),
            ("lip_sync_prowess", "lip_sync_prowess"),
            ("Lip Sync Prowess", "lip_sync_prowess"),
            ("Conceptual Depth", "conceptual_depth"),
            ("starPower", "star_power"),
            ("imageUrl", "image_url"),
            ("  name ", "name"),
            ("Queen Name", "name"),
            ("Runway", "runway_presence"),
        ],
    )
    def test_cast_headers(self, cleaner, raw, expected):
        assert cleaner.normalize_header(raw) == expected

    def test_id_maps_to_requested_column(self, cleaner):
        assert cleaner.normalize_header("id") == "queen_id"
        assert cleaner.normalize_header("ID", "song_id") == "song_id"

    def test_song_headers(self, cleaner):
        assert cleaner.normalize_header("albumImage") == "album_image"
        assert cleaner.normalize_header("spotifyUri") == "spotify_uri"


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

class TestCoerceAttribute:
    def test_numeric_string(self, cleaner):
        assert cleaner.coerce_attribute("7") == 7.0

    def test_int(self, cleaner):
        assert cleaner.coerce_attribute(8) == 8.0

    def test_out_of_range_kept(self, cleaner):
        assert cleaner.coerce_attribute("12") == 12.0

    @pytest.mark.parametrize("value", [None, float("nan"), "", "n/a"])
    def test_missing_defaults(self, cleaner, value):
        assert cleaner.coerce_attribute(value) == DEFAULT_ATTRIBUTE


class TestCleanText:
    def test_strips_quotes(self, cleaner):
        assert cleaner.clean_text(' "Velvet Storm" ') == "Velvet Storm"

    def test_blank_is_none(self, cleaner):
        assert cleaner.clean_text("   ") is None

    def test_nan_is_none(self, cleaner):
        assert cleaner.clean_text(float("nan")) is None


class TestSlugify:
    def test_spaces(self, cleaner):
        assert cleaner.slugify("Velvet Storm 12") == "velvet_storm_12"

    def test_apostrophes_and_symbols(self, cleaner):
        assert cleaner.slugify("Can't Stop! The Feeling") == "cant_stop_the_feeling"

    def test_empty(self, cleaner):
        assert cleaner.slugify("!!!") == "unknown"


# ---------------------------------------------------------------------------
# Ids
# ---------------------------------------------------------------------------

class TestAssignIds:
    def test_missing_column_filled_from_slug(self, cleaner):
        df = pd.DataFrame({"name": ["Velvet Storm", "Katya Wild"]})
        out = cleaner.assign_ids(df, "queen_id", "name")
        assert list(out["queen_id"]) == ["velvet_storm", "katya_wild"]

    def test_partial_ids(self, cleaner):
        df = pd.DataFrame({"queen_id": ["q1", None], "name": ["A", "Bee Bee"]})
        out = cleaner.assign_ids(df, "queen_id", "name")
        assert list(out["queen_id"]) == ["q1", "bee_bee"]

    def test_numeric_ids_become_strings(self, cleaner):
        df = pd.DataFrame({"queen_id": [1, 2], "name": ["A", "B"]})
        out = cleaner.assign_ids(df, "queen_id", "name")
        assert list(out["queen_id"]) == ["1", "2"]

    def test_duplicates_suffixed(self, cleaner, caplog):
        df = pd.DataFrame({"queen_id": ["a", "a", "b"], "name": ["A", "A2", "B"]})
        with caplog.at_level("WARNING"):
            out = cleaner.assign_ids(df, "queen_id", "name")
        assert list(out["queen_id"]) == ["a_1", "a_2", "b"]
        assert "Duplicate ids" in caplog.text

    def test_input_not_mutated(self, cleaner):
        df = pd.DataFrame({"name": ["A"]})
        cleaner.assign_ids(df, "queen_id", "name")
        assert "queen_id" not in df.columns


# ---------------------------------------------------------------------------
# Queens
# ---------------------------------------------------------------------------

class TestCleanQueens:
    def _make_raw(self):
        return pd.DataFrame({
            "id": ["q1", "q2", None],
            "name": ["Velvet Storm", "Crystal Divine", "Katya Wild"],
            "lipSyncProwess": [8, None, "7"],
            "Comedy Chops": ["9", "x", 3],
            "imageUrl": ["http://img/1.png", None, ""],
        })

    def test_canonical_columns(self, cleaner):
        out = cleaner.clean_queens(self._make_raw())
        assert list(out.columns) == ["queen_id", "name"] + ATTRIBUTE_COLUMNS + ["image_url"]

    def test_attributes_coerced(self, cleaner):
        out = cleaner.clean_queens(self._make_raw())
        assert list(out["lip_sync_prowess"]) == [8.0, DEFAULT_ATTRIBUTE, 7.0]
        assert list(out["comedy_chops"]) == [9.0, DEFAULT_ATTRIBUTE, 3.0]

    def test_missing_attributes_default(self, cleaner):
        out = cleaner.clean_queens(self._make_raw())
        assert (out["star_power"] == DEFAULT_ATTRIBUTE).all()

    def test_ids_and_images(self, cleaner):
        out = cleaner.clean_queens(self._make_raw())
        assert list(out["queen_id"]) == ["q1", "q2", "katya_wild"]
        assert out.loc[0, "image_url"] == "http://img/1.png"
        assert pd.isna(out.loc[2, "image_url"])

    def test_nameless_rows_dropped(self, cleaner):
        raw = pd.DataFrame({"name": ["A", None, "  ", "B"]})
        out = cleaner.clean_queens(raw)
        assert list(out["name"]) == ["A", "B"]
        assert list(out.index) == [0, 1]

    def test_duplicate_names_get_unique_ids(self, cleaner):
        out = cleaner.clean_queens(pd.DataFrame({"name": ["Twin", "Twin"]}))
        assert out["queen_id"].is_unique

    def test_no_name_column(self, cleaner):
        with pytest.raises(ValueError, match="no name column"):
            cleaner.clean_queens(pd.DataFrame({"id": ["q1"]}))

    def test_no_usable_rows(self, cleaner):
        with pytest.raises(ValueError, match="no usable rows"):
            cleaner.clean_queens(pd.DataFrame({"name": [None, ""]}))


# ---------------------------------------------------------------------------
# Songs
# ---------------------------------------------------------------------------

class TestCleanSongs:
    def test_ids_from_title_and_artist(self, cleaner):
        raw = pd.DataFrame({"title": ["Roar"], "artist": ["Katy Perry"]})
        out = cleaner.clean_songs(raw)
        assert out.loc[0, "song_id"] == "roar_katy_perry"
        assert out.loc[0, "genre"] == ""
        assert pd.isna(out.loc[0, "preview_url"])

    def test_keeps_given_ids(self, cleaner):
        raw = pd.DataFrame({"id": ["s9"], "title": ["Roar"], "artist": ["Katy Perry"]})
        assert cleaner.clean_songs(raw).loc[0, "song_id"] == "s9"

    def test_camel_case_metadata(self, cleaner):
        raw = pd.DataFrame({
            "title": ["Roar"], "artist": ["Katy Perry"],
            "albumImage": ["a.png"], "spotifyUri": ["spotify:track:1"],
        })
        out = cleaner.clean_songs(raw)
        assert out.loc[0, "album_image"] == "a.png"
        assert out.loc[0, "spotify_uri"] == "spotify:track:1"

    def test_incomplete_rows_dropped(self, cleaner):
        raw = pd.DataFrame({
            "title": ["Roar", None, "Respect"],
            "artist": ["Katy Perry", "ABBA", ""],
        })
        out = cleaner.clean_songs(raw)
        assert list(out["title"]) == ["Roar"]

    def test_missing_required_column(self, cleaner):
        with pytest.raises(ValueError, match="artist"):
            cleaner.clean_songs(pd.DataFrame({"title": ["Roar"]}))


class TestCleanAll:
    def test_returns_both(self, cleaner):
        raw = {
            "queens": pd.DataFrame({"name": ["A"]}),
            "songs": pd.DataFrame({"title": ["Roar"], "artist": ["Katy Perry"]}),
        }
        out = cleaner.clean_all(raw)
        assert set(out) == {"queens", "songs"}
