from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
CAST_DATA_DIR = DATA_DIR / "casts"

# Accepted input formats (file suffix -> reader)
SUPPORTED_SUFFIXES = {".csv", ".json"}

# Canonical queen columns, in display order
QUEEN_ID_COLUMN = "queen_id"
QUEEN_NAME_COLUMN = "name"
QUEEN_IMAGE_COLUMN = "image_url"

ATTRIBUTE_COLUMNS = [
    "congeniality", "loyalty",
    "novelty", "conceptual_depth",
    "risk_tolerance", "conflict_resilience",
    "design_vision", "comedy_chops", "lip_sync_prowess",
    "runway_presence", "acting_ability", "vocal_musicality",
    "versatility", "adaptability", "star_power",
]

DEFAULT_ATTRIBUTE = 5.0
ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 10

# Header aliases that map onto canonical columns. Headers are lower-cased
# and stripped before lookup; camelCase exports are handled separately.
COLUMN_ALIASES = {
    "id": QUEEN_ID_COLUMN,
    "queen id": QUEEN_ID_COLUMN,
    "queen": QUEEN_NAME_COLUMN,
    "queen name": QUEEN_NAME_COLUMN,
    "image": QUEEN_IMAGE_COLUMN,
    "imageurl": QUEEN_IMAGE_COLUMN,
    "lip sync": "lip_sync_prowess",
    "lipsync": "lip_sync_prowess",
    "runway": "runway_presence",
    "comedy": "comedy_chops",
    "acting": "acting_ability",
    "singing": "vocal_musicality",
    "song_id": "song_id",
    "song id": "song_id",
    "album image": "album_image",
    "albumimage": "album_image",
    "preview url": "preview_url",
    "previewurl": "preview_url",
    "spotify uri": "spotify_uri",
    "spotifyuri": "spotify_uri",
}

# Song columns
SONG_ID_COLUMN = "song_id"
SONG_REQUIRED_COLUMNS = ["title", "artist"]
SONG_OPTIONAL_COLUMNS = ["genre", "album_image", "preview_url", "spotify_uri"]

# Random cast generator
SAMPLE_QUEEN_NAMES = [
    "Mystique Allure",
    "Velvet Storm",
    "Crystal Divine",
    "Sasha Glamour",
    "Bianca Fierce",
    "Trixie Sparkle",
    "Katya Wild",
    "Aquaria Flow",
    "Jinkx Magic",
    "Raja Elegance",
    "Sharon Needles",
    "Chad Michaels",
    "Raven Darkness",
    "Manila Luzon",
    "Latrice Royale",
    "Willam Belli",
]
NAME_SUFFIX_MAX = 999

SONG_GENRES = [
    "Pop", "Dance", "R&B", "Hip Hop", "Rock", "Country", "Electronic",
    "Disco", "Funk", "Soul", "Alternative", "Indie", "Classic", "Ballad",
]

SAMPLE_SONGS = [
    ("I Will Survive", "Gloria Gaynor", "Disco"),
    ("Stronger", "Britney Spears", "Pop"),
    ("Respect", "Aretha Franklin", "Soul"),
    ("Bad Romance", "Lady Gaga", "Pop"),
    ("Dancing Queen", "ABBA", "Disco"),
    ("Roar", "Katy Perry", "Pop"),
    ("Fighter", "Christina Aguilera", "Pop"),
    ("Confident", "Demi Lovato", "Pop"),
    ("Stronger (What Doesn't Kill You)", "Kelly Clarkson", "Pop"),
    ("Titanium", "David Guetta ft. Sia", "Electronic"),
    ("Firework", "Katy Perry", "Pop"),
    ("Born This Way", "Lady Gaga", "Pop"),
    ("Shake It Off", "Taylor Swift", "Pop"),
    ("Uptown Funk", "Mark Ronson ft. Bruno Mars", "Funk"),
    ("Can't Stop the Feeling", "Justin Timberlake", "Pop"),
]
DEFAULT_SAMPLE_SONG_COUNT = 10
