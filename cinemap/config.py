# Centralized configuration for the CineMap data pipeline.
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

DATA_DIR = ROOT / "data"
PUBLIC_DIR = ROOT / "public"
GEO_DIR = PUBLIC_DIR / "geo"
PUBLIC_DATA_DIR = PUBLIC_DIR / "data"

MOVIES_FILE = DATA_DIR / "movies_enriched.json"
MOVIES_GEOJSON = GEO_DIR / "movies.geojson"
PATHS_GEOJSON = GEO_DIR / "movie_paths.geojson"
OVERVIEW_GEOJSON = GEO_DIR / "overview_h3.geojson"
TILE_INDEX_FILE = GEO_DIR / "tile_index.json"
CHUNK_PATTERN = "movies_page_{}.json"
CHUNK_SIZE = 200

# Level-of-detail strategy: which share of the chunks each zoom band loads.
ZOOM_STRATEGIES = [
    {"zooms": [0, 1, 2, 3], "percentage": 0.05, "label": "overview"},
    {"zooms": [4, 5, 6], "percentage": 0.25, "label": "medium"},
    {"zooms": [7, 8, 9], "percentage": 0.5, "label": "detailed"},
    {"zooms": list(range(10, 19)), "percentage": 1.0, "label": "full"},
]
OVERVIEW_H3_RES = 3
LOW_ZOOM_MAX = 3

SEARCH_DIR = GEO_DIR / "search"
SEARCH_INDEX_FILE = SEARCH_DIR / "index.json"
SEARCH_CHUNK_SIZE = 200
FUSE_INDEX_FILE = PUBLIC_DIR / "index" / "movies_index.json"

SLUGS_FILE = "movies_slugs.json"
SLUGS_REVERSE_FILE = "movies_slugs_reverse.json"

CLICKABLE_REGIONS_FILE = GEO_DIR / "clickable-regions.geojson"
MIN_MOVIES_PER_CITY = 3

SITE_STATS_FILE = PUBLIC_DATA_DIR / "site-stats.json"

SPRITE_DIR = PUBLIC_DIR / "images" / "sprites"
SPRITE_METADATA_FILE = PUBLIC_DIR / "images" / "sprite-metadata.json"
ICON_WIDTH = 52
ICON_HEIGHT = 52
SPRITE_COLUMNS = 50
MAX_MOVIES_PER_SPRITE = 1000

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/"
DESCRIPTION_MAX_LENGTH = 200
