"""Configuration constants for the Railway History Viewer.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    YearConfig: Supported historical year range for the slider
    MapConfig: Default map view parameters
    DataConfig: Data file locations and loader settings
    NotesConfig: Markers embedded in free-text station notes
    CrossReferenceConfig: URL templates for external station catalogues
    MarkerConfig: Map marker sizes
    StyleConfig: Colors per entity state
    ChartConfig: Timeline chart dimensions
"""

from pathlib import Path

# Package root directory (where railhistory/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of railhistory/)
PROJECT_ROOT = PACKAGE_DIR.parent


class AppConfig:
    """UI application settings."""

    TITLE = "Eurasian Railway History Database 1832-1989"
    SUBTITLE = "Internal tool for database construction"
    ICON = "🚂"
    LAYOUT = "wide"


class YearConfig:
    """Historical range offered by the year slider.

    The resolver itself accepts any integer year; only the UI clamps.
    """

    MIN_YEAR = 1832
    MAX_YEAR = 1989
    DEFAULT_YEAR = MAX_YEAR

    assert MIN_YEAR < MAX_YEAR
    assert MIN_YEAR <= DEFAULT_YEAR <= MAX_YEAR


class MapConfig:
    """Default map view parameters."""

    # Initial center: roughly the middle of the demo network (Urals)
    START_CENTER_LAT = 55.0
    START_CENTER_LON = 70.0
    DEFAULT_ZOOM = 3

    # Flat 2D map only
    DEFAULT_PITCH = 0.0
    DEFAULT_BEARING = 0.0

    # Carto basemap (no API key needed)
    MAP_STYLE = "light"
    MAP_PROVIDER = "carto"


class DataConfig:
    """Data file locations and loader settings."""

    DATA_DIR = PACKAGE_DIR / "data"
    DEMO_DATA_PATH = DATA_DIR / "demo_data.json"

    # Snapshot JSON format version written by DatabaseSnapshot.to_dict()
    SNAPSHOT_VERSION = "1.0"

    # Timeout for fetching a snapshot over HTTP (seconds)
    HTTP_TIMEOUT_S = 60


class NotesConfig:
    """Markers embedded in free-text station notes.

    Approximate stations carry "<radius N>" at the start of their notes,
    where N is the uncertainty radius in kilometers.
    """

    RADIUS_PATTERN = r"<radius\s+(\d+(?:\.\d+)?)>"
    RADIUS_UNIT_M = 1000.0  # Radius values are kilometers


class CrossReferenceConfig:
    """URL templates for external station catalogues.

    Keys are CrossReferences field names. Fields without a template
    (esr_code, railwayz_id) are shown as plain identifiers.
    """

    URL_TEMPLATES = {
        "wikidata_id": "https://www.wikidata.org/wiki/{value}",
        "wikipedia_ru": "https://ru.wikipedia.org/wiki/{value}",
        "osm_node_id": "https://www.openstreetmap.org/node/{value}",
        "osm_way_id": "https://www.openstreetmap.org/way/{value}",
        "osm_relation_id": "https://www.openstreetmap.org/relation/{value}",
        "parovoz_url": "{value}",
    }

    LABELS = {
        "esr_code": "ESR code",
        "osm_node_id": "OSM node",
        "osm_way_id": "OSM way",
        "osm_relation_id": "OSM relation",
        "wikidata_id": "Wikidata",
        "wikipedia_ru": "Wikipedia (ru)",
        "parovoz_url": "parovoz.com",
        "railwayz_id": "railwayz.info",
    }
    assert set(URL_TEMPLATES.keys()) <= set(LABELS.keys())


class MarkerConfig:
    """Map marker sizes."""

    STATION_RADIUS_PX = 5
    STATION_RADIUS_MIN_PX = 3
    SEGMENT_WIDTH_PX = 3
    SEGMENT_WIDTH_HIGHLIGHT_PX = 6

    # Approximate-location circles
    UNCERTAINTY_FILL_ALPHA = 60
    UNCERTAINTY_LINE_ALPHA = 220

    # Picking tolerance for clicks on thin lines
    PICKING_RADIUS_PX = 6


class StyleConfig:
    """Visual colors per entity state (Tailwind CSS palette)."""

    # Keys match EntityState values
    STATE_COLORS = {
        "existing": "#000000",  # black
        "new": "#16A34A",  # green-600
        "electrified": "#EA580C",  # orange-600
        "gauge_change": "#9333EA",  # purple-600
        "closed": "#DC2626",  # red-600
    }

    STATE_LABELS = {
        "existing": "Existing segments",
        "new": "Newly constructed",
        "electrified": "Electrified",
        "gauge_change": "Gauge change",
        "closed": "Closed",
    }
    assert set(STATE_LABELS.keys()) == set(STATE_COLORS.keys())

    # Approximate ("mock") station markers
    APPROXIMATE_FILL_COLOR = "#FEF08A"  # yellow-200
    APPROXIMATE_BORDER_COLOR = "#EAB308"  # yellow-500

    SELECTED_COLOR = "#2563EB"  # blue-600

    @staticmethod
    def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
        """Convert "#RRGGBB" to a pydeck [R, G, B, A] list (0-255)."""
        value = hex_color.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected #RRGGBB color, got {hex_color!r}")
        return [int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16), alpha]


class ChartConfig:
    """Timeline chart rendering dimensions."""

    TIMELINE_HEIGHT = 260
    MAP_HEIGHT = 600

    STATION_SERIES_COLOR = "#334155"  # slate-700
    SEGMENT_SERIES_COLOR = "#0EA5E9"  # sky-500
    CURRENT_YEAR_COLOR = "#DC2626"  # red-600
