"""Configuration for map categories and application settings."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Layer category shown on the map."""

    CASTLE = "castle"
    CITY = "city"
    TOWN = "town"
    RUIN = "ruin"
    LANDMARK = "landmark"
    BOUNDARY = "boundary"


@dataclass(frozen=True)
class CategoryConfig:
    """Display and loading configuration for one category."""

    key: Category
    display_name: str
    icon_file: str | None
    default_visible: bool

    def icon_url(self, icon_base_url: str) -> str | None:
        """Get the marker icon URL for this category.

        Boundary layers draw polygons and have no icon.
        """
        if self.icon_file is None:
            return None
        return f"{icon_base_url.rstrip('/')}/{self.icon_file}"


# Ordered: point categories load in this order, boundaries load last
CATEGORIES: dict[Category, CategoryConfig] = {
    Category.CASTLE: CategoryConfig(
        key=Category.CASTLE, display_name="Castles", icon_file="castle.svg", default_visible=False
    ),
    Category.CITY: CategoryConfig(
        key=Category.CITY, display_name="Cities", icon_file="city.svg", default_visible=True
    ),
    Category.TOWN: CategoryConfig(
        key=Category.TOWN, display_name="Towns", icon_file="village.svg", default_visible=True
    ),
    Category.RUIN: CategoryConfig(
        key=Category.RUIN, display_name="Ruins", icon_file="ruin.svg", default_visible=False
    ),
    Category.LANDMARK: CategoryConfig(
        key=Category.LANDMARK, display_name="Landmarks", icon_file="misc.svg", default_visible=False
    ),
    Category.BOUNDARY: CategoryConfig(
        key=Category.BOUNDARY, display_name="Kingdoms", icon_file=None, default_visible=True
    ),
}

POINT_CATEGORIES: tuple[Category, ...] = tuple(c for c in CATEGORIES if c is not Category.BOUNDARY)

# Corpus type tag applied to boundary-derived entries
KINGDOM_TYPE = "Kingdom"

# Marker icons
ICON_BASE_URL = "https://cdn.patricktriest.com/icons/atlas_of_thrones/"
ICON_SIZE = (24, 56)  # width, height in pixels

# Data API settings
API_BASE_URL = "http://localhost:5000"
REQUEST_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
RETRY_DELAY = 1  # seconds

# Map settings
TILE_URL = (
    "https://cartocdn-ashbu.global.ssl.fastly.net/ramirocartodb/api/v1/map/named/"
    "tpl_756aec63_3adb_48b6_9d14_331c6cbc47cf/all/{z}/{x}/{y}.png"
)
DEFAULT_MAP_CENTER = [5.0, 20.0]
DEFAULT_MAP_ZOOM = 4
MIN_MAP_ZOOM = 4
MAX_MAP_ZOOM = 10
MAP_MAX_BOUNDS = [[50.0, -30.0], [-45.0, 100.0]]

# Highlight and info panel
HIGHLIGHT_STYLE = {"color": "red"}
INFO_PANEL_MIN_WIDTH = 600  # logical pixels; panel auto-reveals only above this
# Grouping separator of the display locale (en-US by default)
THOUSANDS_SEPARATOR = ","
TOGGLE_ACTIVE_CLASS = "toggle-active"
