"""Protocols for the collaborators the atlas core talks to.

The core never touches a rendering surface, a network client or a widget
directly; it only calls these interfaces. ``atlas.headless`` and ``atlas.gui``
provide the implementations.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Sequence

from atlas.core.config import Category
from atlas.models.details import EntityDetails
from atlas.models.feature import LocationFeature, RegionFeature

if TYPE_CHECKING:
    from atlas.core.context import AtlasContext


@dataclass(frozen=True)
class MarkerSpec:
    """How a point feature is drawn: icon, hover title and popup text."""

    icon_url: str | None
    icon_size: tuple[int, int]
    title: str
    popup: str


class DataApi(Protocol):
    """Asynchronous data API. Every method may raise DataFetchError."""

    async def get_locations(self, category: Category) -> list[dict]:
        """Get the GeoJSON features for a point category."""
        ...

    async def get_political_boundaries(self) -> list[dict]:
        """Get the GeoJSON features of all kingdom boundaries."""
        ...

    async def get_region_size(self, region_id: str) -> float:
        """Get the estimated area of a region in km²."""
        ...

    async def get_castle_count(self, region_id: str) -> int:
        """Get the number of castles within a region."""
        ...

    async def get_region_details(self, region_id: str) -> EntityDetails:
        """Get summary text and URL for a region."""
        ...

    async def get_location_details(self, location_id: str) -> EntityDetails:
        """Get summary text and URL for a location."""
        ...


class FeatureRenderer(Protocol):
    """Per-layer rendering and interaction capability."""

    def render_point(self, feature: LocationFeature | RegionFeature) -> MarkerSpec | None:
        """Get the marker for a point feature, or None for polygon features."""
        ...

    async def on_feature_interaction(
        self, context: "AtlasContext", feature: LocationFeature | RegionFeature
    ) -> None:
        """Handle a click on a feature of this layer."""
        ...


class MapSurface(Protocol):
    """Map rendering engine: layer construction, presence, style and draw order."""

    def build_layer(
        self,
        key: str,
        features: Sequence[LocationFeature | RegionFeature],
        renderer: FeatureRenderer,
    ) -> Any:
        """Build a renderable layer group (not yet shown) and return its handle."""
        ...

    def add_layer(self, layer: Any) -> None:
        """Show a layer on the map."""
        ...

    def remove_layer(self, layer: Any) -> None:
        """Remove a layer from the map."""
        ...

    def reset_style(self, layer: Any, feature_id: str) -> None:
        """Restore a feature's default style."""
        ...

    def set_style(self, layer: Any, feature_id: str, style: dict[str, Any]) -> None:
        """Apply a style to a single feature."""
        ...

    def bring_to_front(self, layer: Any, feature_id: str) -> None:
        """Raise a feature to the top of the draw order."""
        ...


class UIPort(Protocol):
    """UI surface: info panel slots, panel visibility and category indicators."""

    def set_title(self, html: str) -> None:
        ...

    def clear_content(self) -> None:
        ...

    def append_content(self, html: str) -> None:
        ...

    def is_panel_active(self) -> bool:
        ...

    def toggle_panel(self) -> None:
        ...

    def toggle_indicator(self, category: Category) -> None:
        """Flip the active class of the ``{category}-toggle`` indicator."""
        ...

    def is_indicator_active(self, category: Category) -> bool:
        ...

    def viewport_width(self) -> int:
        """Get the viewport width in logical pixels."""
        ...
