"""Feature renderers: marker construction and click handling per layer kind."""

from typing import TYPE_CHECKING

from atlas.core.config import ICON_SIZE
from atlas.core.info_panel import EntityType
from atlas.models.feature import LocationFeature, RegionFeature
from atlas.models.ports import MarkerSpec

if TYPE_CHECKING:
    from atlas.core.context import AtlasContext


class LocationRenderer:
    """Renders point markers with the category icon.

    Clicking a marker opens its location details and clears any region highlight.
    """

    def __init__(self, icon_url: str | None, icon_size: tuple[int, int] = ICON_SIZE):
        self.icon_url = icon_url
        self.icon_size = icon_size

    def render_point(self, feature: LocationFeature) -> MarkerSpec:
        return MarkerSpec(
            icon_url=self.icon_url,
            icon_size=self.icon_size,
            title=feature.name,
            popup=feature.name,
        )

    async def on_feature_interaction(self, context: "AtlasContext", feature: LocationFeature) -> None:
        context.highlight.set_highlighted_region(None)
        await context.info_panel.show_info(feature.name, feature.id, EntityType.LOCATION)


class RegionRenderer:
    """Renders boundary polygons.

    Clicking a region highlights it and opens its region details.
    """

    def render_point(self, feature: RegionFeature) -> None:
        return None

    async def on_feature_interaction(self, context: "AtlasContext", feature: RegionFeature) -> None:
        context.highlight.set_highlighted_region(feature)
        await context.info_panel.show_info(feature.name, feature.id, EntityType.REGIONS)
