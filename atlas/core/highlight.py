"""Single-selection highlight state over boundary regions."""

import logging

from atlas.core.config import HIGHLIGHT_STYLE, Category
from atlas.core.layers import LayerRegistry
from atlas.models.feature import RegionFeature
from atlas.models.ports import MapSurface

logger = logging.getLogger(__name__)


class HighlightState:
    """Tracks the one boundary region currently drawn with the highlight style.

    Holds a reference into the registry's boundary layer; it never owns
    geometry and must not outlive the registry.
    """

    def __init__(self, registry: LayerRegistry, map_surface: MapSurface, style: dict | None = None):
        self.registry = registry
        self.map = map_surface
        self.style = dict(style or HIGHLIGHT_STYLE)
        self.selected: RegionFeature | None = None

    def set_highlighted_region(self, region: RegionFeature | None) -> None:
        """
        Highlight a region, replacing any previous highlight.

        Args:
            region: Region to highlight, or None to clear the highlight

        Raises:
            PreconditionViolation: If a region is given before boundaries are registered
        """
        if self.selected is None and region is None:
            return

        boundary = self.registry.get(Category.BOUNDARY)

        if self.selected is not None:
            self.map.reset_style(boundary.layer, self.selected.id)

        self.selected = region
        if region is not None:
            self.map.bring_to_front(boundary.layer, region.id)
            self.map.set_style(boundary.layer, region.id, self.style)
            logger.debug(f"Highlighted region {region.name} ({region.id})")
