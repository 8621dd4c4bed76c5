"""In-memory map and UI adapters for running the atlas without a display."""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from atlas.core.config import CATEGORIES, TOGGLE_ACTIVE_CLASS, Category
from atlas.core.errors import UISurfaceMissing
from atlas.models.feature import LocationFeature, RegionFeature
from atlas.models.ports import FeatureRenderer, MarkerSpec

logger = logging.getLogger(__name__)


@dataclass
class HeadlessLayer:
    """A layer group held in memory."""

    key: str
    features: list[LocationFeature | RegionFeature]
    markers: dict[str, MarkerSpec]
    renderer: FeatureRenderer
    styles: dict[str, dict[str, Any]] = field(default_factory=dict)


class HeadlessMapSurface:
    """Records layer presence, per-feature styles and draw order."""

    def __init__(self):
        self.layers: dict[str, HeadlessLayer] = {}
        self.shown: list[str] = []
        self.draw_order: list[str] = []  # feature ids, last is on top
        self.calls: list[tuple] = []

    def build_layer(
        self, key: str, features: Sequence[LocationFeature | RegionFeature], renderer: FeatureRenderer
    ) -> HeadlessLayer:
        markers = {}
        for feature in features:
            marker = renderer.render_point(feature)
            if marker is not None:
                markers[feature.id] = marker
        layer = HeadlessLayer(key=key, features=list(features), markers=markers, renderer=renderer)
        self.layers[key] = layer
        self.calls.append(("build_layer", key))
        return layer

    def add_layer(self, layer: HeadlessLayer) -> None:
        if layer.key not in self.shown:
            self.shown.append(layer.key)
        self.calls.append(("add_layer", layer.key))

    def remove_layer(self, layer: HeadlessLayer) -> None:
        if layer.key in self.shown:
            self.shown.remove(layer.key)
        self.calls.append(("remove_layer", layer.key))

    def has_layer(self, layer: HeadlessLayer) -> bool:
        return layer.key in self.shown

    def reset_style(self, layer: HeadlessLayer, feature_id: str) -> None:
        layer.styles.pop(feature_id, None)
        self.calls.append(("reset_style", layer.key, feature_id))

    def set_style(self, layer: HeadlessLayer, feature_id: str, style: dict[str, Any]) -> None:
        layer.styles[feature_id] = {**layer.styles.get(feature_id, {}), **style}
        self.calls.append(("set_style", layer.key, feature_id))

    def bring_to_front(self, layer: HeadlessLayer, feature_id: str) -> None:
        if feature_id in self.draw_order:
            self.draw_order.remove(feature_id)
        self.draw_order.append(feature_id)
        self.calls.append(("bring_to_front", layer.key, feature_id))


class HeadlessUI:
    """Records info panel content, panel state and category indicator classes."""

    def __init__(self, width: int = 1024, categories: Sequence[Category] | None = None):
        """
        Initialize headless UI.

        Args:
            width: Reported viewport width in logical pixels
            categories: Categories that have a toggle indicator (default: all)
        """
        self.width = width
        self.title = ""
        self.content: list[str] = []
        self.panel_active = False
        keys = categories if categories is not None else list(CATEGORIES)
        self.indicator_classes: dict[str, set[str]] = {f"{Category(c).value}-toggle": set() for c in keys}

    def _indicator(self, category: Category) -> set[str]:
        element_id = f"{Category(category).value}-toggle"
        try:
            return self.indicator_classes[element_id]
        except KeyError:
            raise UISurfaceMissing(f"No toggle indicator '{element_id}'") from None

    def set_title(self, html: str) -> None:
        self.title = html

    def clear_content(self) -> None:
        self.content.clear()

    def append_content(self, html: str) -> None:
        self.content.append(html)

    def is_panel_active(self) -> bool:
        return self.panel_active

    def toggle_panel(self) -> None:
        self.panel_active = not self.panel_active

    def toggle_indicator(self, category: Category) -> None:
        classes = self._indicator(category)
        if TOGGLE_ACTIVE_CLASS in classes:
            classes.discard(TOGGLE_ACTIVE_CLASS)
        else:
            classes.add(TOGGLE_ACTIVE_CLASS)

    def is_indicator_active(self, category: Category) -> bool:
        return TOGGLE_ACTIVE_CLASS in self._indicator(category)

    def viewport_width(self) -> int:
        return self.width

    @property
    def content_html(self) -> str:
        return "".join(self.content)
