"""Layer registry and paired map/indicator visibility toggling."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from atlas.core.config import Category
from atlas.core.errors import PreconditionViolation
from atlas.models.feature import LocationFeature, RegionFeature
from atlas.models.ports import FeatureRenderer, MapSurface, UIPort

logger = logging.getLogger(__name__)


@dataclass
class LayerEntry:
    """A category's renderable layer group and its visibility flag."""

    category: Category
    layer: Any  # handle returned by MapSurface.build_layer
    renderer: FeatureRenderer
    features: dict[str, LocationFeature | RegionFeature] = field(default_factory=dict)
    visible: bool = False

    def get_feature(self, feature_id: str) -> LocationFeature | RegionFeature:
        """
        Look up a feature of this layer by id.

        Raises:
            PreconditionViolation: If the feature is not part of this layer
        """
        try:
            return self.features[feature_id]
        except KeyError:
            raise PreconditionViolation(
                f"Feature {feature_id!r} is not part of the {self.category.value} layer"
            ) from None


class LayerRegistry:
    """Keyed store of layer entries, one per category.

    Entries are registered once and never removed. Visibility changes go
    through VisibilityToggle only.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._entries: dict[Category, LayerEntry] = {}

    def register_all(self, entries: Iterable[LayerEntry]) -> None:
        """
        Register a batch of entries atomically.

        Either every entry is registered or none is.

        Args:
            entries: Entries to register

        Raises:
            PreconditionViolation: If a category is already registered or repeated in the batch
        """
        staged: dict[Category, LayerEntry] = {}
        for entry in entries:
            if entry.category in self._entries or entry.category in staged:
                raise PreconditionViolation(f"Layer already registered: {entry.category.value}")
            staged[entry.category] = entry

        self._entries.update(staged)
        logger.debug(f"Registered layers: {', '.join(c.value for c in staged)}")

    def get(self, category: Category) -> LayerEntry:
        """
        Get the entry for a category.

        Raises:
            PreconditionViolation: If the category was never registered
        """
        try:
            return self._entries[Category(category)]
        except (KeyError, ValueError):
            raise PreconditionViolation(f"Layer not registered: {category}") from None

    def __contains__(self, category: object) -> bool:
        return category in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def categories(self) -> list[Category]:
        """Get registered categories in registration order."""
        return list(self._entries)

    def visible_categories(self) -> set[Category]:
        """Get the set of categories currently shown on the map."""
        return {c for c, entry in self._entries.items() if entry.visible}


class VisibilityToggle:
    """Keeps a category's map presence and its UI indicator in lockstep."""

    def __init__(self, registry: LayerRegistry, map_surface: MapSurface, ui: UIPort):
        self.registry = registry
        self.map = map_surface
        self.ui = ui

    def toggle_layer(self, category: Category) -> bool:
        """
        Flip a category between visible and hidden.

        Args:
            category: Registered category to toggle

        Returns:
            New visibility state

        Raises:
            PreconditionViolation: If the category is not registered
        """
        entry = self.registry.get(category)

        # Indicator first: a missing indicator must fail before the map changes
        self.ui.toggle_indicator(entry.category)
        if entry.visible:
            self.map.remove_layer(entry.layer)
        else:
            self.map.add_layer(entry.layer)
        entry.visible = not entry.visible

        logger.debug(f"Layer {entry.category.value} {'shown' if entry.visible else 'hidden'}")
        return entry.visible
