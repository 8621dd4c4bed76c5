"""Search corpus entry model."""

from dataclasses import dataclass, field
from typing import Any

from atlas.core.config import KINGDOM_TYPE
from atlas.models.feature import LocationFeature, RegionFeature


@dataclass(frozen=True)
class SearchCorpusEntry:
    """A single searchable entry built from a loaded feature's properties."""

    name: str
    type: str | None
    id: str
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def is_kingdom(self) -> bool:
        """Check if this entry was derived from a boundary feature."""
        return self.type == KINGDOM_TYPE

    @classmethod
    def from_location(cls, feature: LocationFeature) -> "SearchCorpusEntry":
        """Build an entry from a location's properties, unchanged."""
        props = dict(feature.properties)
        return cls(name=feature.name, type=props.get("type"), id=feature.id, properties=props)

    @classmethod
    def from_region(cls, feature: RegionFeature) -> "SearchCorpusEntry":
        """Build an entry from a region's properties, tagged as a kingdom.

        The tag is applied after copying, so it replaces any ``type`` property.
        """
        props = {**feature.properties, "type": KINGDOM_TYPE}
        return cls(name=feature.name, type=KINGDOM_TYPE, id=feature.id, properties=props)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert entry to a flat dictionary ({name, type, id, ...properties}).

        Returns:
            Dictionary representation
        """
        return {**self.properties, "name": self.name, "type": self.type, "id": self.id}
