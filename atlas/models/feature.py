"""Data models for map features parsed from GeoJSON."""

from dataclasses import dataclass, field
from typing import Any

from atlas.core.config import Category


def _feature_list(collection: Any) -> list[dict]:
    """Normalize a feature collection to a list of feature dictionaries.

    The data API returns either a bare list of features or a GeoJSON
    FeatureCollection object.
    """
    if isinstance(collection, dict):
        if collection.get("type") != "FeatureCollection":
            raise ValueError(f"Expected FeatureCollection, got {collection.get('type')!r}")
        return list(collection.get("features") or [])
    if isinstance(collection, list):
        return collection
    raise ValueError(f"Unsupported feature collection type: {type(collection).__name__}")


@dataclass(frozen=True)
class LocationFeature:
    """A point of interest (castle, city, town, ruin, landmark)."""

    id: str
    name: str
    category: Category
    coordinates: tuple[float, float]  # (lon, lat)
    icon_url: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_geojson(cls, feature: dict, category: Category, icon_url: str | None = None) -> "LocationFeature":
        """
        Create a location from a GeoJSON point feature.

        Args:
            feature: GeoJSON feature dictionary
            category: Category the feature was fetched for
            icon_url: Marker icon URL for the category

        Returns:
            LocationFeature instance

        Raises:
            ValueError: If the feature has no point geometry or id
        """
        props = feature.get("properties") or {}
        geom = feature.get("geometry") or {}
        coords = geom.get("coordinates")
        if geom.get("type") != "Point" or not coords or len(coords) < 2:
            raise ValueError(f"Location feature without point geometry: {props.get('name')!r}")

        fid = props.get("id", feature.get("id"))
        if fid is None:
            raise ValueError(f"Location feature without id: {props.get('name')!r}")

        return cls(
            id=str(fid),
            name=str(props.get("name") or ""),
            category=category,
            coordinates=(float(coords[0]), float(coords[1])),
            icon_url=icon_url,
            properties=dict(props),
        )


@dataclass(frozen=True)
class RegionFeature:
    """A political boundary (kingdom) polygon."""

    id: str
    name: str
    geometry: dict[str, Any]
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_geojson(cls, feature: dict) -> "RegionFeature":
        """
        Create a region from a GeoJSON polygon feature.

        Raises:
            ValueError: If the feature has no polygon geometry or id
        """
        props = feature.get("properties") or {}
        geom = feature.get("geometry") or {}
        if geom.get("type") not in ("Polygon", "MultiPolygon"):
            raise ValueError(f"Region feature without polygon geometry: {props.get('name')!r}")

        fid = props.get("id", feature.get("id"))
        if fid is None:
            raise ValueError(f"Region feature without id: {props.get('name')!r}")

        return cls(
            id=str(fid),
            name=str(props.get("name") or ""),
            geometry=dict(geom),
            properties=dict(props),
        )


def parse_locations(collection: Any, category: Category, icon_url: str | None = None) -> list[LocationFeature]:
    """Parse a location feature collection, preserving order."""
    return [LocationFeature.from_geojson(f, category, icon_url) for f in _feature_list(collection)]


def parse_regions(collection: Any) -> list[RegionFeature]:
    """Parse a boundary feature collection, preserving order."""
    return [RegionFeature.from_geojson(f) for f in _feature_list(collection)]
