"""Test doubles and sample GeoJSON for atlas tests."""

import asyncio

from atlas.core.config import Category
from atlas.core.errors import DataFetchError
from atlas.models.details import EntityDetails


def point(fid: int, name: str, lon: float = 10.0, lat: float = 5.0, **props) -> dict:
    """Build a GeoJSON point feature as returned by the locations endpoint."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": {"id": fid, "name": name, **props},
    }


def polygon(fid: int, name: str, **props) -> dict:
    """Build a GeoJSON polygon feature as returned by the kingdoms endpoint."""
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
        "properties": {"gid": fid, "id": fid, "name": name, **props},
    }


SAMPLE_LOCATIONS: dict[Category, list[dict]] = {
    Category.CASTLE: [point(1, "Winterfell", type="Castle"), point(2, "Casterly Rock", type="Castle")],
    Category.CITY: [point(3, "King's Landing", type="City"), point(4, "Oldtown", type="City")],
    Category.TOWN: [point(5, "Winter Town", type="Town")],
    Category.RUIN: [point(6, "Harrenhal", type="Ruin")],
    Category.LANDMARK: [point(7, "The Wall", type="Landmark"), point(8, "The Eyrie", type="Landmark")],
}

SAMPLE_BOUNDARIES: list[dict] = [
    polygon(101, "The North"),
    polygon(102, "The Reach", type="Region"),
    polygon(103, "Dorne"),
]


class FakeDataApi:
    """In-memory DataApi recording every call in issue order.

    Args:
        locations: Features per category
        boundaries: Boundary features
        delays: Seconds to sleep per method name before answering
        fail: Method names (or "locations:<category>") that raise DataFetchError
    """

    def __init__(self, locations=None, boundaries=None, delays=None, fail=None):
        self.locations = SAMPLE_LOCATIONS if locations is None else locations
        self.boundaries = SAMPLE_BOUNDARIES if boundaries is None else boundaries
        self.delays = delays or {}
        self.fail = set(fail or ())
        self.calls: list[tuple] = []
        self.sizes: dict[str, float] = {}
        self.castle_counts: dict[str, int] = {}

    async def _answer(self, method: str, key: str | None = None):
        delay = self.delays.get(method, 0)
        if delay:
            await asyncio.sleep(delay)
        if method in self.fail or (key and f"{method}:{key}" in self.fail):
            raise DataFetchError(f"{method} failed")

    async def get_locations(self, category):
        category = Category(category)
        self.calls.append(("get_locations", category.value))
        await self._answer("locations", category.value)
        return self.locations.get(category, [])

    async def get_political_boundaries(self):
        self.calls.append(("get_political_boundaries",))
        await self._answer("boundaries")
        return self.boundaries

    async def get_region_size(self, region_id):
        self.calls.append(("get_region_size", region_id))
        await self._answer("size")
        return self.sizes.get(region_id, 7500.4)

    async def get_castle_count(self, region_id):
        self.calls.append(("get_castle_count", region_id))
        await self._answer("castles")
        return self.castle_counts.get(region_id, 12)

    async def get_region_details(self, region_id):
        self.calls.append(("get_region_details", region_id))
        await self._answer("region_details")
        return EntityDetails(summary_text=f"About region {region_id}", url=f"https://example.org/region/{region_id}")

    async def get_location_details(self, location_id):
        self.calls.append(("get_location_details", location_id))
        await self._answer("location_details")
        return EntityDetails(
            summary_text=f"About location {location_id}", url=f"https://example.org/location/{location_id}"
        )
