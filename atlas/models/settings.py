"""Pydantic schema for runtime settings files."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from atlas.core.config import (
    API_BASE_URL,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_ZOOM,
    ICON_BASE_URL,
    MAX_MAP_ZOOM,
    MAX_RETRIES,
    MIN_MAP_ZOOM,
    REQUEST_TIMEOUT,
    RETRY_DELAY,
    THOUSANDS_SEPARATOR,
    TILE_URL,
)


class MapSettings(BaseModel):
    """Initial map view."""

    model_config = ConfigDict(extra="forbid")

    center: tuple[float, float] = tuple(DEFAULT_MAP_CENTER)
    zoom: int = Field(default=DEFAULT_MAP_ZOOM, ge=0, le=22)
    min_zoom: int = Field(default=MIN_MAP_ZOOM, ge=0, le=22)
    max_zoom: int = Field(default=MAX_MAP_ZOOM, ge=0, le=22)

    @model_validator(mode="after")
    def check_zoom_range(self) -> "MapSettings":
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) cannot be greater than max_zoom ({self.max_zoom})")
        if not self.min_zoom <= self.zoom <= self.max_zoom:
            raise ValueError(f"zoom ({self.zoom}) must be within {self.min_zoom}-{self.max_zoom}")
        return self


class AtlasSettings(BaseModel):
    """Runtime settings for the atlas viewer."""

    model_config = ConfigDict(extra="forbid")

    api_base_url: str = API_BASE_URL
    request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)
    max_retries: int = Field(default=MAX_RETRIES, ge=1)
    retry_delay: float = Field(default=RETRY_DELAY, ge=0)
    icon_base_url: str = ICON_BASE_URL
    thousands_separator: str = THOUSANDS_SEPARATOR
    tile_url: str = TILE_URL
    map: MapSettings = Field(default_factory=MapSettings)
