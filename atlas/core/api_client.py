"""HTTP client for the atlas data API."""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from atlas.core.config import API_BASE_URL, MAX_RETRIES, REQUEST_TIMEOUT, RETRY_DELAY, Category
from atlas.core.errors import DataFetchError
from atlas.models.details import EntityDetails

logger = logging.getLogger(__name__)


class AtlasApiClient:
    """Client for the atlas data API (locations, kingdoms and summaries)."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
    ):
        """
        Initialize API client.

        Args:
            base_url: API root URL
            timeout: Total request timeout in seconds
            max_retries: Attempts per request for connection errors and 5xx responses
            retry_delay: Base delay between attempts in seconds (grows linearly)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def get_json(self, path: str) -> Any:
        """
        GET a JSON document from the API.

        Args:
            path: Path relative to the base URL

        Returns:
            Decoded JSON payload

        Raises:
            DataFetchError: On HTTP errors, exhausted retries or invalid JSON
        """
        if self.session is None or self.session.closed:
            raise DataFetchError("Client session is not open; use 'async with AtlasApiClient()'")

        url = f"{self.base_url}/{path.lstrip('/')}"
        last_error: str | None = None
        last_status: int | None = None

        for attempt in range(self.max_retries):
            try:
                async with self.session.get(url) as response:
                    if response.status == 200:
                        text = await response.text()
                        logger.debug(f"Fetched: {url}")
                        try:
                            return json.loads(text)
                        except json.JSONDecodeError as e:
                            raise DataFetchError(f"Invalid JSON from {url}: {e}", url=url) from e
                    elif response.status < 500:
                        raise DataFetchError(f"HTTP {response.status} for {url}", url=url, status=response.status)
                    else:
                        last_status = response.status
                        last_error = f"HTTP {response.status}"
                        logger.warning(f"HTTP {response.status} for {url} (attempt {attempt + 1}/{self.max_retries})")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = str(e) or type(e).__name__
                logger.warning(f"Error fetching {url}: {last_error} (attempt {attempt + 1}/{self.max_retries})")

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise DataFetchError(
            f"Failed to fetch {url} after {self.max_retries} attempts: {last_error}", url=url, status=last_status
        )

    async def get_locations(self, category: Category) -> list[dict]:
        """Get the GeoJSON features of one location category."""
        return await self.get_json(f"locations/{Category(category).value}")

    async def get_political_boundaries(self) -> list[dict]:
        """Get the GeoJSON features of all kingdoms."""
        return await self.get_json("kingdoms")

    async def get_region_size(self, region_id: str) -> float:
        """Get a kingdom's estimated area in km²."""
        data = await self.get_json(f"kingdoms/{region_id}/size")
        return float(self._field(data, "size", f"kingdoms/{region_id}/size"))

    async def get_castle_count(self, region_id: str) -> int:
        """Get the number of castles in a kingdom."""
        data = await self.get_json(f"kingdoms/{region_id}/castles")
        return int(self._field(data, "count", f"kingdoms/{region_id}/castles"))

    async def get_region_details(self, region_id: str) -> EntityDetails:
        """Get summary text and URL for a kingdom."""
        return self._details(await self.get_json(f"kingdoms/{region_id}/summary"), f"kingdoms/{region_id}/summary")

    async def get_location_details(self, location_id: str) -> EntityDetails:
        """Get summary text and URL for a location."""
        return self._details(
            await self.get_json(f"locations/{location_id}/summary"), f"locations/{location_id}/summary"
        )

    @staticmethod
    def _field(data: Any, key: str, path: str) -> Any:
        if not isinstance(data, dict) or data.get(key) is None:
            raise DataFetchError(f"Missing '{key}' in response from {path}")
        return data[key]

    @staticmethod
    def _details(data: Any, path: str) -> EntityDetails:
        if not isinstance(data, dict):
            raise DataFetchError(f"Expected object in response from {path}")
        try:
            return EntityDetails.from_dict(data)
        except ValueError as e:
            raise DataFetchError(f"Invalid detail payload from {path}: {e}") from e
