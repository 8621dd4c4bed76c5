"""Tests for the data API client against a local HTTP server."""

import asyncio
import socket

import pytest

from atlas.core.api_client import AtlasApiClient
from atlas.core.config import Category
from atlas.core.errors import DataFetchError
from tests.fakes import SAMPLE_LOCATIONS


def _run(base_url, func, **kwargs):
    async def go():
        async with AtlasApiClient(base_url=base_url, **kwargs) as client:
            return await func(client)

    return asyncio.run(go())


def test_get_locations(api_server):
    api_server.add("locations/castle", SAMPLE_LOCATIONS[Category.CASTLE])

    features = _run(api_server.base_url, lambda c: c.get_locations(Category.CASTLE))

    assert [f["properties"]["name"] for f in features] == ["Winterfell", "Casterly Rock"]


def test_get_political_boundaries(api_server):
    api_server.add("kingdoms", {"type": "FeatureCollection", "features": []})

    assert _run(api_server.base_url, lambda c: c.get_political_boundaries())["type"] == "FeatureCollection"


def test_region_lookups(api_server):
    api_server.add("kingdoms/101/size", {"size": 7500.4})
    api_server.add("kingdoms/101/castles", {"count": 12})
    api_server.add("kingdoms/101/summary", {"summary": "Cold.", "url": "https://example.org/north"})

    async def lookups(client):
        return await asyncio.gather(
            client.get_region_size("101"), client.get_castle_count("101"), client.get_region_details("101")
        )

    size, castles, details = _run(api_server.base_url, lookups)

    assert size == 7500.4
    assert castles == 12
    assert details.summary_text == "Cold."
    assert details.url == "https://example.org/north"


def test_location_details(api_server):
    api_server.add("locations/1/summary", {"summaryText": "Seat of House Stark.", "url": "https://example.org/wf"})

    details = _run(api_server.base_url, lambda c: c.get_location_details("1"))

    assert details.summary_text == "Seat of House Stark."


def test_not_found_fails_without_retry(api_server):
    with pytest.raises(DataFetchError) as excinfo:
        _run(api_server.base_url, lambda c: c.get_json("missing"), retry_delay=5)

    assert excinfo.value.status == 404


def test_invalid_json(api_server):
    api_server.add("kingdoms", "{not json")

    with pytest.raises(DataFetchError, match="Invalid JSON"):
        _run(api_server.base_url, lambda c: c.get_political_boundaries())


def test_missing_field(api_server):
    api_server.add("kingdoms/102/size", {"area": 10})

    with pytest.raises(DataFetchError, match="size"):
        _run(api_server.base_url, lambda c: c.get_region_size("102"))


def test_incomplete_details(api_server):
    api_server.add("locations/3/summary", {"summary": "No link"})

    with pytest.raises(DataFetchError, match="Invalid detail payload"):
        _run(api_server.base_url, lambda c: c.get_location_details("3"))


def test_connection_errors_exhaust_retries():
    """Unreachable hosts are retried up to max_retries and then fail."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    # Nothing listens on the released port

    with pytest.raises(DataFetchError, match="after 2 attempts"):
        _run(f"http://127.0.0.1:{port}", lambda c: c.get_json("kingdoms"), max_retries=2, retry_delay=0)


def test_closed_session_rejected():
    client = AtlasApiClient(base_url="http://127.0.0.1:9")
    with pytest.raises(DataFetchError, match="not open"):
        asyncio.run(client.get_json("kingdoms"))


def test_server_error_is_retried(api_server):
    """A 5xx answer is retried and the next attempt succeeds."""
    api_server.add("kingdoms/101/castles", {"count": 12})
    api_server.fail("kingdoms/101/castles", 503)

    count = _run(api_server.base_url, lambda c: c.get_castle_count("101"), max_retries=3, retry_delay=0)

    assert count == 12
    assert api_server.requests == ["/kingdoms/101/castles", "/kingdoms/101/castles"]


def test_server_errors_exhaust_retries(api_server):
    api_server.add("kingdoms/101/size", {"size": 10})
    api_server.fail("kingdoms/101/size", 503, times=3)

    with pytest.raises(DataFetchError, match="after 3 attempts") as excinfo:
        _run(api_server.base_url, lambda c: c.get_region_size("101"), max_retries=3, retry_delay=0)

    assert excinfo.value.status == 503
    assert len(api_server.requests) == 3


def test_client_error_is_not_retried(api_server):
    api_server.add("kingdoms/101/size", {"size": 10})
    api_server.fail("kingdoms/101/size", 403)

    with pytest.raises(DataFetchError) as excinfo:
        _run(api_server.base_url, lambda c: c.get_region_size("101"), max_retries=3, retry_delay=0)

    assert excinfo.value.status == 403
    assert len(api_server.requests) == 1
