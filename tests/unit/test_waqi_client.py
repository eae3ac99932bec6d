from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
from conftest import candidate_payload, feed_payload

from aeroguard.domain.coordinates import Coordinate
from aeroguard.domain.results import Err, Ok
from aeroguard.providers.waqi import WaqiClient
from aeroguard.services.geo import BoundingBox
from aeroguard.services.stations_service import StationResolver

pytestmark = pytest.mark.anyio

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def ok(data: Any) -> Handler:
    return lambda request: httpx.Response(200, json={"status": "ok", "data": data})


@pytest.fixture()
async def make_client() -> AsyncIterator[Callable[[Handler], tuple[WaqiClient, Recorder]]]:
    opened: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> tuple[WaqiClient, Recorder]:
        recorder = Recorder(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        opened.append(http)
        return WaqiClient(http, token="secret", base_url="https://waqi.test/"), recorder

    yield factory

    for http in opened:
        await http.aclose()


async def test_stations_in_bounds_parses_candidates(make_client) -> None:
    client, recorder = make_client(
        ok([candidate_payload(1, 32.1, 34.8), candidate_payload(2, 32.2, 34.9, aqi="-")])
    )

    result = await client.stations_in_bounds(
        BoundingBox(lat_min=31.5, lng_min=34.3, lat_max=32.5, lng_max=35.3)
    )

    assert isinstance(result, Ok)
    assert [c.station_id for c in result.value] == [1, 2]
    assert result.value[0].latitude == 32.1
    assert result.value[0].name == "Station 1"
    assert result.value[1].aqi is None

    request = recorder.requests[0]
    assert request.url.path == "/map/bounds/"
    assert request.url.params["latlng"] == "31.5,34.3,32.5,35.3"
    assert request.url.params["token"] == "secret"


async def test_stations_in_bounds_accepts_numeric_aqi(make_client) -> None:
    payload = candidate_payload(1, 32.1, 34.8)
    payload["aqi"] = 57
    client, _ = make_client(ok([payload]))

    result = await client.stations_in_bounds(BoundingBox(0, 0, 1, 1))

    assert isinstance(result, Ok)
    assert result.value[0].aqi == "57"


async def test_stations_in_bounds_empty_list(make_client) -> None:
    client, _ = make_client(ok([]))

    result = await client.stations_in_bounds(BoundingBox(0, 0, 1, 1))

    assert result == Ok([])


async def test_feed_by_id_builds_path(make_client) -> None:
    client, recorder = make_client(ok(feed_payload(7397)))

    result = await client.feed_by_id(7397)

    assert isinstance(result, Ok)
    assert result.value.station_id == 7397
    assert result.value.name == "Tel Aviv - Yad Avner"
    assert recorder.requests[0].url.path == "/feed/@7397/"


async def test_feed_by_geo_builds_path(make_client) -> None:
    client, recorder = make_client(ok(feed_payload(5)))

    result = await client.feed_by_geo(32.08, 34.78)

    assert isinstance(result, Ok)
    assert recorder.requests[0].url.path == "/feed/geo:32.08;34.78/"


async def test_feed_here(make_client) -> None:
    client, recorder = make_client(ok(feed_payload(9)))

    result = await client.feed_here()

    assert isinstance(result, Ok)
    assert result.value.station_id == 9
    assert recorder.requests[0].url.path == "/feed/here/"


async def test_search_parses_hits(make_client) -> None:
    hit = {
        "uid": 8183,
        "aqi": "35",
        "time": {"tz": "+03:00", "stime": "2026-10-19 12:00:00", "vtime": 1792411200},
        "station": {"name": "Haifa, Israel", "geo": [32.79, 34.99], "url": "haifa"},
    }
    client, recorder = make_client(ok([hit]))

    result = await client.search("haifa")

    assert isinstance(result, Ok)
    assert result.value[0].station_id == 8183
    assert result.value[0].name == "Haifa, Israel"
    assert recorder.requests[0].url.params["keyword"] == "haifa"


async def test_error_status_returns_provider_message(make_client) -> None:
    client, _ = make_client(
        lambda request: httpx.Response(200, json={"status": "error", "data": "Unknown station"})
    )

    result = await client.feed_by_id(1)

    assert result == Err("Unknown station")


async def test_error_status_without_message(make_client) -> None:
    client, _ = make_client(lambda request: httpx.Response(200, json={"status": "nope"}))

    result = await client.feed_by_id(1)

    assert result == Err("nope")


async def test_transport_error_returns_err(make_client) -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(boom)

    result = await client.stations_in_bounds(BoundingBox(0, 0, 1, 1))

    assert isinstance(result, Err)
    assert "connection refused" in result.message


async def test_http_error_status_returns_err(make_client) -> None:
    client, _ = make_client(lambda request: httpx.Response(503, text="unavailable"))

    result = await client.feed_by_geo(1.0, 2.0)

    assert isinstance(result, Err)
    assert result.message.startswith("request failed")


async def test_non_json_body_returns_err(make_client) -> None:
    client, _ = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    result = await client.stations_in_bounds(BoundingBox(0, 0, 1, 1))

    assert result == Err("malformed response")


async def test_unexpected_shape_returns_err(make_client) -> None:
    client, _ = make_client(ok({"not": "a list"}))

    result = await client.stations_in_bounds(BoundingBox(0, 0, 1, 1))

    assert result == Err("unexpected response shape")


async def test_feed_missing_required_fields_returns_err(make_client) -> None:
    client, _ = make_client(ok({"aqi": 10}))

    result = await client.feed_by_id(3)

    assert result == Err("unexpected response shape")


async def test_stations_in_bounds_skips_malformed_entries(make_client) -> None:
    client, _ = make_client(
        ok(
            [
                candidate_payload(2, 32.01, 34.0),
                {"uid": 9, "lat": None, "lon": 34.0},
                {"lat": 32.02, "lon": 34.0},
            ]
        )
    )

    result = await client.stations_in_bounds(BoundingBox(31.5, 33.5, 32.5, 34.5))

    assert isinstance(result, Ok)
    assert [c.station_id for c in result.value] == [2]


async def test_resolver_uses_valid_bounds_entries_next_to_malformed_ones(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/map/bounds/":
            data: Any = [
                candidate_payload(2, 32.01, 34.0),
                {"uid": 9, "lat": None, "lon": 34.0},
            ]
        else:
            data = feed_payload(2)
        return httpx.Response(200, json={"status": "ok", "data": data})

    client, recorder = make_client(handler)

    feed = await StationResolver(client).resolve_nearest_station(Coordinate(32.0, 34.0))

    assert feed.station_id == 2
    assert [r.url.path for r in recorder.requests] == ["/map/bounds/", "/feed/@2/"]


async def test_feed_with_fractional_aqi_is_accepted(make_client) -> None:
    client, _ = make_client(ok(feed_payload(4, aqi=42.5)))

    result = await client.feed_by_id(4)

    assert isinstance(result, Ok)
    assert result.value.aqi in (42, 43)
