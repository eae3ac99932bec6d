from __future__ import annotations

from typing import Any

import pytest

from aeroguard.domain.results import Err, Ok, ProviderResult
from aeroguard.domain.stations import CandidateStation, StationFeed
from aeroguard.services.geo import BoundingBox


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


def feed_payload(
    idx: int = 1,
    *,
    name: str = "Tel Aviv - Yad Avner",
    geo: tuple[float, float] = (32.0853, 34.7818),
    aqi: Any = 42,
) -> dict[str, Any]:
    return {
        "aqi": aqi,
        "idx": idx,
        "attributions": [{"url": "http://www.sviva.gov.il", "name": "Israel MoEP"}],
        "city": {"geo": list(geo), "name": name, "url": f"https://aqicn.org/city/{idx}"},
        "dominentpol": "pm25",
        "iaqi": {"pm25": {"v": 42}, "no2": {"v": 11.3}, "t": {"v": 24}},
        "time": {
            "s": "2026-10-19 12:00:00",
            "tz": "+03:00",
            "v": 1792411200,
            "iso": "2026-10-19T12:00:00+03:00",
        },
        "forecast": {
            "daily": {
                "pm25": [{"avg": 40, "day": "2026-10-20", "max": 55, "min": 21}],
            }
        },
        "debug": {"sync": "2026-10-19T12:05:00+03:00"},
    }


def candidate_payload(uid: int, lat: float, lon: float, aqi: str = "42") -> dict[str, Any]:
    return {
        "lat": lat,
        "lon": lon,
        "uid": uid,
        "aqi": aqi,
        "station": {"name": f"Station {uid}", "time": "2026-10-19T12:00:00+03:00"},
    }


def make_feed(idx: int = 1, **kwargs: Any) -> StationFeed:
    return StationFeed.model_validate(feed_payload(idx, **kwargs))


def make_candidate(uid: int, lat: float, lon: float) -> CandidateStation:
    return CandidateStation.model_validate(candidate_payload(uid, lat, lon))


class FakeProvider:
    """Scripted AqiProvider that records every call it receives."""

    def __init__(
        self,
        *,
        bounds: ProviderResult[list[CandidateStation]] | None = None,
        feeds: dict[int, ProviderResult[StationFeed]] | None = None,
        geo: ProviderResult[StationFeed] | None = None,
    ) -> None:
        self.bounds = bounds if bounds is not None else Ok([])
        self.feeds = feeds or {}
        self.geo = geo if geo is not None else Err("no geo feed scripted")
        self.bounds_calls: list[BoundingBox] = []
        self.feed_calls: list[int] = []
        self.geo_calls: list[tuple[float, float]] = []

    async def stations_in_bounds(
        self, box: BoundingBox
    ) -> ProviderResult[list[CandidateStation]]:
        self.bounds_calls.append(box)
        return self.bounds

    async def feed_by_id(self, station_id: int) -> ProviderResult[StationFeed]:
        self.feed_calls.append(station_id)
        return self.feeds.get(station_id, Err("Unknown station"))

    async def feed_by_geo(
        self, latitude: float, longitude: float
    ) -> ProviderResult[StationFeed]:
        self.geo_calls.append((latitude, longitude))
        return self.geo
