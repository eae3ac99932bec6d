"""Contracts expected from an AQI data provider."""

from typing import Protocol, runtime_checkable

from aeroguard.domain.results import ProviderResult
from aeroguard.domain.stations import CandidateStation, SearchResult, StationFeed
from aeroguard.services.geo import BoundingBox


class AqiProvider(Protocol):
    """Asynchronous lookups against an air-quality data source.

    Implementations report provider-side failures as ``Err`` values rather
    than raising.
    """

    async def stations_in_bounds(
        self, box: BoundingBox
    ) -> ProviderResult[list[CandidateStation]]: ...

    async def feed_by_id(self, station_id: int) -> ProviderResult[StationFeed]: ...

    async def feed_by_geo(
        self, latitude: float, longitude: float
    ) -> ProviderResult[StationFeed]: ...


@runtime_checkable
class StationDirectory(AqiProvider, Protocol):
    """Provider that also answers the direct lookups served by the API."""

    async def feed_here(self) -> ProviderResult[StationFeed]: ...

    async def search(self, keyword: str) -> ProviderResult[list[SearchResult]]: ...
