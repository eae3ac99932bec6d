"""Failures surfaced to callers of the station lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aeroguard.domain.coordinates import Coordinate


class StationLookupError(Exception):
    """Base class for lookups that could not produce a station feed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CandidateFetchError(StationLookupError):
    """The nearest candidate was selected but its feed could not be fetched."""

    def __init__(self, station_id: int, message: str) -> None:
        super().__init__(f"feed for station {station_id} unavailable: {message}")
        self.station_id = station_id


class FallbackError(StationLookupError):
    """The provider's own geo feed failed after the bounds search gave up."""

    def __init__(self, coordinate: Coordinate, message: str) -> None:
        super().__init__(f"geo feed for {coordinate} unavailable: {message}")
        self.coordinate = coordinate
