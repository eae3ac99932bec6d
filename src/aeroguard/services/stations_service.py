from __future__ import annotations

import logging
from collections.abc import Iterable

from aeroguard.domain.coordinates import Coordinate
from aeroguard.domain.results import Err
from aeroguard.domain.stations import CandidateStation, StationFeed
from aeroguard.errors import CandidateFetchError, FallbackError
from aeroguard.providers.base import AqiProvider
from aeroguard.services.geo import DEFAULT_BOX_DELTA, bounding_box, distance_km

logger = logging.getLogger(__name__)


def find_nearest_candidate(
    origin: Coordinate,
    candidates: Iterable[CandidateStation],
) -> CandidateStation | None:
    """Return the candidate closest to ``origin``; the first one wins on ties."""
    nearest: CandidateStation | None = None
    min_distance = float("inf")

    for candidate in candidates:
        try:
            position = Coordinate(candidate.latitude, candidate.longitude)
        except ValueError:
            logger.debug("Skipping station %s with bad position", candidate.station_id)
            continue
        distance = distance_km(origin, position)
        if distance < min_distance:
            min_distance = distance
            nearest = candidate

    return nearest


class StationResolver:
    """Resolves a coordinate to the feed of the closest monitoring station.

    Candidates are searched in a fixed-degree box around the point. When the
    box search fails or comes back empty the provider's own geo lookup is
    used instead. Once a candidate has been picked, a failure to fetch its
    feed is raised rather than masked by the fallback.
    """

    def __init__(self, provider: AqiProvider, *, box_delta: float = DEFAULT_BOX_DELTA) -> None:
        if box_delta <= 0:
            raise ValueError("box_delta must be positive")
        self._provider = provider
        self._box_delta = box_delta

    @property
    def box_delta(self) -> float:
        return self._box_delta

    async def resolve_nearest_station(self, coordinate: Coordinate) -> StationFeed:
        box = bounding_box(coordinate, self._box_delta)
        lookup = await self._provider.stations_in_bounds(box)

        if isinstance(lookup, Err):
            logger.warning(
                "Bounds search around %s failed (%s), using geo feed",
                coordinate,
                lookup.message,
            )
        else:
            nearest = find_nearest_candidate(coordinate, lookup.value)
            if nearest is not None:
                logger.debug(
                    "Nearest station to %s is %s (%d candidates)",
                    coordinate,
                    nearest.station_id,
                    len(lookup.value),
                )
                return await self._fetch_candidate(nearest)
            logger.info("No stations within %s of %s, using geo feed", self._box_delta, coordinate)

        return await self._fetch_fallback(coordinate)

    async def _fetch_candidate(self, candidate: CandidateStation) -> StationFeed:
        result = await self._provider.feed_by_id(candidate.station_id)
        if isinstance(result, Err):
            raise CandidateFetchError(candidate.station_id, result.message)
        return result.value

    async def _fetch_fallback(self, coordinate: Coordinate) -> StationFeed:
        result = await self._provider.feed_by_geo(coordinate.latitude, coordinate.longitude)
        if isinstance(result, Err):
            raise FallbackError(coordinate, result.message)
        return result.value


def feed_to_dict(feed: StationFeed) -> dict[str, object]:
    lat, lon = feed.city.geo
    level = feed.level
    forecast = None
    if feed.forecast is not None:
        forecast = {
            pollutant: [
                {"day": d.day.isoformat(), "avg": d.avg, "min": d.min, "max": d.max}
                for d in days
            ]
            for pollutant, days in feed.forecast.daily.items()
        }

    return {
        "station_id": feed.station_id,
        "name": feed.name,
        "lat": lat,
        "lon": lon,
        "url": feed.city.url,
        "aqi": feed.aqi,
        "level": level.value if level else None,
        "dominant_pollutant": feed.dominant_pollutant,
        "iaqi": feed.sub_indices,
        "updated_at": feed.updated_at.isoformat() if feed.updated_at else None,
        "attributions": [{"name": a.name, "url": a.url} for a in feed.attributions],
        "forecast": forecast,
    }
