import logging

from fastapi import APIRouter, Path, Query, Request
from fastapi.responses import JSONResponse

from aeroguard.domain.coordinates import Coordinate
from aeroguard.domain.results import Err
from aeroguard.domain.stations import SearchResult
from aeroguard.errors import StationLookupError
from aeroguard.providers.base import StationDirectory
from aeroguard.services.stations_service import StationResolver, feed_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stations"])


def _not_initialized(name: str) -> JSONResponse:
    logger.error("%s not initialized on app.state", name)
    return JSONResponse(status_code=500, content={"detail": f"{name} not initialized"})


def _bad_gateway(message: str) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": message})


def _search_result_to_dict(hit: SearchResult) -> dict[str, object]:
    lat, lon = hit.station.geo
    return {
        "station_id": hit.station_id,
        "name": hit.name,
        "lat": lat,
        "lon": lon,
        "aqi": hit.aqi,
        "url": hit.station.url,
    }


@router.get("/stations/nearest")  # type: ignore[misc]
async def nearest_station(
    request: Request,
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
) -> JSONResponse:
    """
    Return the feed of the monitoring station nearest to (lat, lon).

    The resolver is created at startup and stored under:
    app.state.station_resolver
    """
    resolver = getattr(request.app.state, "station_resolver", None)
    if resolver is None or not isinstance(resolver, StationResolver):
        return _not_initialized("Station resolver")

    try:
        feed = await resolver.resolve_nearest_station(Coordinate(lat, lon))
    except StationLookupError as exc:
        logger.warning("Nearest station lookup for (%s, %s) failed: %s", lat, lon, exc)
        return _bad_gateway(exc.message)

    return JSONResponse(content=feed_to_dict(feed))


@router.get("/stations/here")  # type: ignore[misc]
async def station_here(request: Request) -> JSONResponse:
    """Return the feed the provider picks for the caller's IP address."""
    provider = getattr(request.app.state, "aqi_provider", None)
    if provider is None or not isinstance(provider, StationDirectory):
        return _not_initialized("AQI provider")

    result = await provider.feed_here()
    if isinstance(result, Err):
        return _bad_gateway(result.message)
    return JSONResponse(content=feed_to_dict(result.value))


@router.get("/stations/search")  # type: ignore[misc]
async def search_stations(
    request: Request,
    keyword: str = Query(..., min_length=1),
) -> JSONResponse:
    """Search stations by name or city keyword."""
    provider = getattr(request.app.state, "aqi_provider", None)
    if provider is None or not isinstance(provider, StationDirectory):
        return _not_initialized("AQI provider")

    result = await provider.search(keyword)
    if isinstance(result, Err):
        return _bad_gateway(result.message)
    return JSONResponse(content=[_search_result_to_dict(hit) for hit in result.value])


@router.get("/stations/{station_id}")  # type: ignore[misc]
async def station_by_id(
    request: Request,
    station_id: int = Path(..., ge=0),
) -> JSONResponse:
    """Return the feed of one station by its provider id."""
    provider = getattr(request.app.state, "aqi_provider", None)
    if provider is None or not isinstance(provider, StationDirectory):
        return _not_initialized("AQI provider")

    result = await provider.feed_by_id(station_id)
    if isinstance(result, Err):
        return _bad_gateway(result.message)
    return JSONResponse(content=feed_to_dict(result.value))
