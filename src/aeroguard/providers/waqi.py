"""Client for the World Air Quality Index API (https://aqicn.org/json-api/doc/)."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from aeroguard.domain.enums import ResponseStatus
from aeroguard.domain.results import Err, Ok, ProviderResult
from aeroguard.domain.stations import CandidateStation, SearchResult, StationFeed
from aeroguard.services.geo import BoundingBox

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CANDIDATE = TypeAdapter(CandidateStation)
_SEARCH_RESULTS = TypeAdapter(list[SearchResult])
_FEED = TypeAdapter(StationFeed)


class _Envelope(BaseModel):
    status: str
    data: Any = None


class WaqiClient:
    """Asynchronous WAQI client returning ``Ok``/``Err`` results.

    The ``httpx.AsyncClient`` is owned by the caller, which is responsible
    for closing it. Transport errors, non-"ok" statuses and payloads that do
    not match the expected shape all come back as ``Err``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        token: str,
        base_url: str = "https://api.waqi.info",
    ) -> None:
        self._http = http
        self._token = token
        self._base_url = base_url.rstrip("/")

    async def stations_in_bounds(
        self, box: BoundingBox
    ) -> ProviderResult[list[CandidateStation]]:
        path = "map/bounds/"
        result = await self._fetch(path, {"latlng": box.as_latlng()})
        if isinstance(result, Err):
            return result
        if not isinstance(result.value, list):
            logger.warning("WAQI payload from %s is not a station list", path)
            return Err("unexpected response shape")

        candidates: list[CandidateStation] = []
        for entry in result.value:
            try:
                candidates.append(_CANDIDATE.validate_python(entry))
            except ValidationError as exc:
                logger.debug("Skipping bounds entry %r: %d errors", entry, exc.error_count())
        return Ok(candidates)

    async def feed_by_id(self, station_id: int) -> ProviderResult[StationFeed]:
        return await self._get(f"feed/@{station_id}/", _FEED)

    async def feed_by_geo(
        self, latitude: float, longitude: float
    ) -> ProviderResult[StationFeed]:
        return await self._get(f"feed/geo:{latitude};{longitude}/", _FEED)

    async def feed_here(self) -> ProviderResult[StationFeed]:
        """Feed for the station nearest to the caller's IP, as located by WAQI."""
        return await self._get("feed/here/", _FEED)

    async def search(self, keyword: str) -> ProviderResult[list[SearchResult]]:
        return await self._get("search/", _SEARCH_RESULTS, {"keyword": keyword})

    async def _get(
        self,
        path: str,
        adapter: TypeAdapter[T],
        params: dict[str, str] | None = None,
    ) -> ProviderResult[T]:
        result = await self._fetch(path, params)
        if isinstance(result, Err):
            return result

        try:
            return Ok(adapter.validate_python(result.value))
        except ValidationError as exc:
            logger.warning(
                "WAQI payload from %s has unexpected shape (%d errors)",
                path,
                exc.error_count(),
            )
            return Err("unexpected response shape")

    async def _fetch(
        self, path: str, params: dict[str, str] | None = None
    ) -> ProviderResult[Any]:
        """Request ``path`` and unwrap the ``data`` of an "ok" envelope."""
        url = f"{self._base_url}/{path}"
        query = {"token": self._token, **(params or {})}

        try:
            response = await self._http.get(url, params=query)
            response.raise_for_status()
            envelope = _Envelope.model_validate(response.json())
        except httpx.HTTPError as exc:
            logger.warning("WAQI request to %s failed: %s", path, exc)
            return Err(f"request failed: {exc}")
        except (ValueError, ValidationError) as exc:
            # json decode errors are ValueError subclasses
            logger.warning("WAQI response from %s is not a valid envelope: %s", path, exc)
            return Err("malformed response")

        if envelope.status != ResponseStatus.OK.value:
            message = envelope.data if isinstance(envelope.data, str) else envelope.status
            logger.warning("WAQI returned status %r for %s: %s", envelope.status, path, message)
            return Err(str(message))

        return Ok(envelope.data)
