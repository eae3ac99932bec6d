"""Station records as delivered by the WAQI API.

Field aliases follow the provider's JSON keys (``idx``, ``uid``,
``dominentpol`` and so on); attribute names are the ones the rest of the
package uses.
"""

import math
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aeroguard.domain.coordinates import Coordinate
from aeroguard.domain.enums import AqiLevel

_MISSING_READINGS = {"", "-"}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() in _MISSING_READINGS:
        return None
    return value


def _reading_as_text(value: Any) -> str | None:
    value = _blank_to_none(value)
    return None if value is None else str(value)


class _ProviderModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Pollutant(_ProviderModel):
    v: float


class Attribution(_ProviderModel):
    name: str
    url: str = ""
    logo: str | None = None


class City(_ProviderModel):
    geo: tuple[float, float]
    name: str
    url: str = ""


class FeedTime(_ProviderModel):
    s: str | None = None
    tz: str | None = None
    v: int | None = None
    iso: datetime | None = None


class ForecastDay(_ProviderModel):
    day: date
    avg: float
    max: float
    min: float


class Forecast(_ProviderModel):
    daily: dict[str, list[ForecastDay]] = Field(default_factory=dict)


class StationFeed(_ProviderModel):
    """Full feed for one monitoring station."""

    station_id: int = Field(alias="idx")
    aqi: int | None = None
    city: City
    dominant_pollutant: str | None = Field(default=None, alias="dominentpol")
    iaqi: dict[str, Pollutant] = Field(default_factory=dict)
    time: FeedTime = Field(default_factory=FeedTime)
    attributions: list[Attribution] = Field(default_factory=list)
    forecast: Forecast | None = None

    @field_validator("aqi", mode="before")
    @classmethod
    def round_reading(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                return value
        if isinstance(value, float) and math.isfinite(value):
            return round(value)
        return value

    @field_validator("dominant_pollutant", mode="before")
    @classmethod
    def missing_reading_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def name(self) -> str:
        return self.city.name

    @property
    def coordinate(self) -> Coordinate:
        lat, lon = self.city.geo
        return Coordinate(lat, lon)

    @property
    def updated_at(self) -> datetime | None:
        return self.time.iso

    @property
    def level(self) -> AqiLevel | None:
        if self.aqi is None:
            return None
        return AqiLevel.from_aqi(self.aqi)

    @property
    def sub_indices(self) -> dict[str, float]:
        return {code: pollutant.v for code, pollutant in self.iaqi.items()}


class StationLabel(_ProviderModel):
    name: str
    time: str | None = None


class CandidateStation(_ProviderModel):
    """A station returned by the bounding-box query, before its feed is fetched."""

    station_id: int = Field(alias="uid")
    latitude: float = Field(alias="lat")
    longitude: float = Field(alias="lon")
    aqi: str | None = None
    station: StationLabel | None = None

    @field_validator("aqi", mode="before")
    @classmethod
    def missing_reading_to_none(cls, value: Any) -> Any:
        return _reading_as_text(value)

    @property
    def name(self) -> str | None:
        return self.station.name if self.station else None


class SearchTime(_ProviderModel):
    tz: str | None = None
    stime: str | None = None
    vtime: int | None = None


class SearchStation(_ProviderModel):
    name: str
    geo: tuple[float, float]
    url: str = ""


class SearchResult(_ProviderModel):
    """A keyword search hit."""

    station_id: int = Field(alias="uid")
    aqi: str | None = None
    time: SearchTime = Field(default_factory=SearchTime)
    station: SearchStation

    @field_validator("aqi", mode="before")
    @classmethod
    def missing_reading_to_none(cls, value: Any) -> Any:
        return _reading_as_text(value)

    @property
    def name(self) -> str:
        return self.station.name
