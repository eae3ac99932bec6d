from enum import Enum


class ResponseStatus(Enum):
    """Status field of a WAQI response envelope."""

    OK = "ok"
    ERROR = "error"


class AqiLevel(Enum):
    """US EPA health category for an AQI value."""

    GOOD = "good"
    MODERATE = "moderate"
    SENSITIVE = "sensitive"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very_unhealthy"
    HAZARDOUS = "hazardous"

    @classmethod
    def from_aqi(cls, aqi: float) -> "AqiLevel":
        if aqi <= 50:
            return cls.GOOD
        if aqi <= 100:
            return cls.MODERATE
        if aqi <= 150:
            return cls.SENSITIVE
        if aqi <= 200:
            return cls.UNHEALTHY
        if aqi <= 300:
            return cls.VERY_UNHEALTHY
        return cls.HAZARDOUS
