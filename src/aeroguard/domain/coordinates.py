import math


class Coordinate:
    """An immutable (latitude, longitude) pair in decimal degrees."""

    __slots__ = ("_latitude", "_longitude")

    _latitude: float
    _longitude: float

    def __init__(self, latitude: float, longitude: float) -> None:
        object.__setattr__(self, "_latitude", self._validate_latitude(latitude))
        object.__setattr__(self, "_longitude", self._validate_longitude(longitude))

    # properties
    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Coordinate is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return (self._latitude, self._longitude) == (other._latitude, other._longitude)

    def __hash__(self) -> int:
        return hash((self._latitude, self._longitude))

    def __repr__(self) -> str:
        return f"Coordinate(latitude={self._latitude}, longitude={self._longitude})"

    def __str__(self) -> str:
        return f"({self._latitude}, {self._longitude})"

    # validation
    @staticmethod
    def _to_finite(value: float, field: str) -> float:
        if isinstance(value, bool):
            raise ValueError(f"{field} must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{field} must be a number") from exc
        if not math.isfinite(number):
            raise ValueError(f"{field} must be finite")
        return number

    @classmethod
    def _validate_latitude(cls, latitude: float) -> float:
        lat = cls._to_finite(latitude, "latitude")
        if not (-90.0 <= lat <= 90.0):
            raise ValueError("latitude must be between -90 and 90")
        return lat

    @classmethod
    def _validate_longitude(cls, longitude: float) -> float:
        lon = cls._to_finite(longitude, "longitude")
        if not (-180.0 <= lon <= 180.0):
            raise ValueError("longitude must be between -180 and 180")
        return lon
