from .base import AqiProvider, StationDirectory
from .waqi import WaqiClient

__all__ = ["AqiProvider", "StationDirectory", "WaqiClient"]
