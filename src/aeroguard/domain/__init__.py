from .coordinates import Coordinate
from .enums import AqiLevel, ResponseStatus
from .results import Err, Ok, ProviderResult
from .stations import CandidateStation, SearchResult, StationFeed

__all__ = [
    "Coordinate",
    "AqiLevel",
    "ResponseStatus",
    "Ok",
    "Err",
    "ProviderResult",
    "CandidateStation",
    "SearchResult",
    "StationFeed",
]
