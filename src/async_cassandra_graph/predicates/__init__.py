"""Search and geo predicates for DataStax Graph traversals."""

from . import geo, search
from .geo import GeoP, inside, unit
from .search import TextDistanceP

__all__ = [
    "geo",
    "search",
    "GeoP",
    "TextDistanceP",
    "inside",
    "unit",
]
