"""
Geo predicates for DataStax Graph search indexes.

``inside()`` builds either a circle search (point plus radius) or a
cartesian polygon search. Radii are converted to degrees with the
:data:`unit` factors before being sent.
"""

import math
from numbers import Real
from typing import NamedTuple, Optional, Union

from cassandra.util import Point, Polygon
from gremlin_python.process.traversal import P

from ..types import Distance

EARTH_MEAN_RADIUS_KM = 6371.0087714

_DEGREES_TO_RADIANS = math.pi / 180
_DEGREES_TO_KM = _DEGREES_TO_RADIANS * EARTH_MEAN_RADIUS_KM
_KM_TO_DEGREES = 1 / _DEGREES_TO_KM
_KM_TO_MILES = 0.621371192
_MILES_TO_KM = 1 / _KM_TO_MILES


class GeoUnit(NamedTuple):
    """Length units accepted by :func:`inside`, expressed in degrees."""

    miles: float
    kilometers: float
    meters: float
    degrees: float


unit = GeoUnit(
    miles=_MILES_TO_KM * _KM_TO_DEGREES,
    kilometers=_KM_TO_DEGREES,
    meters=_KM_TO_DEGREES / 1000,
    degrees=1.0,
)


class GeoP(P):
    """A geometry predicate (``inside`` or ``insideCartesian``)."""

    def __init__(self, operator: str, value: Union[Distance, Polygon]) -> None:
        super().__init__(operator, value)


def _validate_unit(value: Optional[Real]) -> None:
    if not value:
        return
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError("Unit must be a number")
    if value not in unit:
        raise TypeError("Unit value is not part of the unit member")


def _to_degrees(radius: Optional[Real], length_unit: Optional[Real]) -> Real:
    if radius is None:
        raise TypeError("radius must be a number")
    return radius * (length_unit or 1)


def inside(
    center_or_shape: Union[Point, Polygon],
    radius: Optional[Real] = None,
    unit: Optional[Real] = None,
) -> GeoP:
    """
    Match values lying inside a circle or a polygon.

    Args:
        center_or_shape: Center of the circle, or the polygon to look into
        radius: Radius of the circle (required with a point)
        unit: One of the :data:`unit` members, defaults to degrees

    Returns:
        The geo predicate

    Raises:
        TypeError: If the shape is neither a Point nor a Polygon, or the
            radius/unit are not valid
    """
    if isinstance(center_or_shape, Point):
        _validate_unit(unit)
        return GeoP("inside", Distance(center_or_shape, _to_degrees(radius, unit)))
    if not isinstance(center_or_shape, Polygon):
        raise TypeError("inside() only supports Polygons or Points with distance")
    return GeoP("insideCartesian", center_or_shape)
