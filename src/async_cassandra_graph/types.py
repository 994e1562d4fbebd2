"""
Domain value types that have no counterpart in the driver or gremlinpython.

These are the values the GraphSON extensions know how to carry: geo search
circles, arbitrary precision integers and batches of traversals.
"""

import math
import re
from numbers import Real
from typing import Any, Iterator, Sequence, Tuple

from cassandra.util import Point

_DISTANCE_PATTERN = re.compile(
    r"^\s*DISTANCE\s*\(\s*\(\s*(?P<x>\S+)\s+(?P<y>\S+)\s*\)\s+(?P<radius>[^\s)]+)\s*\)\s*$"
)


def format_number(value: Any) -> str:
    """Render a number the way the server prints it (no trailing ``.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Distance:
    """
    A circle in a two-dimensional XY plane.

    Represented by its center point and radius, it is used as search
    criteria to determine whether another geospatial object lies within a
    circular area. The radius is expressed in degrees.
    """

    __slots__ = ("_center", "_radius")

    def __init__(self, center: Point, radius: Real) -> None:
        if not isinstance(center, Point):
            raise TypeError("center must be an instance of Point")
        if isinstance(radius, bool) or not isinstance(radius, Real) or math.isnan(radius):
            raise TypeError("radius must be a number")
        if radius < 0:
            raise ValueError(f"radius must not be negative, got {radius}")

        object.__setattr__(self, "_center", center)
        object.__setattr__(self, "_radius", radius)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def center(self) -> Point:
        """The center point."""
        return self._center

    @property
    def radius(self) -> Real:
        """The radius of the circle, in degrees."""
        return self._radius

    @classmethod
    def from_string(cls, value: str) -> "Distance":
        """
        Parse the ``DISTANCE((x y) radius)`` representation.

        Raises:
            ValueError: If the text is not a distance
        """
        match = _DISTANCE_PATTERN.match(value)
        if match is None:
            raise ValueError(f"Invalid distance: '{value}'")
        return cls(
            Point(float(match.group("x")), float(match.group("y"))),
            float(match.group("radius")),
        )

    def __str__(self) -> str:
        return "DISTANCE(({} {}) {})".format(
            format_number(self._center.x),
            format_number(self._center.y),
            format_number(self._radius),
        )

    def __repr__(self) -> str:
        return f"Distance({self._center!r}, {self._radius!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distance):
            return NotImplemented
        return (self._center.x, self._center.y, self._radius) == (
            other._center.x,
            other._center.y,
            other._radius,
        )

    def __hash__(self) -> int:
        return hash((self._center.x, self._center.y, self._radius))


class BigInteger(int):
    """An integer sent as ``gx:BigInteger`` instead of a 32/64-bit number."""

    __str__ = int.__repr__

    def __repr__(self) -> str:
        return f"BigInteger({int(self)})"


class TraversalBatch:
    """
    Ordered group of traversals submitted as a single request.

    Each item is an independent traversal (or bytecode); the server applies
    them together, which allows several mutations to be sent atomically.
    """

    __slots__ = ("items",)

    def __init__(self, items: Sequence[Any]) -> None:
        if not isinstance(items, (list, tuple)):
            raise TypeError("Batch parameter must be a list of traversals")
        if not items:
            raise ValueError("Batch must contain at least one traversal")
        self.items: Tuple[Any, ...] = tuple(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"TraversalBatch({len(self.items)} traversals)"
