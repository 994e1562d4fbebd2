"""
Codecs for scalar types carried by DataStax Graph.

Most of them share the string round-trip shape; timestamps and blobs have
their own wire representation (ISO-8601 and base64).
"""

import base64
import binascii
import ipaddress
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Tuple
from uuid import UUID

from cassandra.util import Date, LineString, Point, Polygon, Time
from gremlin_python.statics import long

from ..types import BigInteger, Distance
from .base import GraphSONCodec, StringBasedCodec, typed_value

_FRACTION = re.compile(r"\.(\d+)")


def _normalize_fraction(value: str) -> str:
    # fromisoformat() only takes microsecond precision
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)


class UUIDCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("g:UUID", UUID)


class Int64Codec(StringBasedCodec):
    """64-bit integers, marked with gremlinpython's ``long``."""

    def __init__(self) -> None:
        super().__init__("g:Int64", long, lambda text: long(int(text)))


class BigDecimalCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("gx:BigDecimal", Decimal)


class BigIntegerCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("gx:BigInteger", BigInteger, lambda text: BigInteger(int(text)))


class InetAddressCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__(
            "gx:InetAddress",
            (ipaddress.IPv4Address, ipaddress.IPv6Address),
            ipaddress.ip_address,
        )


class LocalDateCodec(StringBasedCodec):
    """Dates without time zone, as ``YYYY-MM-DD``."""

    def __init__(self) -> None:
        super().__init__("gx:LocalDate", (date, Date), date.fromisoformat)

    def can_encode(self, value: Any) -> bool:
        return isinstance(value, (date, Date)) and not isinstance(value, datetime)

    def to_string(self, value: Any) -> str:
        if isinstance(value, Date):
            value = (
                value.date()
                if hasattr(value, "date")
                else date.fromordinal(value.days_from_epoch + 719163)
            )
        return value.isoformat()


class LocalTimeCodec(StringBasedCodec):
    """
    Time of day, as ``HH:MM:SS[.fraction]``.

    Values with more than microsecond precision are read back as the
    driver's nanosecond ``Time``, the others as ``datetime.time``.
    """

    def __init__(self) -> None:
        super().__init__("gx:LocalTime", (time, Time), self._parse_time)

    @staticmethod
    def _parse_time(text: str) -> Any:
        match = _FRACTION.search(text)
        if match is not None and len(match.group(1)) > 6:
            # Time() reads at most nanoseconds
            return Time(_FRACTION.sub(lambda m: "." + m.group(1)[:9], text, count=1))
        return time.fromisoformat(_normalize_fraction(text))

    def to_string(self, value: Any) -> str:
        if isinstance(value, Time):
            # nanosecond precision
            return str(value)
        return value.isoformat()


class InstantCodec(GraphSONCodec):
    """
    Timestamps, as ISO-8601 UTC strings (``2017-01-01T10:00:00Z``).

    Naive datetimes are taken to be UTC; decoded values are always aware.
    """

    key = "gx:Instant"
    target_types: Tuple[type, ...] = (datetime,)

    def serialize(self, value: Any, writer: Any) -> Any:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return typed_value(self.key, value.isoformat().replace("+00:00", "Z"))

    def deserialize(self, value: Any, reader: Any) -> Any:
        text = _normalize_fraction(str(value).replace("Z", "+00:00"))
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class BlobCodec(GraphSONCodec):
    """Binary data, as a base64 string."""

    key = "dse:Blob"
    target_types: Tuple[type, ...] = (bytes, bytearray)

    def serialize(self, value: Any, writer: Any) -> Any:
        return typed_value(self.key, base64.b64encode(bytes(value)).decode("ascii"))

    def deserialize(self, value: Any, reader: Any) -> Any:
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 blob: {value!r}") from e


class PointCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("dse:Point", Point, Point.from_wkt)


class LineStringCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("dse:LineString", LineString, LineString.from_wkt)


class PolygonCodec(StringBasedCodec):
    def __init__(self) -> None:
        super().__init__("dse:Polygon", Polygon, Polygon.from_wkt)


class DistanceCodec(StringBasedCodec):
    """Geo search circles, as ``DISTANCE((x y) radius)``."""

    def __init__(self) -> None:
        super().__init__("dse:Distance", Distance, Distance.from_string)


def scalar_codecs() -> Tuple[GraphSONCodec, ...]:
    """Build one instance of every scalar codec shipped with the driver."""
    return (
        UUIDCodec(),
        Int64Codec(),
        BigDecimalCodec(),
        BigIntegerCodec(),
        InetAddressCodec(),
        LocalDateCodec(),
        LocalTimeCodec(),
        InstantCodec(),
        BlobCodec(),
        PointCodec(),
        LineStringCodec(),
        PolygonCodec(),
    )
