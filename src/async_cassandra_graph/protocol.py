"""
GraphSON protocol selection.

Builds one writer and one reader per supported graph protocol at import
time and picks the right pair for each request. GraphSON 2 is the default:
it is supported by every DataStax Graph release able to run traversals.
"""

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, NamedTuple, Optional, Union

from gremlin_python.structure.io import graphsonV2d0, graphsonV3d0

from .exceptions import UnsupportedProtocolError
from .serializers import TYPE_KEY, VALUE_KEY, SerializerRegistry, build_registry
from .serializers.predicate import TINKERPOP_OPERATORS
from .types import TraversalBatch

logger = logging.getLogger(__name__)

GREMLIN_COLUMN = "gremlin"


class GraphProtocol:
    """Graph protocol identifiers, as sent to the server."""

    GRAPHSON_1_0 = "graphson-1.0"
    GRAPHSON_2_0 = "graphson-2.0"
    GRAPHSON_3_0 = "graphson-3.0"


DEFAULT_PROTOCOL = GraphProtocol.GRAPHSON_2_0

# Predicate operators written with gremlinpython's own g:P, per protocol.
PREDICATE_EXCLUSIONS: Mapping = MappingProxyType(
    {
        GraphProtocol.GRAPHSON_2_0: TINKERPOP_OPERATORS,
        GraphProtocol.GRAPHSON_3_0: TINKERPOP_OPERATORS,
    }
)


class RowResult(NamedTuple):
    """A decoded result row: the value and how many times it repeats."""

    object: Any
    bulk: int = 1


class _RegistryWriterMixin:
    """Consults the extension registry before gremlinpython's serializers."""

    def __init__(self, registry: SerializerRegistry) -> None:
        super().__init__()
        self.registry = registry

    def to_dict(self, obj: Any) -> Any:
        codec = self.registry.find_encoder(obj)
        if codec is not None:
            return codec.serialize(obj, self)
        return super().to_dict(obj)


class _RegistryReaderMixin:
    """Consults the extension registry before gremlinpython's deserializers."""

    def __init__(self, registry: SerializerRegistry) -> None:
        super().__init__()
        self.registry = registry

    def to_object(self, obj: Any) -> Any:
        if isinstance(obj, dict) and TYPE_KEY in obj and VALUE_KEY in obj:
            codec = self.registry.find_decoder(obj[TYPE_KEY])
            if codec is not None:
                return codec.deserialize(obj[VALUE_KEY], self)
        # Unknown tags come back as the tagged dict itself
        return super().to_object(obj)


class GraphSON2Writer(_RegistryWriterMixin, graphsonV2d0.GraphSONWriter):
    pass


class GraphSON3Writer(_RegistryWriterMixin, graphsonV3d0.GraphSONWriter):
    pass


class GraphSON2Reader(_RegistryReaderMixin, graphsonV2d0.GraphSONReader):
    pass


class GraphSON3Reader(_RegistryReaderMixin, graphsonV3d0.GraphSONReader):
    pass


def normalize_protocol(protocol: Union[str, bytes, None]) -> Optional[str]:
    """Return the protocol as text; the driver's own constants are bytes."""
    if isinstance(protocol, (bytes, bytearray)):
        return protocol.decode("utf-8")
    return protocol


_WRITERS: Mapping = MappingProxyType(
    {
        GraphProtocol.GRAPHSON_2_0: GraphSON2Writer(
            build_registry(PREDICATE_EXCLUSIONS[GraphProtocol.GRAPHSON_2_0])
        ),
        GraphProtocol.GRAPHSON_3_0: GraphSON3Writer(
            build_registry(PREDICATE_EXCLUSIONS[GraphProtocol.GRAPHSON_3_0])
        ),
    }
)

_READERS: Mapping = MappingProxyType(
    {
        GraphProtocol.GRAPHSON_2_0: GraphSON2Reader(
            build_registry(PREDICATE_EXCLUSIONS[GraphProtocol.GRAPHSON_2_0])
        ),
        GraphProtocol.GRAPHSON_3_0: GraphSON3Reader(
            build_registry(PREDICATE_EXCLUSIONS[GraphProtocol.GRAPHSON_3_0])
        ),
    }
)

SUPPORTED_PROTOCOLS: FrozenSet[str] = frozenset(_WRITERS)


def select_writer(protocol: Union[str, bytes, None] = None) -> Any:
    """Get the writer for a protocol, falling back to GraphSON 2."""
    return _WRITERS.get(normalize_protocol(protocol), _WRITERS[DEFAULT_PROTOCOL])


def select_reader(protocol: Union[str, bytes, None] = None) -> Any:
    """Get the reader for a protocol, falling back to GraphSON 2."""
    return _READERS.get(normalize_protocol(protocol), _READERS[DEFAULT_PROTOCOL])


def render_query(traversal: Any, protocol: Union[str, bytes, None] = None) -> str:
    """
    Return the GraphSON text of a traversal.

    Args:
        traversal: A traversal, bytecode, or a list of them (sent as a batch)
        protocol: ``graphson-2.0`` (default) or ``graphson-3.0``

    Returns:
        The query string to send

    Raises:
        UnsupportedProtocolError: If the protocol is not supported
    """
    protocol = normalize_protocol(protocol) or DEFAULT_PROTOCOL
    writer = _WRITERS.get(protocol)
    if writer is None:
        raise UnsupportedProtocolError(protocol)

    if isinstance(traversal, (list, tuple)):
        traversal = TraversalBatch(traversal)
    return writer.write_object(traversal)


def query_from_batch(batch: Any, protocol: Union[str, bytes, None] = None) -> str:
    """
    Return the GraphSON text of a batch of traversals.

    Raises:
        TypeError: If ``batch`` is not a list of traversals
        UnsupportedProtocolError: If the protocol is not supported
    """
    return render_query(TraversalBatch(batch), protocol)


def _row_payload(row: Any) -> Any:
    if isinstance(row, Mapping):
        return row[GREMLIN_COLUMN]
    return getattr(row, GREMLIN_COLUMN)


def parse_row(row: Any, protocol: Union[str, bytes, None] = None) -> RowResult:
    """
    Decode one result row of a traversal.

    Each row carries a JSON document ``{"result": ..., "bulk": n}`` in its
    ``gremlin`` column. The bulk is how many times the result repeats and
    defaults to 1.
    """
    reader = select_reader(protocol)
    payload = _row_payload(row)
    if isinstance(payload, (str, bytes, bytearray)):
        item = reader.to_object(json.loads(payload))
    else:
        item = reader.to_object(payload)
    return RowResult(item["result"], int(item.get("bulk") or 1))


def query_writer_factory(protocol: Union[str, bytes, None] = None) -> Callable[[Any], str]:
    """Get a function rendering traversals for a protocol (GraphSON 2 fallback)."""
    writer = select_writer(protocol)
    return writer.write_object


def row_parser_factory(protocol: Union[str, bytes, None] = None) -> Callable[[Any], RowResult]:
    """Get a function decoding result rows for a protocol (GraphSON 2 fallback)."""
    protocol = normalize_protocol(protocol)
    if protocol is not None and protocol not in _READERS:
        logger.debug(f"No reader for graph protocol {protocol}, using {DEFAULT_PROTOCOL}")
        protocol = DEFAULT_PROTOCOL

    def parse(row: Any) -> RowResult:
        return parse_row(row, protocol)

    return parse
