"""async-cassandra-graph - Gremlin traversals for DataStax Graph over asyncio."""

from importlib.metadata import PackageNotFoundError, version

from . import predicates
from .exceptions import AsyncCassandraGraphError, ConfigurationError, UnsupportedProtocolError
from .executor import SessionGraphExecutor
from .options import GRAPH_LANGUAGE_BYTECODE, GraphQueryOptions
from .protocol import GraphProtocol, parse_row, query_from_batch, render_query
from .remote_connection import GraphRemoteConnection, traversal_source
from .types import BigInteger, Distance, TraversalBatch

try:
    __version__ = version("async-cassandra-graph")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0+unknown"

query_from_traversal = render_query
graph_traversal_source = traversal_source

__all__ = [
    "AsyncCassandraGraphError",
    "ConfigurationError",
    "UnsupportedProtocolError",
    "GraphProtocol",
    "GraphQueryOptions",
    "GRAPH_LANGUAGE_BYTECODE",
    "GraphRemoteConnection",
    "SessionGraphExecutor",
    "BigInteger",
    "Distance",
    "TraversalBatch",
    "predicates",
    "parse_row",
    "query_from_batch",
    "query_from_traversal",
    "render_query",
    "traversal_source",
    "graph_traversal_source",
    "__version__",
]
