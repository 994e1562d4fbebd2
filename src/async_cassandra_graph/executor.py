"""
Graph execution over a cassandra-driver session.

Wraps ``Session.execute_graph_async`` with async-cassandra's result handler,
so a plain driver session can back a
:class:`~async_cassandra_graph.remote_connection.GraphRemoteConnection`.
"""

import logging
from typing import Any, List

from async_cassandra.result import AsyncResultHandler
from cassandra.cluster import EXEC_PROFILE_GRAPH_DEFAULT
from cassandra.datastax.graph import GraphOptions
from cassandra.query import dict_factory

from .protocol import DEFAULT_PROTOCOL, SUPPORTED_PROTOCOLS, normalize_protocol

logger = logging.getLogger(__name__)


def resolve_protocol(protocol: Any) -> str:
    """
    Return the protocol the traversal readers and writers actually use.

    Unknown or missing protocols fall back to GraphSON 2, the same way
    query writers and row parsers do.
    """
    protocol = normalize_protocol(protocol)
    if protocol in SUPPORTED_PROTOCOLS:
        return protocol
    return DEFAULT_PROTOCOL


def build_graph_options(options: Any) -> GraphOptions:
    """
    Translate graph query options into the driver's ``GraphOptions``.

    The graph protocol is always set: left to the driver, a Core graph would
    be queried with GraphSON 3 while the query was written with GraphSON 2.
    """
    kwargs = {
        "graph_language": options.graph_language,
        "graph_protocol": resolve_protocol(options.graph_protocol).encode("utf-8"),
    }
    if options.graph_name is not None:
        kwargs["graph_name"] = options.graph_name
    if options.graph_source is not None:
        kwargs["graph_source"] = options.graph_source
    return GraphOptions(**kwargs)


class SessionGraphExecutor:
    """
    ``execute_graph`` implementation backed by a cassandra-driver Session.

    Rows are returned as dicts so the ``gremlin`` column can be decoded by
    the traversal readers instead of the driver's own graph row factory.
    """

    def __init__(self, session: Any) -> None:
        if not hasattr(session, "execute_graph_async") or not hasattr(
            session, "execution_profile_clone_update"
        ):
            raise ValueError(
                "Session must have 'execute_graph_async' and "
                "'execution_profile_clone_update' methods. "
                "Please use a cassandra-driver Session connected to DataStax Enterprise."
            )
        self.session = session

    def _execution_profile(self, options: Any) -> Any:
        base_profile = options.execution_profile or EXEC_PROFILE_GRAPH_DEFAULT
        overrides = {
            "graph_options": build_graph_options(options),
            "row_factory": dict_factory,
        }
        if options.timeout is not None:
            overrides["request_timeout"] = options.timeout
        return self.session.execution_profile_clone_update(base_profile, **overrides)

    async def execute_graph(self, query: str, parameters: Any, options: Any) -> List[Any]:
        """
        Execute a graph query and return all result rows.

        Args:
            query: GraphSON query text
            parameters: Query parameters (always None for traversals)
            options: Resolved graph query options

        Returns:
            List of rows, one dict per result

        Raises:
            asyncio.TimeoutError: If ``options.timeout`` elapses first
        """
        profile = self._execution_profile(options)
        logger.debug(f"Executing graph query on graph {options.graph_name!r}")

        response_future = self.session.execute_graph_async(
            query, parameters, execution_profile=profile
        )
        handler = AsyncResultHandler(response_future)
        result = await handler.get_result(timeout=options.timeout)
        return list(result.rows)
