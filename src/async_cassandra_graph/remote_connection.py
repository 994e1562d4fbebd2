"""
Remote connection running traversals through a graph-capable client.

The connection renders bytecode to GraphSON, hands it to the client's
``execute_graph`` and decodes the returned rows into traversers. It keeps no
per-request state, so concurrent submissions on one instance are safe.

It is a gremlinpython ``RemoteConnection``: a traversal source bound to it
with :func:`traversal_source` runs its traversals remotely, either with
``promise()`` from asyncio code or with ``toList()`` outside an event loop.
"""

import asyncio
import concurrent.futures
import logging
from typing import Any, List, Mapping, Optional, Union

from gremlin_python.driver.remote_connection import RemoteConnection, RemoteTraversal
from gremlin_python.process.anonymous_traversal import traversal as anonymous_traversal
from gremlin_python.process.graph_traversal import GraphTraversalSource
from gremlin_python.process.traversal import Traversal, TraversalStrategies, Traverser
from gremlin_python.structure.graph import Graph

from .options import GraphQueryOptions, resolve_options

logger = logging.getLogger(__name__)


class GraphRemoteConnection(RemoteConnection):
    """
    Executes traversals against DataStax Graph.

    The client is anything with an awaitable
    ``execute_graph(query, parameters, options)`` returning rows, such as
    :class:`~async_cassandra_graph.executor.SessionGraphExecutor`.
    """

    def __init__(
        self,
        client: Any,
        options: Union[GraphQueryOptions, Mapping[str, Any], None] = None,
    ) -> None:
        """
        Initialize the connection.

        Args:
            client: Object exposing ``execute_graph``
            options: Graph options; the graph language is always forced
                to bytecode

        Raises:
            ValueError: If the client cannot execute graph queries
        """
        if not hasattr(client, "execute_graph"):
            raise ValueError("Client must have an 'execute_graph' method.")

        self.client = client
        self.options = resolve_options(options)
        super().__init__(None, self.options.graph_source or "g")

    async def submit_traversal(self, bytecode: Any) -> RemoteTraversal:
        """
        Run a traversal and return its traversers.

        Args:
            bytecode: Bytecode or traversal to run (a list runs as a batch)

        Returns:
            Remote traversal over the decoded traversers
        """
        query = self.options.query_writer_factory(self.options.graph_protocol)(bytecode)
        logger.debug(f"Submitting graph traversal: {query}")

        # Errors from the client propagate untouched
        rows = await self.client.execute_graph(query, None, self.options)

        parse = self.options.row_parser_factory(self.options.graph_protocol)
        traversers = [Traverser(result.object, result.bulk) for result in map(parse, rows)]
        return RemoteTraversal(iter(traversers))

    def submit_async(self, bytecode: Any, *args: Any, **kwargs: Any) -> concurrent.futures.Future:
        """
        Schedule a traversal on the running event loop.

        Used by gremlinpython's ``Traversal.promise()``; the returned future
        resolves to a :class:`RemoteTraversal`.

        Raises:
            RuntimeError: If no event loop is running in this thread
        """
        loop = asyncio.get_running_loop()
        return asyncio.run_coroutine_threadsafe(self.submit_traversal(bytecode), loop)

    def submit(self, bytecode: Any, *args: Any, **kwargs: Any) -> RemoteTraversal:
        """
        Run a traversal to completion, blocking the calling thread.

        Used by gremlinpython's ``toList()``/``next()``. Inside an event
        loop use ``promise()`` or :meth:`to_list` instead.

        Raises:
            RuntimeError: If called from a running event loop
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.submit_traversal(bytecode))
        raise RuntimeError(
            "Blocking traversal execution is not possible inside a running event loop. "
            "Use 'await connection.to_list(traversal)' or traversal.promise()."
        )

    def is_closed(self) -> bool:
        return False

    async def to_list(self, traversal: Any) -> List[Any]:
        """
        Run a traversal and return its results as a flat list.

        A traverser with a bulk of ``n`` contributes its value ``n`` times.
        """
        bytecode = traversal.bytecode if isinstance(traversal, Traversal) else traversal
        remote = await self.submit_traversal(bytecode)

        results: List[Any] = []
        for traverser in remote.traversers:
            results.extend([traverser.object] * traverser.bulk)
        return results

    async def execute(self, traversal: Any, options: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """Run a traversal with per-call option overrides."""
        if options is None:
            return await self.to_list(traversal)
        return await GraphRemoteConnection(self.client, self.options.merge(options)).to_list(
            traversal
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(graph_name={self.options.graph_name!r})"


def traversal_source(
    client: Any = None,
    options: Union[GraphQueryOptions, Mapping[str, Any], None] = None,
) -> GraphTraversalSource:
    """
    Create a traversal source.

    Args:
        client: Object exposing ``execute_graph``, or a
            :class:`GraphRemoteConnection`. Without one the source only
            builds bytecode.
        options: Graph options for the connection created for ``client``

    Returns:
        A gremlinpython ``GraphTraversalSource``, bound to DataStax Graph
        when a client is given
    """
    if client is None:
        return GraphTraversalSource(Graph(), TraversalStrategies())
    if isinstance(client, GraphRemoteConnection):
        connection = client
        if options is not None:
            connection = GraphRemoteConnection(client.client, client.options.merge(options))
    else:
        connection = GraphRemoteConnection(client, options)
    return anonymous_traversal().with_remote(connection)
