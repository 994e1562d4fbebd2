#!/usr/bin/env python3
"""
Basic example of running Gremlin traversals with async-cassandra-graph.

This example demonstrates:
- Wrapping a driver session with SessionGraphExecutor
- Submitting traversals through GraphRemoteConnection
- Writing geo values and searching with geo/search predicates
- Submitting several mutations as one batch
- Binding a traversal source to the connection and using promise()

How to run:
-----------
1. Against a local DataStax Enterprise node with graph enabled:
   python examples/graph_traversal_basic.py

2. With custom contact points:
   CASSANDRA_CONTACT_POINTS=dse.example.com python examples/graph_traversal_basic.py

Environment variables:
- CASSANDRA_CONTACT_POINTS: Comma-separated list of contact points (default: localhost)
- CASSANDRA_PORT: Port number (default: 9042)
- GRAPH_NAME: Graph to run against (default: graph_example)
"""

import asyncio
import logging
import os

from cassandra.cluster import Cluster
from cassandra.util import Point

from async_cassandra_graph import (
    GraphRemoteConnection,
    SessionGraphExecutor,
    render_query,
    traversal_source,
)
from async_cassandra_graph.predicates import geo, search

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def add_places(connection, g):
    """Create a few place vertices in a single batch."""
    places = [
        ("Paris", Point(2.35, 48.85)),
        ("London", Point(-0.12, 51.5)),
        ("Madison", Point(-89.4, 43.07)),
    ]
    batch = [
        g.addV("place").property("name", name).property("location", location)
        for name, location in places
    ]

    logger.info(f"Batch query: {render_query(batch)}")
    await connection.to_list(batch)
    logger.info(f"Added {len(places)} places")


async def search_places(connection, g):
    """Look places up with search and geo predicates."""
    # 500 km around Paris
    nearby = await connection.to_list(
        g.V()
        .has("place", "location", geo.inside(Point(2.35, 48.85), 500, geo.unit.kilometers))
        .values("name")
    )
    logger.info(f"Places near Paris: {nearby}")

    by_prefix = await connection.to_list(
        g.V().has("place", "name", search.prefix("Ma")).values("name")
    )
    logger.info(f"Places starting with 'Ma': {by_prefix}")


async def count_places(connection):
    """Run a traversal from a source bound to the connection."""
    g = traversal_source(connection)

    count = await asyncio.wrap_future(g.V().hasLabel("place").count().promise(lambda t: t.next()))
    logger.info(f"Total places: {count}")


async def main():
    """Run graph traversal examples."""
    contact_points = os.environ.get("CASSANDRA_CONTACT_POINTS", "localhost").split(",")
    port = int(os.environ.get("CASSANDRA_PORT", "9042"))
    graph_name = os.environ.get("GRAPH_NAME", "graph_example")

    logger.info(f"Connecting to DataStax Graph at {contact_points}:{port}")

    cluster = Cluster(contact_points=[cp.strip() for cp in contact_points], port=port)
    session = cluster.connect()

    try:
        connection = GraphRemoteConnection(
            SessionGraphExecutor(session), {"graph_name": graph_name, "timeout": 30.0}
        )
        g = traversal_source()

        await add_places(connection, g)
        await search_places(connection, g)
        await count_places(connection)
    finally:
        cluster.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
