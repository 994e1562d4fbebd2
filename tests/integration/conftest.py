"""
Pytest configuration for integration tests.

These tests need a DataStax Enterprise node with graph enabled. They are
skipped when none can be reached.
"""

import os
import socket
import uuid

import pytest
import pytest_asyncio
from cassandra.cluster import EXEC_PROFILE_GRAPH_DEFAULT, Cluster, GraphExecutionProfile
from cassandra.datastax.graph import GraphOptions, graph_object_row_factory
from cassandra.datastax.graph import GraphProtocol as DriverGraphProtocol

from async_cassandra_graph import GraphRemoteConnection, SessionGraphExecutor


def _contact_points():
    contact_points = os.environ.get("CASSANDRA_CONTACT_POINTS", "localhost").split(",")
    return [cp.strip() for cp in contact_points]


def _port():
    return int(os.environ.get("CASSANDRA_PORT", "9042"))


def _node_available():
    if os.environ.get("SKIP_INTEGRATION_TESTS", "").lower() in ("1", "true", "yes"):
        return False
    for contact_point in _contact_points():
        try:
            with socket.create_connection((contact_point, _port()), timeout=2):
                return True
        except OSError:
            continue
    return False


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when no graph node is reachable."""
    if _node_available():
        return
    skip = pytest.mark.skip(reason=f"DataStax Graph is not available on {_contact_points()}")
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def graph_session():
    """Driver session with a throwaway graph created for the test run."""
    graph_name = f"test_graph_{uuid.uuid4().hex[:8]}"
    cluster = Cluster(
        contact_points=_contact_points(),
        port=_port(),
        execution_profiles={
            EXEC_PROFILE_GRAPH_DEFAULT: GraphExecutionProfile(
                graph_options=GraphOptions(graph_name=graph_name),
                row_factory=graph_object_row_factory,
            )
        },
    )
    session = cluster.connect()

    session.execute_graph(
        f"system.graph('{graph_name}').ifNotExists().create()",
        execution_profile=GraphExecutionProfile(
            graph_options=GraphOptions(graph_source="system")
        ),
    )
    session.execute_graph("schema.config().option('graph.schema_mode').set('Development')")
    session.execute_graph("schema.config().option('graph.allow_scan').set('true')")

    try:
        yield session, graph_name
    finally:
        session.execute_graph(
            f"system.graph('{graph_name}').drop()",
            execution_profile=GraphExecutionProfile(
                graph_options=GraphOptions(graph_source="system")
            ),
        )
        cluster.shutdown()


@pytest_asyncio.fixture
async def graph_connection(graph_session):
    """Remote connection to the test graph."""
    session, graph_name = graph_session
    executor = SessionGraphExecutor(session)
    yield GraphRemoteConnection(
        executor,
        {"graph_name": graph_name, "graph_protocol": DriverGraphProtocol.GRAPHSON_2_0},
    )
