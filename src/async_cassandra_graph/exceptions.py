"""
Exception types raised by async-cassandra-graph.

Transport and server errors coming back from the driver are never wrapped;
these only cover mistakes made while configuring or using the bridge.
"""


class AsyncCassandraGraphError(Exception):
    """Base class for all async-cassandra-graph errors."""


class ConfigurationError(AsyncCassandraGraphError):
    """A codec, registry or writer was set up incorrectly."""


class UnsupportedProtocolError(AsyncCassandraGraphError, TypeError):
    """The requested graph protocol has no writer."""

    def __init__(self, protocol: object) -> None:
        self.protocol = protocol
        super().__init__(f"Protocol '{protocol}' not supported")
