"""
Graph query options for traversal execution.

Options are immutable; merging returns a new instance and never touches
the caller's object. Fields left as ``None`` mean "use the default".
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .protocol import query_writer_factory, row_parser_factory

logger = logging.getLogger(__name__)

GRAPH_LANGUAGE_BYTECODE = "bytecode-json"


@dataclass(frozen=True)
class GraphQueryOptions:
    """
    Options sent with every traversal.

    ``graph_language`` is always ``bytecode-json`` once resolved: the
    connection only submits traversals, never Groovy scripts. ``timeout``
    (seconds) bounds each request; the execution profile's request timeout
    applies when it is not set.
    """

    graph_language: str = GRAPH_LANGUAGE_BYTECODE
    graph_name: Optional[str] = None
    graph_source: Optional[str] = None
    execution_profile: Optional[Any] = None
    graph_protocol: Optional[Union[str, bytes]] = None
    timeout: Optional[float] = None
    query_writer_factory: Callable[..., Any] = query_writer_factory
    row_parser_factory: Callable[..., Any] = row_parser_factory

    def merge(
        self, overrides: Union["GraphQueryOptions", Mapping[str, Any], None]
    ) -> "GraphQueryOptions":
        """
        Return a copy with the non-None values of ``overrides`` applied.

        Raises:
            TypeError: If a mapping holds an unknown option name
        """
        if overrides is None:
            return self
        if isinstance(overrides, GraphQueryOptions):
            values = {f.name: getattr(overrides, f.name) for f in fields(overrides)}
        else:
            known = {f.name for f in fields(self)}
            unknown = set(overrides) - known
            if unknown:
                raise TypeError(f"Unknown graph options: {', '.join(sorted(unknown))}")
            values = dict(overrides)

        changes: Dict[str, Any] = {k: v for k, v in values.items() if v is not None}
        return replace(self, **changes)


DEFAULT_GRAPH_OPTIONS = GraphQueryOptions()


def resolve_options(
    user_options: Union[GraphQueryOptions, Mapping[str, Any], None] = None,
) -> GraphQueryOptions:
    """
    Apply user options on top of the defaults and force the bytecode language.

    Args:
        user_options: Options object or mapping of option names

    Returns:
        The options to use for every request of a connection
    """
    if user_options is None:
        return DEFAULT_GRAPH_OPTIONS

    options = DEFAULT_GRAPH_OPTIONS.merge(user_options)
    if options.graph_language != GRAPH_LANGUAGE_BYTECODE:
        logger.debug(
            f"Replacing graph language {options.graph_language!r} with {GRAPH_LANGUAGE_BYTECODE!r}"
        )
        options = replace(options, graph_language=GRAPH_LANGUAGE_BYTECODE)
    return options
