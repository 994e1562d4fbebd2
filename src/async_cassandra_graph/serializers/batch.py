"""Codec writing a batch of traversals as a single list value."""

from typing import Any, Tuple

from ..types import TraversalBatch
from .base import GraphSONCodec


class TraversalBatchCodec(GraphSONCodec):
    """
    Serialize a :class:`TraversalBatch` as a list of bytecode.

    The key does not clash with TinkerPop or DataStax Graph tags; nothing is
    ever sent or received under it. GraphSON 3 writers tag the list as
    ``g:List``, GraphSON 2 writers emit a plain JSON array.
    """

    key = "client:batch"
    target_types: Tuple[type, ...] = (TraversalBatch,)

    def serialize(self, value: Any, writer: Any) -> Any:
        return writer.to_dict(list(value.items))

    def deserialize(self, value: Any, reader: Any) -> Any:
        return TraversalBatch(reader.to_object(value))
