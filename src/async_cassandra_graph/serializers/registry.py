"""
Serializer registry for GraphSON extension codecs.

The registry is an immutable overlay computed once: the driver's base
codec table, minus the excluded tags, plus the extension codecs. Writers
look codecs up by the Python type of the value, readers by wire tag.
"""

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Type

from .base import GraphSONCodec
from .batch import TraversalBatchCodec
from .predicate import TINKERPOP_OPERATORS, PredicateCodec
from .scalar_types import DistanceCodec, scalar_codecs
from .structure import EdgeCodec

# The driver's own edge type would shadow TinkerPop's Edge in traversal results.
EXCLUDED_BASE_TAGS: FrozenSet[str] = frozenset({"g:Edge"})


class SerializerRegistry:
    """
    Immutable lookup table of GraphSON codecs.

    Codecs given later win when two of them share a tag or a target type.
    """

    def __init__(self, codecs: Iterable[GraphSONCodec]) -> None:
        by_tag: Dict[str, GraphSONCodec] = {}
        for codec in codecs:
            by_tag[codec.key] = codec

        by_type: Dict[Type, GraphSONCodec] = {}
        for codec in by_tag.values():
            for target_type in codec.target_types:
                by_type[target_type] = codec

        self._by_tag: Mapping[str, GraphSONCodec] = MappingProxyType(by_tag)
        self._by_type: Mapping[Type, GraphSONCodec] = MappingProxyType(by_type)

    @property
    def codecs(self) -> Mapping[str, GraphSONCodec]:
        """Read-only mapping of wire tag to codec."""
        return self._by_tag

    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset(self._by_tag)

    def find_encoder(self, value: Any) -> Optional[GraphSONCodec]:
        """
        Find the codec for a value.

        The value's class hierarchy is walked from the most specific type,
        so subclasses of a registered type share its codec unless they have
        one of their own.

        Args:
            value: The value to serialize

        Returns:
            The codec or None if the value has no extension encoding
        """
        for klass in type(value).__mro__:
            codec = self._by_type.get(klass)
            if codec is not None:
                return codec if codec.can_encode(value) else None
        return None

    def find_decoder(self, tag: str) -> Optional[GraphSONCodec]:
        """Find the codec registered for a wire tag."""
        return self._by_tag.get(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __len__(self) -> int:
        return len(self._by_tag)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self._by_tag)!r})"


def base_codecs() -> Tuple[GraphSONCodec, ...]:
    """Codec table of the host driver: scalar types plus its edge type."""
    return scalar_codecs() + (EdgeCodec(),)


def extension_codecs(
    excluded_operators: Iterable[str] = TINKERPOP_OPERATORS,
) -> Tuple[GraphSONCodec, ...]:
    """Codecs added on top of the driver's table for traversal queries."""
    return (
        DistanceCodec(),
        PredicateCodec(excluded_operators),
        TraversalBatchCodec(),
    )


def build_registry(
    excluded_operators: Iterable[str] = TINKERPOP_OPERATORS,
    excluded_tags: Iterable[str] = EXCLUDED_BASE_TAGS,
    base: Optional[Iterable[GraphSONCodec]] = None,
) -> SerializerRegistry:
    """
    Build the registry used by traversal readers and writers.

    Args:
        excluded_operators: Predicate operators left to gremlinpython
        excluded_tags: Base table tags to leave out
        base: Base codec table, the driver's one when not given

    Returns:
        Registry with the base codecs (minus excluded tags) and extensions
    """
    excluded = frozenset(excluded_tags)
    if base is None:
        base = base_codecs()
    kept = [codec for codec in base if codec.key not in excluded]
    return SerializerRegistry(kept + list(extension_codecs(excluded_operators)))
