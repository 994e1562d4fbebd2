"""
GraphSON codecs for DataStax Graph extension types.

Provides the scalar, predicate and batch codecs and the registry that
overlays them on the driver's base table.
"""

from .base import TYPE_KEY, VALUE_KEY, GraphSONCodec, StringBasedCodec, typed_value
from .registry import (
    EXCLUDED_BASE_TAGS,
    SerializerRegistry,
    base_codecs,
    build_registry,
    extension_codecs,
)

__all__ = [
    "TYPE_KEY",
    "VALUE_KEY",
    "GraphSONCodec",
    "StringBasedCodec",
    "typed_value",
    "EXCLUDED_BASE_TAGS",
    "SerializerRegistry",
    "base_codecs",
    "build_registry",
    "extension_codecs",
]
