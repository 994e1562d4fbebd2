"""
Unit tests for the GraphSON serializer registry.

What this tests:
---------------
1. Overlay of extension codecs on the base table
2. Default exclusion of the driver edge codec
3. Encoder lookup through the class hierarchy
4. Registry immutability

Why this matters:
----------------
- The driver edge type must not replace TinkerPop's in traversal results
- Registries are shared between concurrent requests
"""

from datetime import date, datetime
from uuid import uuid4

import pytest
from cassandra.util import Point
from gremlin_python.process.traversal import P

from async_cassandra_graph.predicates import geo, search
from async_cassandra_graph.serializers import (
    EXCLUDED_BASE_TAGS,
    SerializerRegistry,
    StringBasedCodec,
    base_codecs,
    build_registry,
    extension_codecs,
)
from async_cassandra_graph.serializers.predicate import MEMBERSHIP_OPERATORS, PredicateCodec
from async_cassandra_graph.types import BigInteger, Distance, TraversalBatch


class TestBuildRegistry:
    """Test the default traversal registry."""

    def test_edge_codec_excluded_by_default(self):
        """
        Test g:Edge is removed from the base table.

        What this tests:
        ---------------
        1. The base table carries g:Edge
        2. The built registry does not
        3. Everything else from the base table survives

        Why this matters:
        ----------------
        - Traversal results must decode edges with gremlinpython
        """
        registry = build_registry()
        base_tags = {codec.key for codec in base_codecs()}

        assert "g:Edge" in base_tags
        assert EXCLUDED_BASE_TAGS == frozenset({"g:Edge"})
        assert "g:Edge" not in registry
        assert base_tags - EXCLUDED_BASE_TAGS <= registry.tags

    def test_extension_codecs_added(self):
        registry = build_registry()

        for tag in ("dse:Distance", "dse:P", "client:batch"):
            assert tag in registry
        assert len(registry) == len(base_codecs()) - 1 + len(extension_codecs())

    def test_no_excluded_tags(self):
        registry = build_registry(excluded_tags=())

        assert "g:Edge" in registry

    def test_excluded_operators_reach_predicate_codec(self):
        registry = build_registry(excluded_operators=MEMBERSHIP_OPERATORS)
        codec = registry.find_decoder("dse:P")

        assert isinstance(codec, PredicateCodec)
        assert codec.excluded_operators == MEMBERSHIP_OPERATORS
        assert registry.find_encoder(P.eq(1)) is codec

    def test_custom_base_table(self):
        """Test a custom base table replaces the driver's."""
        registry = build_registry(base=[StringBasedCodec("test:Text", str)])

        assert "test:Text" in registry
        assert "g:UUID" not in registry
        assert registry.find_encoder("abc").key == "test:Text"

    def test_repr_lists_tags(self):
        assert "dse:Blob" in repr(build_registry())


class TestLookups:
    """Test encoder and decoder lookups."""

    @pytest.fixture
    def registry(self):
        return build_registry()

    @pytest.mark.parametrize(
        "value, tag",
        [
            (uuid4(), "g:UUID"),
            (date(2020, 1, 1), "gx:LocalDate"),
            (datetime(2020, 1, 1), "gx:Instant"),
            (BigInteger(1), "gx:BigInteger"),
            (Distance(Point(1, 2), 3), "dse:Distance"),
            (search.token("x"), "dse:P"),
            (geo.inside(Point(1, 2), 3), "dse:P"),
            (TraversalBatch(["x"]), "client:batch"),
        ],
    )
    def test_find_encoder(self, registry, value, tag):
        assert registry.find_encoder(value).key == tag

    def test_subclass_uses_parent_codec(self, registry):
        """
        Test lookup walks the class hierarchy.

        What this tests:
        ---------------
        1. A subclass without its own codec uses its parent's

        Why this matters:
        ----------------
        - Applications subclass driver geometry types
        """

        class Landmark(Point):
            pass

        assert registry.find_encoder(Landmark(1, 2)).key == "dse:Point"

    def test_unhandled_values(self, registry):
        """Test values without an extension encoding are left to gremlinpython."""
        assert registry.find_encoder("text") is None
        assert registry.find_encoder(42) is None
        assert registry.find_encoder(None) is None
        assert registry.find_encoder(P.within(1, 2)) is None
        assert registry.find_encoder([Point(1, 2)]) is None

    def test_find_decoder(self, registry):
        assert registry.find_decoder("gx:Instant").key == "gx:Instant"
        assert registry.find_decoder("g:Vertex") is None
        assert registry.find_decoder("g:Edge") is None


class TestRegistryImmutability:
    """Test registries cannot be changed after construction."""

    def test_codecs_mapping_is_read_only(self):
        registry = build_registry()

        with pytest.raises(TypeError):
            registry.codecs["g:UUID"] = None

    def test_later_codec_wins(self):
        first = StringBasedCodec("test:Text", str)
        second = StringBasedCodec("test:Text", str)

        registry = SerializerRegistry([first, second])

        assert registry.find_decoder("test:Text") is second
        assert registry.find_encoder("x") is second
        assert len(registry) == 1

    def test_source_list_not_retained(self):
        codecs = [StringBasedCodec("test:Text", str)]
        registry = SerializerRegistry(codecs)

        codecs.append(StringBasedCodec("test:Other", bytes))

        assert "test:Other" not in registry
