"""
Graph structure codec of the host driver.

The driver decodes ``g:Edge`` into its own :class:`cassandra.datastax.graph.Edge`
for string (Groovy) graph queries. Traversal results use TinkerPop's
structure elements instead, so the registry leaves this codec out by
default (see ``EXCLUDED_BASE_TAGS``).
"""

from typing import Any, Dict, Tuple

from cassandra.datastax.graph import Edge

from .base import GraphSONCodec, typed_value


def _property_value(prop: Any) -> Any:
    # gremlinpython decodes g:Property into a Property(key, value, element)
    return getattr(prop, "value", prop)


class EdgeCodec(GraphSONCodec):
    key = "g:Edge"
    target_types: Tuple[type, ...] = (Edge,)

    def serialize(self, value: Any, writer: Any) -> Any:
        payload: Dict[str, Any] = {
            "id": writer.to_dict(value.id),
            "label": value.label,
            "inV": writer.to_dict(value.inV),
            "inVLabel": value.inVLabel,
            "outV": writer.to_dict(value.outV),
            "outVLabel": value.outVLabel,
        }
        if value.properties:
            payload["properties"] = {
                name: writer.to_dict(prop) for name, prop in value.properties.items()
            }
        return typed_value(self.key, payload)

    def deserialize(self, value: Any, reader: Any) -> Any:
        properties = {
            name: _property_value(reader.to_object(prop))
            for name, prop in (value.get("properties") or {}).items()
        }
        return Edge(
            id=reader.to_object(value.get("id")),
            label=value.get("label"),
            type="edge",
            properties=properties,
            inV=reader.to_object(value.get("inV")),
            inVLabel=value.get("inVLabel"),
            outV=reader.to_object(value.get("outV")),
            outVLabel=value.get("outVLabel"),
        )
