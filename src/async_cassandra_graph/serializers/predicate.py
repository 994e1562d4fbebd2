"""
Codec for search and geo predicates.

Extension predicates go out as ``dse:P``. Text predicates with a distance
use the native ``g:P`` tag with a ``{query, distance}`` value, which servers
that do not know ``dse:P`` still understand. Base TinkerPop predicates are
left to gremlinpython's own ``g:P`` serializer through ``excluded_operators``.
"""

from typing import Any, FrozenSet, Iterable, Tuple

from gremlin_python.process.traversal import P

from ..exceptions import ConfigurationError
from ..predicates.geo import GeoP
from ..predicates.search import TextDistanceP
from .base import GraphSONCodec, typed_value

# First generation: only membership predicates have their own syntax.
MEMBERSHIP_OPERATORS: FrozenSet[str] = frozenset({"within", "without"})

# Current generation: every predicate gremlinpython can build itself.
TINKERPOP_OPERATORS: FrozenSet[str] = MEMBERSHIP_OPERATORS | frozenset(
    {
        "eq",
        "neq",
        "lt",
        "lte",
        "gt",
        "gte",
        "inside",
        "outside",
        "between",
        "not",
        "and",
        "or",
    }
)

# Operators carrying a second operand; every other predicate has a single value.
TWO_OPERAND_OPERATORS: FrozenSet[str] = frozenset({"between", "inside", "outside", "and", "or"})


class PredicateCodec(GraphSONCodec):
    key = "dse:P"
    target_types: Tuple[type, ...] = (P,)

    def __init__(self, excluded_operators: Iterable[str] = TINKERPOP_OPERATORS) -> None:
        super().__init__()
        self.excluded_operators: FrozenSet[str] = frozenset(excluded_operators)

    def can_encode(self, value: Any) -> bool:
        if isinstance(value, (GeoP, TextDistanceP)):
            return True
        return isinstance(value, P) and value.operator not in self.excluded_operators

    def serialize(self, value: Any, writer: Any) -> Any:
        if writer is None:
            raise ConfigurationError("Serializer writer is not defined")

        if isinstance(value, TextDistanceP):
            return typed_value(
                "g:P",
                {
                    "predicate": value.operator,
                    "value": {"query": value.value, "distance": value.distance},
                },
            )

        result = {
            "predicate": value.operator,
            "predicateType": "Geo" if isinstance(value, GeoP) else "P",
        }
        if value.other is None:
            result["value"] = writer.to_dict(value.value)
        else:
            result["value"] = [writer.to_dict(value.value), writer.to_dict(value.other)]
        return typed_value(self.key, result)

    def deserialize(self, value: Any, reader: Any) -> Any:
        operator = value["predicate"]
        operand = reader.to_object(value.get("value"))
        if value.get("predicateType") == "Geo":
            return GeoP(operator, operand)
        if operator in TWO_OPERAND_OPERATORS and isinstance(operand, list) and len(operand) == 2:
            return P(operator, operand[0], operand[1])
        return P(operator, operand)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(key={self.key!r}, "
            f"excluded_operators={sorted(self.excluded_operators)!r})"
        )
