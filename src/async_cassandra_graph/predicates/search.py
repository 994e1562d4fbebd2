"""
Text search predicates for DataStax Graph search indexes.

Token predicates match against tokenized (full-text) properties, the others
against the raw string value.
"""

from typing import Any

from gremlin_python.process.traversal import P


class TextDistanceP(P):
    """A text predicate carrying a query and an edit/term distance."""

    def __init__(self, operator: str, value: str, distance: int) -> None:
        super().__init__(operator, value)
        self.distance = distance

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, TextDistanceP)
            and self.operator == other.operator
            and self.value == other.value
            and self.distance == other.distance
        )

    def __hash__(self) -> int:
        return hash((self.operator, self.value, self.distance))

    def __repr__(self) -> str:
        return f"{self.operator}({self.value!r}, {self.distance!r})"


def token(value: Any) -> P:
    """Search any instance of a token within the targeted text property."""
    return P("token", value)


def token_prefix(value: Any) -> P:
    """Search any instance of a token prefix within the targeted text property."""
    return P("tokenPrefix", value)


def token_regex(value: Any) -> P:
    """Search any token matching the regular expression."""
    return P("tokenRegex", value)


def prefix(value: Any) -> P:
    """Search for a prefix at the beginning of the targeted text property."""
    return P("prefix", value)


def regex(value: Any) -> P:
    """Search for the regular expression inside the targeted text property."""
    return P("regex", value)


def phrase(query: str, distance: int) -> TextDistanceP:
    """
    Find words within a number of terms of each other (case insensitive).

    With ``phrase("Hello world", 2)``, "Hello wild world" and
    "Hello big wild world" are found, "Hello the big wild world" is not.
    """
    return TextDistanceP("phrase", query, distance)


def fuzzy(query: str, distance: int) -> TextDistanceP:
    """
    Levenshtein (edit distance) search on the raw value (case sensitive).

    With ``fuzzy("david", 1)``, "dawid" and "davids" are found, "dewid" is not.
    """
    return TextDistanceP("fuzzy", query, distance)


def token_fuzzy(query: str, distance: int) -> TextDistanceP:
    """Levenshtein search on the tokenized value (case insensitive)."""
    return TextDistanceP("tokenFuzzy", query, distance)
