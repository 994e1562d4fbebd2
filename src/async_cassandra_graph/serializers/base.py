"""
Base codec interface for GraphSON extension types.

A codec owns exactly one wire tag and knows how to turn values of its
target types into tagged GraphSON and back. Codecs are stateless: the
writer or reader driving the (de)serialization is passed on every call so
nested values can be adapted recursively.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

from ..exceptions import ConfigurationError

TYPE_KEY = "@type"
VALUE_KEY = "@value"


def typed_value(key: str, value: Any) -> Dict[str, Any]:
    """Wrap a value as ``{"@type": key, "@value": value}``."""
    return {TYPE_KEY: key, VALUE_KEY: value}


class GraphSONCodec(ABC):
    """
    Abstract base class for GraphSON codecs.

    Subclasses set ``key`` (the wire tag) and ``target_types`` (the Python
    types encoded under that tag).
    """

    key: str = ""
    target_types: Tuple[Type, ...] = ()

    def __init__(self) -> None:
        if not self.key:
            raise ConfigurationError(f"{self.__class__.__name__} must provide a type key")
        if not self.target_types:
            raise ConfigurationError(f"{self.__class__.__name__} must provide a target type")

    @abstractmethod
    def serialize(self, value: Any, writer: Any) -> Any:
        """
        Convert a value to its GraphSON representation.

        Args:
            value: The value to serialize
            writer: The GraphSON writer, used to adapt nested values

        Returns:
            JSON compatible value, normally tagged with ``key``
        """
        pass

    @abstractmethod
    def deserialize(self, value: Any, reader: Any) -> Any:
        """
        Convert the ``@value`` payload of a tagged value back to Python.

        Args:
            value: The untagged payload
            reader: The GraphSON reader, used to decode nested values

        Returns:
            The decoded value
        """
        pass

    def can_encode(self, value: Any) -> bool:
        """Check if this codec can serialize the given value."""
        return isinstance(value, self.target_types)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r})"


class StringBasedCodec(GraphSONCodec):
    """
    Codec using the canonical string form of a value.

    Serializes with ``str(value)`` and deserializes by handing the string
    payload to ``parse`` (the target type itself when not given).
    """

    def __init__(
        self,
        key: str,
        target_types: Union[Type, Tuple[Type, ...], None],
        parse: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.key = key
        if target_types is None:
            target_types = ()
        elif not isinstance(target_types, tuple):
            target_types = (target_types,)
        self.target_types = target_types
        super().__init__()
        self._parse = parse or self.target_types[0]

    def to_string(self, value: Any) -> str:
        return str(value)

    def serialize(self, value: Any, writer: Any) -> Any:
        return typed_value(self.key, self.to_string(value))

    def deserialize(self, value: Any, reader: Any) -> Any:
        if not isinstance(value, str):
            value = str(value)
        return self._parse(value)
