from abc import ABC, abstractmethod
from typing import Any

import orjson

from consulcat.core.errors import DecodeError
from consulcat.datastructures.type_aliases import RawBody


class Serializer(ABC):
    """Abstract base class for payload serialization."""

    @abstractmethod
    def serialize(self, data: Any) -> bytes:
        """Serializes data into bytes."""
        pass

    @abstractmethod
    def deserialize(self, data: RawBody) -> Any:
        """Deserializes a response body into data."""
        pass


class JsonSerializer(Serializer):
    """Serializer implementation using orjson for JSON serialization."""

    def __init__(self, *, indent: bool = False) -> None:
        self._options = orjson.OPT_INDENT_2 if indent else 0

    def serialize(self, data: Any) -> bytes:
        """Serializes data to JSON bytes using orjson."""

        # Tag sets have no JSON form; emit them sorted for stable output
        def default(obj: Any) -> Any:
            if isinstance(obj, (set, frozenset)):
                return sorted(obj)
            raise TypeError

        return orjson.dumps(data, default=default, option=self._options)

    def deserialize(self, data: RawBody) -> Any:
        """Deserializes JSON to data using orjson.

        Raises:
            DecodeError: If the body is not valid JSON.
        """
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON in response body: {exc}") from exc


json_serializer = JsonSerializer()
