"""
Base interface for tree sinks

A sink builds a tree-structured value out of objects, arrays and strings
and renders it as text. The converted document is handed to a sink rather
than to a specific serializer.
"""

from abc import ABC, abstractmethod
from typing import Any


class TreeSink(ABC):
    """Abstract base class for tree-structured output."""

    @abstractmethod
    def new_object(self) -> Any:
        """Create an empty object node."""
        pass

    @abstractmethod
    def new_array(self) -> Any:
        """Create an empty array node."""
        pass

    @abstractmethod
    def new_string(self, value: str) -> Any:
        """
        Create a string node.

        Args:
            value: String contents
        """
        pass

    @abstractmethod
    def set_field(self, obj: Any, key: str, value: Any) -> None:
        """
        Set a field on an object node, keeping insertion order.

        Args:
            obj: Object node from new_object()
            key: Field name
            value: Node to store
        """
        pass

    @abstractmethod
    def append(self, array: Any, value: Any) -> None:
        """
        Append a node to an array node.

        Args:
            array: Array node from new_array()
            value: Node to append
        """
        pass

    @abstractmethod
    def render(self, root: Any) -> str:
        """
        Render a tree as text.

        Args:
            root: Root node

        Returns:
            Serialized tree
        """
        pass


class NativeTreeSink(TreeSink):
    """
    Sink whose nodes are plain dicts, lists and strings.

    Subclasses only decide how the finished tree is rendered.
    """

    def new_object(self) -> dict[str, Any]:
        return {}

    def new_array(self) -> list[Any]:
        return []

    def new_string(self, value: str) -> str:
        return value

    def set_field(self, obj: dict[str, Any], key: str, value: Any) -> None:
        obj[key] = value

    def append(self, array: list[Any], value: Any) -> None:
        array.append(value)
