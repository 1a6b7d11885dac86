"""
Property document operations.

A property document is a plain ordered dict of JSON-compatible values.
``to_node`` converts arbitrary Python values into that form; the setters
implement the "absent, never null" rule for top-level properties.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any

from stackdsl.errors import UnsupportedOperationError
from stackdsl.nodes import Ref, Referenceable
from stackdsl.types import PropertyDocument, Value


def to_node(value: Any) -> Value | None:
    """Convert a value for storage in a property document.

    Refs render as ``{"Ref": id}``, and anything with a ``ref()`` method
    (handles included) renders as a Ref to itself. None stays None.

    Raises:
        TypeError: If the value has no document form
    """
    match value:
        case None:
            return None
        case Ref():
            return value.to_node()
        case Enum():
            return to_node(value.value)
        case bool() | int() | float() | str():
            return value
        case Referenceable() if not isinstance(value, type) and callable(value.ref):
            return to_node(value.ref())
        case _ if callable(getattr(value, "to_node", None)):
            return value.to_node()
        case Mapping():
            return {str(k): to_node(v) for k, v in value.items()}
        case Sequence() if not isinstance(value, (bytes, bytearray)):
            return [to_node(v) for v in value]
        case _:
            raise TypeError(
                f"Cannot convert {type(value).__name__} to a document value"
            )


def with_array(document: PropertyDocument, name: str) -> list[Value]:
    """Get the array stored under name, creating it if absent.

    Raises:
        UnsupportedOperationError: If name holds something other than an array
    """
    existing = document.get(name)
    if existing is None:
        existing = document[name] = []
    elif not isinstance(existing, list):
        raise UnsupportedOperationError(
            f"Property '{name}' holds a {type(existing).__name__}, not an array",
            method=name,
        )
    return existing


def set_property(document: PropertyDocument, name: str, value: Any) -> None:
    node = to_node(value)
    if node is not None:
        document[name] = node


def set_array_property(document: PropertyDocument, name: str, values: Iterable[Any]) -> None:
    """Append every non-None value to the array under name, in order.

    Nothing is written when no value survives, so an all-None call leaves
    the document unchanged.
    """
    nodes = [node for node in map(to_node, values) if node is not None]
    if nodes:
        with_array(document, name).extend(nodes)
