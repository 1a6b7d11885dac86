"""
Serialization of single nodes.

A node serializes as ``{"Type": ..., "Properties": {...}}``; the node's id
is not part of the object and is supplied by whoever assembles the
template (usually as the key the object is stored under).
"""

from __future__ import annotations

import copy
import json
from typing import Any

from stackdsl.adapter import ResourceAdapter, adapter_of
from stackdsl.errors import ConfigurationError
from stackdsl.nodes import Resource

TYPE_FIELD = "Type"
PROPERTIES_FIELD = "Properties"


def _adapter(node: Resource | ResourceAdapter[Any]) -> ResourceAdapter[Any]:
    if isinstance(node, ResourceAdapter):
        return node
    return adapter_of(node)


def to_dict(node: Resource | ResourceAdapter[Any]) -> dict[str, Any]:
    """Serialize a handle or adapter to a dict."""
    adapter = _adapter(node)
    return {
        TYPE_FIELD: adapter.type,
        PROPERTIES_FIELD: copy.deepcopy(adapter.properties),
    }


def to_json(node: Resource | ResourceAdapter[Any], **kwargs: Any) -> str:
    """Serialize a handle or adapter to a JSON string."""
    return json.dumps(to_dict(node), **kwargs)


def from_dict[T: Resource](
    id: str,
    data: dict[str, Any],
    schema: type[T] | None = None,
) -> T:
    """Rebuild a node from its dict form and return its handle.

    Args:
        id: Identifier of the node
        data: Serialized node with a Type and optional Properties
        schema: Schema to use; looked up by Type when omitted

    Raises:
        ConfigurationError: If data has no Type, or no schema is registered for it
    """
    type_tag = data.get(TYPE_FIELD)
    if not type_tag:
        raise ConfigurationError("Serialized node has no Type")
    if schema is None:
        schema = Resource.registry().get(type_tag)
        if schema is None:
            raise ConfigurationError(f"No schema registered for type '{type_tag}'")
    properties = copy.deepcopy(data.get(PROPERTIES_FIELD) or {})
    return ResourceAdapter.restore(schema, type_tag, id, properties).produce_handle()


def from_json[T: Resource](id: str, s: str, schema: type[T] | None = None) -> T:
    """Rebuild a node from a JSON string and return its handle."""
    return from_dict(id, json.loads(s), schema)
