"""
Interface-to-document adapter.

ResourceAdapter owns one node: its id, its type tag and its property
document. ``produce_handle()`` returns an object implementing the node's
schema; every schema method on the handle is routed back to the adapter
through the schema's routing table (see ``stackdsl.schema``).

Example:
    >>> adapter = ResourceAdapter(Instance, "Web1")
    >>> web = adapter.produce_handle()
    >>> web.instance_type("t3.micro").security_group_ids(sg, None, "sg-2")
    >>> adapter.properties
    {'InstanceType': 't3.micro', 'SecurityGroupIds': [{'Ref': 'WebSG'}, 'sg-2']}
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import cache, wraps
from typing import Any

from stackdsl.document import set_array_property, set_property, with_array
from stackdsl.errors import ConfigurationError, UnsupportedOperationError
from stackdsl.nodes import TAGS_PROPERTY, Ref, Resource, Tag
from stackdsl.schema import resource_schema
from stackdsl.types import CallKind, MethodDef, PropertyDocument, SchemaDef

logger = logging.getLogger(__name__)


def _check_schema(schema: Any) -> None:
    if not (isinstance(schema, type) and issubclass(schema, Resource)):
        raise ConfigurationError(
            f"{schema!r} is not a Resource schema",
            schema=getattr(schema, "__qualname__", repr(schema)),
        )


class ResourceAdapter[T: Resource]:
    """Backs one node of schema T with a property document.

    Attributes:
        schema: The schema class
        id: Caller-chosen identifier, unique within a template
        type: Type tag taken from the schema
        properties: The live property document
    """

    def __init__(self, schema: type[T], id: str) -> None:
        _check_schema(schema)
        if not schema._type:
            raise ConfigurationError(
                f"Schema {schema.__qualname__} declares no type; "
                f"add type=... to its class statement",
                schema=schema.__qualname__,
            )
        self._bind(schema, schema._type, id, {})
        logger.debug("Created %s node %r", self._type, id)

    @classmethod
    def restore(
        cls,
        schema: type[T],
        type: str,
        id: str,
        properties: PropertyDocument,
    ) -> ResourceAdapter[T]:
        """Rebuild an adapter around an existing document.

        The type tag is trusted as given; the document is used as the live
        backing store, not copied.
        """
        _check_schema(schema)
        adapter = cls.__new__(cls)
        adapter._bind(schema, type, id, properties)
        logger.debug("Restored %s node %r with %d properties", type, id, len(properties))
        return adapter

    def _bind(
        self,
        schema: type[T],
        type: str,
        id: str,
        properties: PropertyDocument,
    ) -> None:
        self._schema = schema
        self._schema_def: SchemaDef = resource_schema(schema)
        self._type = type
        self._id = id
        self._properties = properties
        self._handle: T | None = None

    @property
    def schema(self) -> type[T]:
        return self._schema

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self._type

    @property
    def properties(self) -> PropertyDocument:
        return self._properties

    def produce_handle(self) -> T:
        """Get the handle bound to this adapter, building it on first call."""
        if self._handle is None:
            self._handle = handle_class(self._schema)(self)
        return self._handle

    def ref(self) -> Ref[T]:
        return Ref(self._id)

    def tag(self, key: object, value: object) -> Tag:
        tag = Tag(str(key), str(value))
        with_array(self._properties, TAGS_PROPERTY).append(tag.to_node())
        return tag

    def invoke(
        self,
        handle: T,
        method: MethodDef,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        """Perform one call made on the handle."""
        if method.kind is CallKind.UNSUPPORTED:
            logger.debug("Unsupported call %s.%s", self._schema.__qualname__, method.name)
            raise UnsupportedOperationError(
                f"{self._schema.__qualname__}.{method.name} has no document translation",
                schema=self._schema.__qualname__,
                method=method.name,
            )
        if method.kind is CallKind.DEFAULT:
            return method.function(handle, *args, **kwargs)

        bound = method.signature.bind(handle, *args, **kwargs)
        bound.apply_defaults()
        values = list(bound.arguments.values())[1:]

        match method.kind:
            case CallKind.REF:
                return self.ref()
            case CallKind.ID:
                return self._id
            case CallKind.TYPE:
                return self._type
            case CallKind.PROPERTIES:
                return self._properties
            case CallKind.TAG:
                return self.tag(*values)
            case CallKind.GETTER:
                return self._properties.get(method.property)
            case CallKind.ARRAY_SETTER:
                set_array_property(self._properties, method.property, values[0])
            case CallKind.SETTER:
                set_property(self._properties, method.property, values[0])

        return handle if method.returns_self else None

    def __repr__(self) -> str:
        return f"{self._schema.__qualname__}(id={self._id!r}, type={self._type!r})"


def adapter_of(handle: Resource) -> ResourceAdapter[Any]:
    """Get the adapter backing a handle."""
    try:
        return handle._adapter  # type: ignore[attr-defined]
    except AttributeError:
        raise TypeError(f"{handle!r} is not a resource handle") from None


# =============================================================================
# Handle Classes
# =============================================================================


def _route(method: MethodDef) -> Callable[..., Any]:
    @wraps(method.function)
    def call(self: Resource, *args: Any, **kwargs: Any) -> Any:
        return self._adapter.invoke(self, method, args, kwargs)  # type: ignore[attr-defined]

    return call


def _handle_init(self: Resource, adapter: ResourceAdapter[Any]) -> None:
    self._adapter = adapter  # type: ignore[attr-defined]


def _handle_eq(self: Resource, other: object) -> bool:
    other_adapter = getattr(other, "_adapter", None)
    if other_adapter is None:
        return NotImplemented
    return self._adapter is other_adapter  # type: ignore[attr-defined]


def _handle_hash(self: Resource) -> int:
    return hash(self._adapter)  # type: ignore[attr-defined]


def _handle_repr(self: Resource) -> str:
    return repr(self._adapter)  # type: ignore[attr-defined]


@cache
def handle_class[T: Resource](schema: type[T]) -> type[T]:
    """Build the handle class for a schema.

    The handle subclasses the schema, so ``isinstance(handle, schema)``
    holds; every schema method is replaced by a router to the adapter, and
    equality, hashing and repr are those of the adapter.
    """
    namespace: dict[str, Any] = {
        "__module__": schema.__module__,
        "__qualname__": f"{schema.__qualname__}Handle",
        "__init__": _handle_init,
        "__eq__": _handle_eq,
        "__hash__": _handle_hash,
        "__repr__": _handle_repr,
    }
    for method in resource_schema(schema).methods:
        namespace[method.name] = _route(method)
    return type(f"{schema.__name__}Handle", (schema,), namespace)
