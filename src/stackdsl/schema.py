"""
Schema extraction: reflect on a schema class and build its routing table.

Every public function declared on a Resource subclass (or inherited from
one) is classified once into a CallKind. Priority order:

1. ``ref()`` and the ``get_id()``/``get_type()``/``get_properties()`` getters
2. ``tag(key, value)``
3. ``@default`` methods
4. single-parameter setters (variadic ones append to an array)
5. other zero-argument ``get_...`` getters
6. everything else is unsupported and raises when called
"""

from __future__ import annotations

import inspect
import logging
import re
from functools import cache
from typing import Any, Self

from stackdsl.errors import ConfigurationError
from stackdsl.nodes import DEFAULT_MARKER, NAME_MARKER, Resource
from stackdsl.types import CallKind, MethodDef, SchemaDef

logger = logging.getLogger(__name__)

_CAMEL_ACCESSOR = re.compile(r"^(get|set)(?=[A-Z])")
_SNAKE_ACCESSOR = re.compile(r"^(get|set)_(?=.)")

_META_GETTERS: dict[str, CallKind] = {
    "Id": CallKind.ID,
    "Type": CallKind.TYPE,
    "Properties": CallKind.PROPERTIES,
}

_SETTER_PARAMETER_KINDS = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    }
)

# =============================================================================
# Property Names
# =============================================================================


def property_name(method_name: str) -> str:
    """Derive the capitalized property name addressed by an accessor.

    A leading ``get_``/``set_`` (or camelCase ``get``/``set``) is dropped and
    the remaining words are joined with their first letters upper-cased:

        >>> property_name("set_image_id")
        'ImageId'
        >>> property_name("getFoo")
        'Foo'
        >>> property_name("foo")
        'Foo'
    """
    name = _SNAKE_ACCESSOR.sub("", method_name, count=1)
    if name == method_name:
        name = _CAMEL_ACCESSOR.sub("", method_name, count=1)
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def _is_getter_name(method_name: str) -> bool:
    return method_name.startswith("get_") or bool(re.match(r"^get[A-Z]", method_name))


def _returns_self(annotation: Any, cls: type[Resource]) -> bool:
    """Whether a return annotation names the schema itself."""
    schemas = [c for c in cls.__mro__ if isinstance(c, type) and issubclass(c, Resource)]
    if isinstance(annotation, str):
        annotation = annotation.strip("'\"")
        if annotation == "Self" or annotation.endswith(".Self"):
            return True
        return any(annotation in (c.__name__, c.__qualname__) for c in schemas)
    return annotation is Self or annotation in schemas


# =============================================================================
# Classification
# =============================================================================


def classify(cls: type[Resource], name: str, fn: Any) -> MethodDef:
    """Build the routing entry for method ``name`` of schema ``cls``."""
    signature = inspect.signature(fn)
    params = list(signature.parameters.values())[1:]
    arity = len(params)
    variadic = arity == 1 and params[0].kind is inspect.Parameter.VAR_POSITIONAL
    prop = getattr(fn, NAME_MARKER, None) or property_name(name)

    def entry(kind: CallKind, **kwargs: Any) -> MethodDef:
        return MethodDef(name=name, kind=kind, function=fn, signature=signature, **kwargs)

    if arity == 0 and name == "ref":
        return entry(CallKind.REF)
    if arity == 0 and _is_getter_name(name) and property_name(name) in _META_GETTERS:
        return entry(_META_GETTERS[property_name(name)])
    if name == "tag" and arity == 2 and all(p.kind in _SETTER_PARAMETER_KINDS for p in params):
        return entry(CallKind.TAG)
    if getattr(fn, DEFAULT_MARKER, False):
        return entry(CallKind.DEFAULT)
    if variadic:
        return entry(
            CallKind.ARRAY_SETTER,
            property=prop,
            returns_self=_returns_self(signature.return_annotation, cls),
        )
    if arity == 1 and params[0].kind in _SETTER_PARAMETER_KINDS:
        return entry(
            CallKind.SETTER,
            property=prop,
            returns_self=_returns_self(signature.return_annotation, cls),
        )
    if arity == 0 and _is_getter_name(name):
        return entry(CallKind.GETTER, property=prop)
    return entry(CallKind.UNSUPPORTED)


def _declared_methods(cls: type[Resource]) -> dict[str, Any]:
    """Public functions declared on cls and its schema bases, subclasses winning."""
    methods: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if not issubclass(klass, Resource):
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or not inspect.isfunction(member):
                continue
            methods[name] = member
    return methods


# =============================================================================
# Schema Extraction
# =============================================================================


@cache
def resource_schema(cls: type[Resource]) -> SchemaDef:
    """Get the routing table for a schema class."""
    if not (isinstance(cls, type) and issubclass(cls, Resource)):
        raise ConfigurationError(
            f"{cls!r} is not a Resource schema",
            schema=getattr(cls, "__qualname__", repr(cls)),
        )

    methods = tuple(
        classify(cls, name, fn) for name, fn in _declared_methods(cls).items()
    )
    logger.debug(
        "Described schema %s (%s) with %d methods",
        cls.__qualname__,
        cls._type,
        len(methods),
    )
    return SchemaDef(name=cls.__qualname__, type=cls._type, methods=methods)


def all_schemas() -> dict[str, SchemaDef]:
    """Get all registered resource schemas."""
    return {tag: resource_schema(cls) for tag, cls in Resource.registry().items()}
