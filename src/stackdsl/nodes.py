"""
Resource domain: schemas, references and tags.

A schema is a subclass of ``Resource`` declared with a ``type`` keyword.
Its methods are stubs describing the property accessors of one resource
kind; the adapter turns them into live calls against a property document.

Example:
    >>> class Instance(Resource, type="AWS::EC2::Instance"):
    ...     def image_id(self, value: object) -> Self: ...
    ...     def security_group_ids(self, *values: object) -> Self: ...
    ...
    ...     @default
    ...     def name(self, name: str) -> Self:
    ...         self.tag("Name", name)
    ...         return self
    >>> web = Instance.create("Web1").image_id("ami-123")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from stackdsl.types import PropertyDocument

logger = logging.getLogger(__name__)

# =============================================================================
# Reserved Document Names
# =============================================================================

REF_KEY = "Ref"
TAGS_PROPERTY = "Tags"
TAG_KEY = "Key"
TAG_VALUE = "Value"

DEFAULT_MARKER = "__stackdsl_default__"
NAME_MARKER = "__stackdsl_property__"

# =============================================================================
# Core Types
# =============================================================================


@dataclass(frozen=True)
class Ref[X]:
    """Reference to X by ID."""

    id: str

    def to_node(self) -> dict[str, str]:
        return {REF_KEY: self.id}


@dataclass(frozen=True)
class Tag:
    """Key/value annotation stored in a resource's Tags array."""

    key: str
    value: str

    def to_node(self) -> dict[str, str]:
        return {TAG_KEY: self.key, TAG_VALUE: self.value}


@runtime_checkable
class Referenceable(Protocol):
    """Anything that can produce a Ref to itself."""

    def ref(self) -> Ref[Any]: ...


# =============================================================================
# Method Decorators
# =============================================================================


def default[F: Callable[..., Any]](fn: F) -> F:
    """Mark a schema method as a default behavior.

    Its body runs with the handle as ``self``, so it can call the other
    methods of the schema.
    """
    setattr(fn, DEFAULT_MARKER, True)
    return fn


def named(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Store a setter or getter under ``name`` instead of the derived name.

    Example:
        >>> @named("SSEAlgorithm")
        ... def sse_algorithm(self, value: str) -> Self: ...
    """

    def _named[F: Callable[..., Any]](fn: F) -> F:
        setattr(fn, NAME_MARKER, name)
        return fn

    return _named


# =============================================================================
# Schema Base
# =============================================================================


class Resource:
    """Base for resource schemas.

    Subclasses declare their type tag as a class keyword. The tag is not
    inherited: every schema that backs nodes must declare its own.
    """

    _type: ClassVar[str | None] = None
    _registry: ClassVar[dict[str, type[Resource]]] = {}

    def __init_subclass__(cls, type: str | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        cls._type = type
        if not type:
            return

        # Last declaration wins
        Resource._registry[type] = cls
        logger.debug("Registered schema %s as %s", cls.__qualname__, type)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(
            f"{type(self).__name__} is a schema; use {type(self).__name__}.create(id)"
        )

    @classmethod
    def create(cls, id: str) -> Self:
        """Build a new node of this schema and return its handle."""
        # Import here to avoid circular dependency
        from stackdsl.adapter import ResourceAdapter

        return ResourceAdapter(cls, id).produce_handle()

    @classmethod
    def registry(cls) -> dict[str, type[Resource]]:
        """All schemas that declared a type, keyed by type."""
        return dict(Resource._registry)

    def ref(self) -> Ref[Self]: ...

    def get_id(self) -> str: ...

    def get_type(self) -> str: ...

    def get_properties(self) -> PropertyDocument: ...

    def tag(self, key: object, value: object) -> Tag: ...
