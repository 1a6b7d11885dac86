"""
Runtime description of resource schemas.

A schema is described once, the first time a node is built from it. The
description records how every declared method is routed, so handles
dispatch by table lookup instead of inspecting methods per call.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Property Values
# =============================================================================

type Value = str | int | float | bool | PropertyDocument | list[Value]
type PropertyDocument = dict[str, Value]

# =============================================================================
# Call Routing
# =============================================================================


class CallKind(Enum):
    """How a call on a handle is translated."""

    REF = "ref"  # Ref to the node itself
    ID = "id"
    TYPE = "type"
    PROPERTIES = "properties"  # The live property document
    TAG = "tag"  # Append to the Tags array
    DEFAULT = "default"  # Run the method's own body
    SETTER = "setter"
    ARRAY_SETTER = "array_setter"  # Variadic setter, appends to an array
    GETTER = "getter"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class MethodDef:
    """Routing entry for one schema method.

    Attributes:
        name: Method name as declared
        kind: How calls are routed
        property: Property name for setters and getters
        returns_self: Whether setters return the handle
        function: The declared function (run for DEFAULT)
        signature: Declared signature, used to bind call arguments
    """

    name: str
    kind: CallKind
    property: str | None = None
    returns_self: bool = False
    function: Callable[..., Any] | None = field(default=None, compare=False, repr=False)
    signature: inspect.Signature | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "kind": self.kind.value}
        if self.property is not None:
            result["property"] = self.property
        if self.returns_self:
            result["returns_self"] = True
        return result


@dataclass(frozen=True)
class SchemaDef:
    """Complete routing table for a schema class."""

    name: str
    type: str | None
    methods: tuple[MethodDef, ...]

    def get_method(self, name: str) -> MethodDef | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def properties(self) -> list[str]:
        """Property names reachable through setters and getters, in declaration order."""
        seen: dict[str, None] = {}
        for method in self.methods:
            if method.property is not None:
                seen.setdefault(method.property)
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "methods": [m.to_dict() for m in self.methods],
        }
