"""
Error types for stackdsl.

- StackDslError: Base exception
- ConfigurationError: A schema cannot back a node (raised at construction)
- UnsupportedOperationError: A call shape the adapter cannot route (raised at call time)
"""

from __future__ import annotations

from typing import Any


class StackDslError(Exception):
    """Base exception for all stackdsl errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "STACKDSL_ERROR"
        self.details = details or {}


class ConfigurationError(StackDslError):
    """A schema is not usable as a node definition.

    Raised when:
    - The schema declares no type tag, or an empty one
    - The schema is not a Resource subclass
    - A serialized node has no type, or names one with no registered schema
    """

    def __init__(self, message: str, schema: str | None = None) -> None:
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"schema": schema},
        )
        self.schema = schema


class UnsupportedOperationError(StackDslError):
    """A method shape with no document translation was called."""

    def __init__(
        self,
        message: str,
        schema: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code="UNSUPPORTED_OPERATION",
            details={"schema": schema, "method": method},
        )
        self.schema = schema
        self.method = method
