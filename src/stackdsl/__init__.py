"""stackdsl - Describe resource documents through declared schema classes."""

from stackdsl.adapter import (
    ResourceAdapter,
    adapter_of,
    handle_class,
)
from stackdsl.document import (
    set_array_property,
    set_property,
    to_node,
    with_array,
)
from stackdsl.errors import (
    ConfigurationError,
    StackDslError,
    UnsupportedOperationError,
)
from stackdsl.nodes import (
    # Core types
    Ref,
    Referenceable,
    Resource,
    Tag,
    # Decorators
    default,
    named,
)
from stackdsl.schema import (
    all_schemas,
    classify,
    property_name,
    resource_schema,
)
from stackdsl.serialization import (
    from_dict,
    from_json,
    to_dict,
    to_json,
)
from stackdsl.types import (
    CallKind,
    MethodDef,
    PropertyDocument,
    SchemaDef,
    Value,
)

__all__ = [
    # Routing
    "CallKind",
    # Errors
    "ConfigurationError",
    "MethodDef",
    "PropertyDocument",
    # Core types
    "Ref",
    "Referenceable",
    "Resource",
    # Adapter
    "ResourceAdapter",
    "SchemaDef",
    "StackDslError",
    "Tag",
    "UnsupportedOperationError",
    "Value",
    "adapter_of",
    # Schema extraction
    "all_schemas",
    "classify",
    # Decorators
    "default",
    # Serialization
    "from_dict",
    "from_json",
    "handle_class",
    "named",
    "property_name",
    "resource_schema",
    # Document
    "set_array_property",
    "set_property",
    "to_dict",
    "to_json",
    "to_node",
    "with_array",
]
