"""Declarative resource schemas and the registry that serves them."""

from edgeform.schema.models import (
    Composite,
    FieldDescriptor,
    FieldKind,
    ListField,
    Scalar,
    Schema,
)
from edgeform.schema.registry import ResourceType, get_schema, resource_types

__all__ = [
    "Composite",
    "FieldDescriptor",
    "FieldKind",
    "ListField",
    "ResourceType",
    "Scalar",
    "Schema",
    "get_schema",
    "resource_types",
]
