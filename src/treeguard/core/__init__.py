"""
Core treeguard components.

This package provides the host object model (trees, nodes, components,
composites) and the type introspection helpers shared across the framework.
"""

from treeguard.core.introspection import (
    RawField,
    declared_fields,
    is_composite_type,
    is_reference_type,
    static_type,
    unwrap_annotation,
)
from treeguard.core.objects import (
    Component,
    Composite,
    HostObject,
    Node,
    Tree,
    is_alive,
)

__all__ = [
    "HostObject",
    "Node",
    "Component",
    "Composite",
    "Tree",
    "is_alive",
    "RawField",
    "declared_fields",
    "is_composite_type",
    "is_reference_type",
    "static_type",
    "unwrap_annotation",
]
