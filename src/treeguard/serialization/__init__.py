"""
Serialized property view for treeguard.

This package provides the metadata-poor, host-defined view of component data
that the component validator iterates.
"""

from treeguard.serialization.properties import (
    MAX_SERIALIZATION_DEPTH,
    PropertyKind,
    SerializedObject,
    SerializedProperty,
    nicify_name,
)

__all__ = [
    "MAX_SERIALIZATION_DEPTH",
    "PropertyKind",
    "SerializedObject",
    "SerializedProperty",
    "nicify_name",
]
