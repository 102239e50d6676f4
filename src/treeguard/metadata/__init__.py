"""
Field declaration metadata for treeguard.

This package provides static field declarations with their custom metadata
flags and the bounded-depth resolver that matches serialized property names
to those declarations.
"""

from treeguard.metadata.fields import (
    OPTIONAL_FLAG,
    FieldDeclaration,
    FieldMarker,
    OptionalRef,
    ReflectionMetadataProvider,
    TypeMetadataProvider,
)
from treeguard.metadata.resolver import MAX_RESOLUTION_DEPTH, FieldResolver

__all__ = [
    "OPTIONAL_FLAG",
    "FieldDeclaration",
    "FieldMarker",
    "OptionalRef",
    "ReflectionMetadataProvider",
    "TypeMetadataProvider",
    "MAX_RESOLUTION_DEPTH",
    "FieldResolver",
]
