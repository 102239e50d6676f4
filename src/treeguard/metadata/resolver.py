"""
Correlation of serialized property names with static field declarations.

Serialized properties carry only their leaf name, so a property found inside
a nested composite value has to be matched by searching the declared fields
of nested composite types as well. The search is bounded by an explicit depth
counter: composite types commonly reference themselves, directly or through
other types, and the bound is what keeps the search finite.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from treeguard.core.introspection import is_nestable_class
from treeguard.metadata.fields import (
    FieldDeclaration,
    ReflectionMetadataProvider,
    TypeMetadataProvider,
)

if TYPE_CHECKING:
    from treeguard.validation.policy import TypeInclusionPolicy

MAX_RESOLUTION_DEPTH = 5


class FieldResolver:
    """Finds the field declaration behind a serialized property name.

    Resolution is best effort. A declaration that is only reachable at or
    beyond `max_depth` nesting levels is reported as not found, and callers
    treat unresolved properties as not required.
    """

    def __init__(
        self,
        policy: "TypeInclusionPolicy",
        metadata: TypeMetadataProvider | None = None,
        max_depth: int = MAX_RESOLUTION_DEPTH,
    ):
        self.policy = policy
        self.metadata = metadata or ReflectionMetadataProvider()
        self.max_depth = max_depth

    def find_matching_field(
        self,
        declared_fields: Sequence[FieldDeclaration],
        property_name: str,
        depth: int = 0,
    ) -> FieldDeclaration | None:
        """
        Find the declaration named `property_name`, searching nested types depth-first.

        A direct match at the current level always wins over nested matches;
        the first declared field with the exact name is returned without
        looking at its type. Otherwise every field whose static type is a
        nestable class accepted by the inclusion policy is searched in
        declaration order at `depth + 1`.

        Params:
            declared_fields: Declarations of the type being searched
            property_name: Leaf name of the serialized property
            depth: Current nesting level, 0 for the component's own fields

        Returns:
            The matching FieldDeclaration, or None if not found within the depth limit
        """
        if depth >= self.max_depth:
            return None

        for declaration in declared_fields:
            if declaration.name == property_name:
                return declaration

        for declaration in declared_fields:
            nested_type = declaration.field_type
            if is_nestable_class(nested_type) and self.policy.should_validate(nested_type):
                match = self.find_matching_field(
                    self.metadata.get_fields(nested_type), property_name, depth + 1
                )
                if match is not None:
                    return match

        return None
