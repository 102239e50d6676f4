"""
Validation of a single component's reference fields.
"""

from typing import TYPE_CHECKING

from treeguard.metadata.fields import ReflectionMetadataProvider, TypeMetadataProvider
from treeguard.metadata.resolver import MAX_RESOLUTION_DEPTH, FieldResolver
from treeguard.serialization.properties import PropertyKind, SerializedObject
from treeguard.validation.policy import TypeInclusionPolicy
from treeguard.validation.report import MISSING_ARRAY_REFERENCE_PREFIX, ValidationReport

if TYPE_CHECKING:
    from treeguard.core.objects import Component, Node


class ComponentValidator:
    """Reports unset required references on one component at a time.

    Responsibilities:
    - Report components that failed to materialize (None entries on a node).
    - Skip components whose type is rejected by the inclusion policy.
    - Report unset single references whose declaration is found and not optional.
    - Report every unset element of reference collections.

    Notes:
    - A single reference whose declaration cannot be resolved is treated as
      not required, so it never produces a diagnostic.
    - Collections are classified by their first element only and ignore the
      optional marker of their declaring field.
    """

    def __init__(
        self,
        policy: TypeInclusionPolicy,
        metadata: TypeMetadataProvider | None = None,
        max_depth: int = MAX_RESOLUTION_DEPTH,
    ):
        self.policy = policy
        self.metadata = metadata or ReflectionMetadataProvider()
        self.resolver = FieldResolver(policy, self.metadata, max_depth)

    def validate_component(
        self,
        component: "Component | None",
        node: "Node",
        report: ValidationReport,
    ) -> None:
        """
        Validate `component` attached to `node`, appending findings to `report`.

        Params:
            component: The component to validate, or None if it failed to materialize
            node: The node the component is attached to
            report: Report receiving the diagnostics
        """
        if component is None:
            report.add_error(f"Missing component on node '{node.name}'.", node)
            return

        component_type = type(component)
        if not self.policy.should_validate(component_type):
            return

        fields = self.metadata.get_fields(component_type)
        serialized = SerializedObject(component)

        for prop in serialized.iter_visible():
            if prop.kind is PropertyKind.REFERENCE:
                declaration = self.resolver.find_matching_field(fields, prop.name, 0)
                if declaration is None or declaration.is_optional:
                    continue
                if prop.reference_value is None:
                    report.add_error_formatted(
                        prop.display_name, component_type.__name__, component
                    )

            elif prop.is_array and prop.array_size > 0:
                first = prop.get_array_element_at_index(0)
                if first.kind is not PropertyKind.REFERENCE:
                    continue
                for index in range(prop.array_size):
                    element = prop.get_array_element_at_index(index)
                    if element.reference_value is None:
                        report.add_error_formatted(
                            f"{prop.display_name}.{element.display_name}",
                            component_type.__name__,
                            component,
                            MISSING_ARRAY_REFERENCE_PREFIX,
                        )
