"""
Serialized property view of components.

This is the generic, host-defined view of a component's data: every visible
field becomes a SerializedProperty with a leaf name, a display name, a kind
and a current value. Custom field metadata (such as the optional marker) is
not part of this view; it has to be recovered from the static declarations
by name, see `treeguard.metadata.resolver`.

Visibility rules:
- Fields excluded from serialization are not visible.
- Mapping and set typed fields are not serialized at all.
- Composite values expose their own fields as child properties; a composite
  field holding None has no children.
- List and tuple fields are arrays whose elements are reachable through
  `get_array_element_at_index`. Composite elements are also visited.
"""

import re
from collections.abc import Iterator
from enum import Enum
from typing import Any, TypeVar, get_origin

from treeguard.core.introspection import (
    is_composite_type,
    is_mapping_annotation,
    is_reference_type,
    iter_field_values,
    sequence_element_annotation,
    unwrap_annotation,
)
from treeguard.core.objects import HostObject, is_alive

# Nesting limit of the host serializer; bounds cyclic instance graphs.
MAX_SERIALIZATION_DEPTH = 10

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class PropertyKind(Enum):
    """Kind of a serialized property."""

    REFERENCE = "reference"  # Points at a HostObject
    GENERIC = "generic"  # Composite value or array
    PRIMITIVE = "primitive"  # Anything else


def nicify_name(name: str) -> str:
    """Turn a field name into a display name: `required_target` -> `Required Target`."""
    stripped = name.lstrip("_")
    spaced = _CAMEL_BOUNDARY.sub(" ", stripped.replace("_", " "))
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


class SerializedProperty:
    """One visible property in a component's serialized view."""

    def __init__(
        self,
        name: str,
        display_name: str,
        path: str,
        kind: PropertyKind,
        value: Any = None,
        is_array: bool = False,
        depth: int = 0,
    ):
        self.name = name
        self.display_name = display_name
        self.path = path
        self.kind = kind
        self.value = value
        self.is_array = is_array
        self.depth = depth
        self.children: list[SerializedProperty] = []
        self._elements: list[SerializedProperty] = []

    def __repr__(self) -> str:
        return f"SerializedProperty({self.path!r}, {self.kind.value})"

    @property
    def array_size(self) -> int:
        return len(self._elements)

    def get_array_element_at_index(self, index: int) -> "SerializedProperty":
        """Return the element property at `index`.

        Raises:
            IndexError: If `index` is outside the array.
        """
        return self._elements[index]

    @property
    def reference_value(self) -> Any:
        """The referenced object, or None when unset, destroyed or not a reference."""
        if self.kind is PropertyKind.REFERENCE and is_alive(self.value):
            return self.value
        return None


def _describe(annotation: Any, value: Any) -> tuple[PropertyKind, bool, Any] | None:
    """Classify a field as `(kind, is_array, element_annotation)`, or None if not serialized."""
    if is_reference_type(annotation):
        return PropertyKind.REFERENCE, False, None
    if is_mapping_annotation(annotation):
        return None

    is_array, element_annotation = sequence_element_annotation(annotation)
    if is_array:
        return PropertyKind.GENERIC, True, element_annotation
    if is_composite_type(annotation):
        return PropertyKind.GENERIC, False, None

    unwrapped = unwrap_annotation(annotation)
    if (
        annotation is None
        or unwrapped is Any
        or isinstance(unwrapped, TypeVar)
        or get_origin(unwrapped) is not None
    ):
        return _describe_value(value)
    return PropertyKind.PRIMITIVE, False, None


def _describe_value(value: Any) -> tuple[PropertyKind, bool, Any] | None:
    """Classify by runtime value when the annotation does not say enough."""
    if isinstance(value, HostObject):
        return PropertyKind.REFERENCE, False, None
    if isinstance(value, (dict, set, frozenset)):
        return None
    if isinstance(value, (list, tuple)):
        return PropertyKind.GENERIC, True, Any
    if value is not None and is_composite_type(type(value)):
        return PropertyKind.GENERIC, False, None
    return PropertyKind.PRIMITIVE, False, None


def _build_property(
    name: str,
    display_name: str,
    path: str,
    annotation: Any,
    value: Any,
    depth: int,
) -> SerializedProperty | None:
    description = _describe(annotation, value)
    if description is None:
        return None
    kind, is_array, element_annotation = description

    prop = SerializedProperty(name, display_name, path, kind, value, is_array, depth)
    if depth >= MAX_SERIALIZATION_DEPTH or value is None:
        return prop

    if is_array:
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                element = _build_property(
                    f"{name}[{index}]",
                    f"Element {index}",
                    f"{path}[{index}]",
                    element_annotation,
                    item,
                    depth + 1,
                )
                if element is None:
                    element = SerializedProperty(
                        f"{name}[{index}]",
                        f"Element {index}",
                        f"{path}[{index}]",
                        PropertyKind.PRIMITIVE,
                        item,
                        depth=depth + 1,
                    )
                prop._elements.append(element)
    elif kind is PropertyKind.GENERIC:
        prop.children = _build_children(value, path, depth + 1)

    return prop


def _build_children(instance: Any, parent_path: str, depth: int) -> list[SerializedProperty]:
    children = []
    for raw, value in iter_field_values(instance):
        path = f"{parent_path}.{raw.name}" if parent_path else raw.name
        child = _build_property(
            raw.name, nicify_name(raw.name), path, raw.annotation, value, depth
        )
        if child is not None:
            children.append(child)
    return children


class SerializedObject:
    """Serialized view over one component (or any composite value).

    The view is a snapshot taken at construction time.
    """

    def __init__(self, target: Any):
        self.target = target
        self.properties = _build_children(target, "", 0)

    def iter_visible(self) -> Iterator[SerializedProperty]:
        """Yield every visible property depth-first, parents before their children."""
        for prop in self.properties:
            yield from self._walk(prop)

    def find_property(self, path: str) -> SerializedProperty | None:
        for prop in self.iter_visible():
            if prop.path == path:
                return prop
        return None

    def _walk(self, prop: SerializedProperty) -> Iterator[SerializedProperty]:
        yield prop
        for child in prop.children:
            yield from self._walk(child)
        for element in prop._elements:
            if element.kind is PropertyKind.GENERIC:
                yield from self._walk(element)
