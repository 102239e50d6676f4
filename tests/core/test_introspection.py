"""
Tests for annotation classification and raw field enumeration.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar

import attrs
from pydantic import Field

from treeguard.core.introspection import (
    annotated_metadata,
    declared_fields,
    is_composite_type,
    is_mapping_annotation,
    is_nestable_class,
    is_reference_type,
    sequence_element_annotation,
    static_type,
    unwrap_annotation,
)
from treeguard.core.objects import Component, Composite, Node


class Settings(Composite):
    speed: float = 1.0


class Mover(Component):
    target: Node | None = None
    settings: Settings = Field(default_factory=Settings)
    cache: dict[str, int] = Field(default_factory=dict, exclude=True)


@dataclass
class Waypoint:
    anchor: Node | None = None
    note: str = field(default="", metadata={"exclude": True})


@attrs.define
class Patrol:
    leader: Node | None = None
    radius: float = attrs.field(default=2.0, metadata={"optional": True})


class PlainHolder:
    counter: ClassVar[int] = 0
    target: "Node"
    speed: float


class TestAnnotations:
    """Test unwrapping and classification of annotations."""

    def test_unwrap_optional_and_annotated(self):
        """Test that Annotated wrappers and a None union member are stripped."""
        assert unwrap_annotation(Node | None) is Node
        assert unwrap_annotation(Annotated[Node | None, "meta"]) is Node

    def test_unwrap_keeps_real_unions(self):
        """Test that unions of several non-None members are left unchanged."""
        annotation = Node | int
        assert unwrap_annotation(annotation) == annotation

    def test_static_type_of_generic_is_origin(self):
        """Test that a parameterized generic reports its origin class."""
        assert static_type(list[Node] | None) is list
        assert static_type(Settings) is Settings

    def test_annotated_metadata_looks_through_optional(self):
        """Test that markers are collected through an optional union."""
        assert annotated_metadata(Annotated[Node, "a"] | None) == ("a",)
        assert annotated_metadata(Annotated[Node, "a", "b"]) == ("a", "b")
        assert annotated_metadata(Node) == ()

    def test_reference_types(self):
        """Test classification of host object annotations as references."""
        assert is_reference_type(Node)
        assert is_reference_type(Mover | None)
        assert is_reference_type(Node | Mover)
        assert not is_reference_type(Node | int)
        assert not is_reference_type(Settings)

    def test_composite_types(self):
        """Test classification of models, dataclasses and attrs classes as composites."""
        assert is_composite_type(Settings)
        assert is_composite_type(Waypoint)
        assert is_composite_type(Patrol)
        assert not is_composite_type(Mover)
        assert not is_composite_type(PlainHolder)
        assert not is_composite_type(int)

    def test_nestable_classes(self):
        """Test that every non-primitive class, component types included, is nestable."""
        assert is_nestable_class(Settings)
        assert is_nestable_class(PlainHolder)
        assert is_nestable_class(list)
        assert not is_nestable_class(int)
        assert is_nestable_class(Node)
        assert is_nestable_class(Mover)
        assert not is_nestable_class(Node | int)

    def test_sequence_element_annotation(self):
        """Test element annotations of list and tuple annotations."""
        assert sequence_element_annotation(list[Node]) == (True, Node)
        assert sequence_element_annotation(tuple[Node, ...]) == (True, Node)
        assert sequence_element_annotation(list) == (True, Any)
        assert sequence_element_annotation(str) == (False, None)

    def test_mapping_annotations(self):
        """Test that dicts and sets are recognized as mappings."""
        assert is_mapping_annotation(dict[str, Node])
        assert is_mapping_annotation(set[int] | None)
        assert not is_mapping_annotation(list[Node])


class TestDeclaredFields:
    """Test raw field enumeration across class kinds."""

    def test_pydantic_fields_with_exclusion(self):
        """Test that excluded pydantic fields are marked as not serialized."""
        fields = {raw.name: raw for raw in declared_fields(Mover)}

        assert list(fields) == ["target", "settings", "cache"]
        assert fields["target"].serialized
        assert not fields["cache"].serialized

    def test_dataclass_fields(self):
        """Test field enumeration of a dataclass."""
        fields = {raw.name: raw for raw in declared_fields(Waypoint)}

        assert fields["anchor"].annotation == Node | None
        assert not fields["note"].serialized

    def test_attrs_fields(self):
        """Test field enumeration of an attrs class."""
        fields = {raw.name: raw for raw in declared_fields(Patrol)}

        assert list(fields) == ["leader", "radius"]
        assert fields["radius"].extra == {"optional": True}

    def test_plain_class_fields_skip_classvars(self):
        """Test that ClassVar annotations are not treated as fields."""
        fields = {raw.name: raw for raw in declared_fields(PlainHolder)}

        assert list(fields) == ["target", "speed"]
        assert fields["target"].annotation is Node

    def test_non_class_has_no_fields(self):
        """Non-class values have no declared fields."""
        assert declared_fields(Node | int) == []
