"""
Type introspection helpers shared by the metadata provider and the serializer.

These helpers classify annotations (reference, composite, sequence, mapping,
primitive) and enumerate the raw declared fields of pydantic models,
dataclasses, attrs classes and annotated plain classes. They carry no
validation policy of their own.
"""

import dataclasses
import inspect
import logging
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from enum import Enum
from types import NoneType, UnionType
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

import attrs
from pydantic import BaseModel

from treeguard.core.objects import HostObject

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = (str, int, float, bool, bytes, complex, NoneType)

_UNION_ORIGINS = (Union, UnionType)
_SEQUENCE_ORIGINS = (list, tuple, Sequence)
_MAPPING_ORIGINS = (dict, set, frozenset, Mapping, Set)


@dataclass
class RawField:
    """A declared field as read from a class, before any policy is applied."""

    name: str
    annotation: Any
    metadata: tuple = ()
    extra: dict[str, Any] = field(default_factory=dict)
    serialized: bool = True


def unwrap_annotation(annotation: Any) -> Any:
    """Strip `Annotated[...]` wrappers and a `None` member from unions.

    `Annotated[Node | None, marker]` unwraps to `Node`. Unions of more than
    one non-None member are returned unchanged.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        return unwrap_annotation(get_args(annotation)[0])
    if origin in _UNION_ORIGINS:
        members = [arg for arg in get_args(annotation) if arg is not NoneType]
        if len(members) == 1:
            return unwrap_annotation(members[0])
    return annotation


def static_type(annotation: Any) -> Any:
    """The declared class of an annotation: `list[Node] | None` is `list`."""
    unwrapped = unwrap_annotation(annotation)
    origin = get_origin(unwrapped)
    if origin is not None and origin not in _UNION_ORIGINS:
        return origin
    return unwrapped


def annotated_metadata(annotation: Any) -> tuple:
    """Collect `Annotated` metadata from an annotation, looking through `X | None`."""
    origin = get_origin(annotation)
    if origin is Annotated:
        args = get_args(annotation)
        return tuple(args[1:]) + annotated_metadata(args[0])
    if origin in _UNION_ORIGINS:
        collected: tuple = ()
        for arg in get_args(annotation):
            collected += annotated_metadata(arg)
        return collected
    return ()


def is_reference_type(annotation: Any) -> bool:
    """True for HostObject subclasses and unions made only of them."""
    unwrapped = unwrap_annotation(annotation)
    if get_origin(unwrapped) in _UNION_ORIGINS:
        members = [arg for arg in get_args(unwrapped) if arg is not NoneType]
        return bool(members) and all(is_reference_type(m) for m in members)
    return isinstance(unwrapped, type) and issubclass(unwrapped, HostObject)


def is_composite_type(annotation: Any) -> bool:
    """True for serializable value classes: pydantic models, dataclasses, attrs classes."""
    unwrapped = unwrap_annotation(annotation)
    if not isinstance(unwrapped, type) or issubclass(unwrapped, HostObject):
        return False
    return (
        issubclass(unwrapped, BaseModel)
        or dataclasses.is_dataclass(unwrapped)
        or attrs.has(unwrapped)
    )


def is_nestable_class(field_type: Any) -> bool:
    """True if a field's static type is a class whose own fields may be searched.

    Primitives and enums are excluded. Reference types are classes like any
    other, so component types are searched too.
    """
    if not isinstance(field_type, type):
        return False
    return field_type not in PRIMITIVE_TYPES and not issubclass(field_type, Enum)


def sequence_element_annotation(annotation: Any) -> tuple[bool, Any]:
    """Return `(is_sequence, element_annotation)` for list/tuple annotations.

    Strings and bytes are not sequences here. Bare `list` yields `Any` elements.
    """
    unwrapped = unwrap_annotation(annotation)
    if unwrapped in (list, tuple):
        return True, Any
    origin = get_origin(unwrapped)
    if origin not in _SEQUENCE_ORIGINS:
        return False, None
    args = [arg for arg in get_args(unwrapped) if arg is not Ellipsis]
    return True, (args[0] if args else Any)


def is_mapping_annotation(annotation: Any) -> bool:
    unwrapped = unwrap_annotation(annotation)
    if unwrapped in (dict, set, frozenset):
        return True
    return get_origin(unwrapped) in _MAPPING_ORIGINS


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations of `cls` and its bases, keeping `Annotated` extras.

    Falls back to the raw, possibly string, annotations when a forward
    reference cannot be resolved.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        logger.debug("Using raw annotations for %s: %s", cls.__qualname__, e)
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def declared_fields(cls: type) -> list[RawField]:
    """
    Enumerate the declared instance fields of `cls` in declaration order.

    Inherited fields are included. Supports pydantic models, dataclasses,
    attrs classes and, as a fallback, plain classes with annotations
    (ClassVar annotations excluded).

    Params:
        cls: The class to read

    Returns:
        List of RawField entries, base class fields first
    """
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        result = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            result.append(
                RawField(
                    name=name,
                    annotation=info.annotation,
                    metadata=tuple(info.metadata) + annotated_metadata(info.annotation),
                    extra=dict(extra),
                    serialized=not info.exclude,
                )
            )
        return result

    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        return [
            _raw_field(f.name, hints.get(f.name, f.type), f.metadata)
            for f in dataclasses.fields(cls)
        ]

    if isinstance(cls, type) and attrs.has(cls):
        hints = _type_hints(cls)
        return [
            _raw_field(a.name, hints.get(a.name, a.type), a.metadata)
            for a in attrs.fields(cls)
        ]

    if not isinstance(cls, type):
        return []

    return [
        RawField(name=name, annotation=hint, metadata=annotated_metadata(hint))
        for name, hint in _type_hints(cls).items()
        if get_origin(hint) is not ClassVar and hint is not ClassVar
    ]


def _raw_field(name: str, annotation: Any, metadata: Mapping) -> RawField:
    extra = dict(metadata)
    return RawField(
        name=name,
        annotation=annotation,
        metadata=annotated_metadata(annotation),
        extra=extra,
        serialized=not extra.get("exclude", False),
    )


def iter_field_values(instance: Any):
    """Yield `(RawField, value)` for every serialized field of a composite or component."""
    for raw in declared_fields(type(instance)):
        if raw.serialized:
            yield raw, getattr(instance, raw.name, None)
