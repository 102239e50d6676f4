"""
Static field declarations and their custom metadata.

The serialized view of a component only knows names, kinds and values. The
declarations built here carry what the serialized view drops, most
importantly whether a reference field is marked optional.
"""

from typing import Any, ClassVar, Protocol

from attrs import frozen

from treeguard.core.introspection import RawField, declared_fields, static_type

OPTIONAL_FLAG = "optional"


class FieldMarker:
    """Base class for metadata markers placed in `Annotated[...]` field annotations."""

    flag: ClassVar[str]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))


class OptionalRef(FieldMarker):
    """Marks a reference field as not required.

    Usage:
        target: Annotated[Node | None, OptionalRef()] = None

    Only single reference fields honor this marker; elements of reference
    collections are always validated.
    """

    flag = OPTIONAL_FLAG


@frozen
class FieldDeclaration:
    """Name, static type and metadata flags of one declared field."""

    name: str
    field_type: Any
    annotation: Any = None
    flags: frozenset[str] = frozenset()

    @property
    def is_optional(self) -> bool:
        return OPTIONAL_FLAG in self.flags


class TypeMetadataProvider(Protocol):
    """Supplies the declared fields of a runtime type."""

    def get_fields(self, cls: type) -> tuple[FieldDeclaration, ...]: ...


def _flags_of(raw: RawField) -> frozenset[str]:
    flags = {marker.flag for marker in raw.metadata if isinstance(marker, FieldMarker)}
    for key, value in raw.extra.items():
        if value is True:
            flags.add(key)
    return frozenset(flags)


class ReflectionMetadataProvider:
    """Reads field declarations from class definitions.

    Flags come from FieldMarker instances in `Annotated` metadata, from
    pydantic `json_schema_extra` entries set to True, and from dataclass or
    attrs field `metadata` entries set to True. Results are not cached.
    """

    def get_fields(self, cls: type) -> tuple[FieldDeclaration, ...]:
        return tuple(
            FieldDeclaration(
                name=raw.name,
                field_type=static_type(raw.annotation),
                annotation=raw.annotation,
                flags=_flags_of(raw),
            )
            for raw in declared_fields(cls)
        )
