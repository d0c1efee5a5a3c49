"""Type definitions for GraphQL schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# Scalars every GraphQL schema provides without declaring them
BUILTIN_SCALARS: tuple[str, ...] = ("String", "Int", "Float", "Boolean", "ID")


# ---- Type references (field type signatures) ----


@dataclass(frozen=True)
class NamedType:
    """Reference to a named type, e.g. ``String``."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListType:
    """List wrapper, e.g. ``[String]``."""

    of_type: TypeRef

    def __str__(self) -> str:
        return f"[{self.of_type}]"


@dataclass(frozen=True)
class NonNullType:
    """Non-null wrapper, e.g. ``String!``."""

    of_type: TypeRef

    def __str__(self) -> str:
        return f"{self.of_type}!"


TypeRef = Union[NamedType, ListType, NonNullType]


def unwrap_type(type_ref: TypeRef) -> NamedType:
    """Strip every non-null and list wrapper to reach the named type."""
    while isinstance(type_ref, (NonNullType, ListType)):
        type_ref = type_ref.of_type
    return type_ref


def is_list_type(type_ref: TypeRef) -> bool:
    """Return whether the type is a list, ignoring one outer non-null wrapper.

    ``[String!]``, ``[String]!`` and ``[[Int]]`` are lists; ``String!`` is not.
    """
    if isinstance(type_ref, NonNullType):
        type_ref = type_ref.of_type
    return isinstance(type_ref, ListType)


# ---- Named type definitions ----


@dataclass
class TypeDefinition:
    """Base class for all named type definitions."""

    name: str

    @property
    def is_scalar(self) -> bool:
        """Return whether this type is a leaf scalar."""
        return False

    @property
    def is_enum(self) -> bool:
        """Return whether this type is an enum."""
        return False

    @property
    def is_composite(self) -> bool:
        """Return whether this type has selectable fields."""
        return False


@dataclass
class ScalarTypeDefinition(TypeDefinition):
    """Built-in or custom scalar (``scalar DateTime``)."""

    builtin: bool = False

    @property
    def is_scalar(self) -> bool:
        return True


@dataclass
class EnumTypeDefinition(TypeDefinition):
    """Enum with its values in declaration order."""

    values: list[str] = field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        return True


@dataclass
class FieldDefinition:
    """A field declared on an object, interface or input type."""

    name: str
    type_ref: TypeRef


@dataclass
class CompositeTypeDefinition(TypeDefinition):
    """Base for types that declare fields."""

    fields: list[FieldDefinition] = field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        return True

    def get_field(self, name: str) -> FieldDefinition | None:
        """Get a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class ObjectTypeDefinition(CompositeTypeDefinition):
    """``type User implements Node { ... }``"""

    interfaces: list[str] = field(default_factory=list)


@dataclass
class InterfaceTypeDefinition(CompositeTypeDefinition):
    """``interface Node { ... }``"""

    interfaces: list[str] = field(default_factory=list)


@dataclass
class InputObjectTypeDefinition(CompositeTypeDefinition):
    """``input UserFilter { ... }``"""


@dataclass
class UnionTypeDefinition(TypeDefinition):
    """``union SearchResult = User | Post``

    Unions expose no fields of their own; only ``__typename`` is selectable.
    """

    members: list[str] = field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        return True

    def get_field(self, name: str) -> FieldDefinition | None:
        return None
