"""Type schema loaded from a GraphQL SDL document."""

from __future__ import annotations

from pathlib import Path

from fragment_factories.errors import SchemaError
from fragment_factories.parsing import SchemaParser
from fragment_factories.types import (
    CompositeTypeDefinition,
    EnumTypeDefinition,
    InterfaceTypeDefinition,
    ObjectTypeDefinition,
    TypeDefinition,
    TypeRef,
    UnionTypeDefinition,
    unwrap_type,
)

# Meta field every composite type answers
TYPENAME_FIELD = "__typename"


class TypeSchema:
    """Named types of a schema, answering type and field lookups.

    Loaded once per run and not modified afterwards.
    """

    def __init__(self, types: dict[str, TypeDefinition]) -> None:
        self._types = dict(types)

    @classmethod
    def load(cls, source: str) -> TypeSchema:
        """Parse SDL text into a schema.

        Raises:
            SchemaError: If the SDL is invalid.
        """
        return cls(SchemaParser().parse(source))

    @classmethod
    def from_file(cls, path: Path | str) -> TypeSchema:
        """Load the schema stored at ``path``.

        Raises:
            SchemaError: If the file cannot be read or holds invalid SDL.
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaError(f"Cannot read schema file {path}: {e}") from e
        return cls.load(source)

    def get_type(self, name: str) -> TypeDefinition | None:
        """Get a type by name."""
        return self._types.get(name)

    def get_or_raise(self, name: str) -> TypeDefinition:
        """Get a type by name, raising if not found."""
        type_def = self._types.get(name)
        if type_def is None:
            raise SchemaError(f"Type '{name}' not found in schema")
        return type_def

    def get_field_type(self, type_name: str, field_name: str) -> TypeRef:
        """Return the declared type signature of ``type_name.field_name``.

        Raises:
            SchemaError: If the type is missing, has no fields, or does
                not declare the field.
        """
        type_def = self.get_or_raise(type_name)
        if not isinstance(type_def, (CompositeTypeDefinition, UnionTypeDefinition)):
            raise SchemaError(f"Type '{type_name}' has no fields")
        field_def = type_def.get_field(field_name)
        if field_def is None:
            raise SchemaError(f"Field '{field_name}' not found on type '{type_name}'")
        return field_def.type_ref

    def named_type(self, type_ref: TypeRef) -> TypeDefinition:
        """Resolve a type signature to its underlying named type definition."""
        return self.get_or_raise(unwrap_type(type_ref).name)

    def enum_values(self, name: str) -> list[str]:
        """Return the declared values of enum ``name`` in order."""
        type_def = self.get_or_raise(name)
        if not isinstance(type_def, EnumTypeDefinition):
            raise SchemaError(f"Type '{name}' is not an enum")
        return list(type_def.values)

    def possible_types(self, name: str) -> list[str]:
        """Object types a value of type ``name`` can be, in schema order.

        An object type is its only possible type. Unions answer their members
        and interfaces the object types implementing them.
        """
        type_def = self.get_or_raise(name)
        if isinstance(type_def, UnionTypeDefinition):
            return list(type_def.members)
        if isinstance(type_def, InterfaceTypeDefinition):
            return [
                t.name
                for t in self._types.values()
                if isinstance(t, ObjectTypeDefinition) and name in t.interfaces
            ]
        return [type_def.name]

    def concrete_type_name(self, type_def: TypeDefinition) -> str:
        """Object type used to stand in for ``type_def`` in a mock value."""
        possible = self.possible_types(type_def.name)
        return possible[0] if possible else type_def.name

    def list_types(self) -> list[str]:
        """List all type names, built-in scalars included."""
        return list(self._types.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._types
