"""Classification of selected fields into mock generation strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fragment_factories.schema import TypeSchema
from fragment_factories.types import TypeDefinition, TypeRef, is_list_type

ID_FIELD = "id"


class FieldKind(Enum):
    """How the mock value of a field is produced."""

    ID = "id"            # registry sample identifier
    SCALAR = "scalar"    # synthesized literal
    ENUM = "enum"        # first declared enum member
    OBJECT = "object"    # nested factory call


@dataclass(frozen=True)
class FieldClassification:
    """Strategy for a field plus the facts the strategy needs."""

    kind: FieldKind
    base_type: TypeDefinition
    is_list: bool = False


def classify(schema: TypeSchema, type_ref: TypeRef, field_name: str) -> FieldClassification:
    """Classify a field by its declared type and name.

    The first matching rule wins: a field named ``id`` is an ID field whatever
    its scalar, then scalars, then enums; anything else is an object expected
    to have a fragment of its own.

    Raises:
        SchemaError: If the field's named type is not in the schema.
    """
    base_type = schema.named_type(type_ref)
    is_list = is_list_type(type_ref)

    if field_name == ID_FIELD:
        kind = FieldKind.ID
    elif base_type.is_scalar:
        kind = FieldKind.SCALAR
    elif base_type.is_enum:
        kind = FieldKind.ENUM
    else:
        kind = FieldKind.OBJECT
    return FieldClassification(kind=kind, base_type=base_type, is_list=is_list)
