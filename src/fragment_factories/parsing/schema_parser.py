"""Parser for GraphQL schema definition language (SDL)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from fragment_factories.errors import ParseError, SchemaError
from fragment_factories.parsing.grammar import CommonGrammar, build_parser, syntax_error
from fragment_factories.parsing.lexer import GraphQLLexer
from fragment_factories.types import (
    BUILTIN_SCALARS,
    CompositeTypeDefinition,
    EnumTypeDefinition,
    FieldDefinition,
    InputObjectTypeDefinition,
    InterfaceTypeDefinition,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    TypeDefinition,
    UnionTypeDefinition,
)


@dataclass
class TypeExtension:
    """An ``extend ...`` definition applied after all types are collected."""

    name: str
    kind: type[TypeDefinition]
    fields: list[FieldDefinition] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)


class SchemaParser(CommonGrammar):
    """Parser turning SDL text into named type definitions."""

    start = "document"

    def __init__(self) -> None:
        self.lexer = GraphQLLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    # ---- Document ----

    def p_document(self, p: yacc.YaccProduction) -> None:
        """document : definitions"""
        p[0] = p[1]

    def p_definitions_empty(self, p: yacc.YaccProduction) -> None:
        """definitions : empty"""
        p[0] = []

    def p_definitions_multiple(self, p: yacc.YaccProduction) -> None:
        """definitions : definitions definition"""
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])

    def p_opt_description(self, p: yacc.YaccProduction) -> None:
        """opt_description : STRING
                           | BLOCK_STRING
                           | empty"""
        p[0] = p[1]

    # ---- Type system definitions ----

    def p_definition_schema(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description SCHEMA opt_directives LBRACE operation_types RBRACE
                      | EXTEND SCHEMA opt_directives LBRACE operation_types RBRACE
                      | EXTEND SCHEMA directives"""
        p[0] = None

    def p_operation_types(self, p: yacc.YaccProduction) -> None:
        """operation_types : operation_type_def
                           | operation_types operation_type_def"""

    def p_operation_type_def(self, p: yacc.YaccProduction) -> None:
        """operation_type_def : operation_type COLON name"""

    def p_operation_type(self, p: yacc.YaccProduction) -> None:
        """operation_type : QUERY
                          | MUTATION
                          | SUBSCRIPTION"""
        p[0] = p[1]

    def p_definition_scalar(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description SCALAR name opt_directives"""
        p[0] = ScalarTypeDefinition(name=p[3])

    def p_definition_type(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description TYPE name opt_implements opt_directives opt_fields"""
        p[0] = ObjectTypeDefinition(name=p[3], fields=p[6], interfaces=p[4])

    def p_definition_interface(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description INTERFACE name opt_implements opt_directives opt_fields"""
        p[0] = InterfaceTypeDefinition(name=p[3], fields=p[6], interfaces=p[4])

    def p_definition_union(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description UNION name opt_directives opt_union_members"""
        p[0] = UnionTypeDefinition(name=p[3], members=p[5])

    def p_definition_enum(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description ENUM name opt_directives opt_enum_values"""
        p[0] = EnumTypeDefinition(name=p[3], values=p[5])

    def p_definition_input(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description INPUT name opt_directives opt_input_fields"""
        p[0] = InputObjectTypeDefinition(name=p[3], fields=p[5])

    def p_definition_directive(self, p: yacc.YaccProduction) -> None:
        """definition : opt_description DIRECTIVE AT name opt_argument_defs opt_repeatable ON directive_locations"""
        p[0] = None

    def p_opt_repeatable(self, p: yacc.YaccProduction) -> None:
        """opt_repeatable : REPEATABLE
                          | empty"""

    def p_directive_locations(self, p: yacc.YaccProduction) -> None:
        """directive_locations : NAME
                               | PIPE NAME
                               | directive_locations PIPE NAME"""

    # ---- Extensions ----

    def p_extension_scalar(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND SCALAR name directives"""
        p[0] = TypeExtension(name=p[3], kind=ScalarTypeDefinition)

    def p_extension_type(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND TYPE name opt_implements opt_directives opt_fields"""
        p[0] = TypeExtension(name=p[3], kind=ObjectTypeDefinition, fields=p[6], interfaces=p[4])

    def p_extension_interface(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND INTERFACE name opt_implements opt_directives opt_fields"""
        p[0] = TypeExtension(name=p[3], kind=InterfaceTypeDefinition, fields=p[6], interfaces=p[4])

    def p_extension_union(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND UNION name opt_directives opt_union_members"""
        p[0] = TypeExtension(name=p[3], kind=UnionTypeDefinition, members=p[5])

    def p_extension_enum(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND ENUM name opt_directives opt_enum_values"""
        p[0] = TypeExtension(name=p[3], kind=EnumTypeDefinition, values=p[5])

    def p_extension_input(self, p: yacc.YaccProduction) -> None:
        """definition : EXTEND INPUT name opt_directives opt_input_fields"""
        p[0] = TypeExtension(name=p[3], kind=InputObjectTypeDefinition, fields=p[5])

    # ---- Interfaces ----

    def p_opt_implements(self, p: yacc.YaccProduction) -> None:
        """opt_implements : IMPLEMENTS interface_list
                          | IMPLEMENTS AMP interface_list
                          | empty"""
        p[0] = p[len(p) - 1] if len(p) > 2 else []

    def p_interface_list(self, p: yacc.YaccProduction) -> None:
        """interface_list : NAME
                          | interface_list AMP NAME
                          | interface_list NAME"""
        # Legacy SDL separates interfaces with commas, which the lexer drops
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[len(p) - 1]]

    # ---- Fields ----

    def p_opt_fields(self, p: yacc.YaccProduction) -> None:
        """opt_fields : LBRACE field_defs RBRACE
                      | LBRACE RBRACE
                      | empty"""
        p[0] = p[2] if len(p) == 4 else []

    def p_field_defs(self, p: yacc.YaccProduction) -> None:
        """field_defs : field_def
                      | field_defs field_def"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_field_def(self, p: yacc.YaccProduction) -> None:
        """field_def : opt_description name opt_argument_defs COLON type_ref opt_directives"""
        p[0] = FieldDefinition(name=p[2], type_ref=p[5])

    def p_opt_argument_defs(self, p: yacc.YaccProduction) -> None:
        """opt_argument_defs : LPAREN input_value_defs RPAREN
                             | empty"""
        p[0] = p[2] if len(p) == 4 else []

    def p_opt_input_fields(self, p: yacc.YaccProduction) -> None:
        """opt_input_fields : LBRACE input_value_defs RBRACE
                            | LBRACE RBRACE
                            | empty"""
        p[0] = p[2] if len(p) == 4 else []

    def p_input_value_defs(self, p: yacc.YaccProduction) -> None:
        """input_value_defs : input_value_def
                            | input_value_defs input_value_def"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_input_value_def(self, p: yacc.YaccProduction) -> None:
        """input_value_def : opt_description name COLON type_ref opt_default opt_directives"""
        p[0] = FieldDefinition(name=p[2], type_ref=p[4])

    # ---- Enums and unions ----

    def p_opt_enum_values(self, p: yacc.YaccProduction) -> None:
        """opt_enum_values : LBRACE enum_value_defs RBRACE
                           | LBRACE RBRACE
                           | empty"""
        p[0] = p[2] if len(p) == 4 else []

    def p_enum_value_defs(self, p: yacc.YaccProduction) -> None:
        """enum_value_defs : enum_value_def
                           | enum_value_defs enum_value_def"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_enum_value_def(self, p: yacc.YaccProduction) -> None:
        """enum_value_def : opt_description enum_value_name opt_directives"""
        p[0] = p[2]

    def p_opt_union_members(self, p: yacc.YaccProduction) -> None:
        """opt_union_members : EQUALS union_members
                             | EQUALS PIPE union_members
                             | empty"""
        p[0] = p[len(p) - 1] if len(p) > 2 else []

    def p_union_members(self, p: yacc.YaccProduction) -> None:
        """union_members : name
                         | union_members PIPE name"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        syntax_error(p, SchemaError)

    # ---- Public API ----

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = build_parser(self, **kwargs)

    def parse(self, data: str) -> dict[str, TypeDefinition]:
        """Parse SDL and return named type definitions, extensions applied.

        Built-in scalars are always present.

        Raises:
            SchemaError: If the text is not valid SDL, a type is defined
                twice, or an extension targets an unknown type.
        """
        if self.parser is None:
            self.build()

        self.lexer.lexer.lineno = 1
        try:
            definitions = self.parser.parse(data, lexer=self.lexer.lexer) or []
        except ParseError as e:
            raise SchemaError(str(e)) from e

        types: dict[str, TypeDefinition] = {
            name: ScalarTypeDefinition(name=name, builtin=True) for name in BUILTIN_SCALARS
        }
        extensions: list[TypeExtension] = []
        for definition in definitions:
            if isinstance(definition, TypeExtension):
                extensions.append(definition)
                continue
            existing = types.get(definition.name)
            if existing is not None and not (
                isinstance(existing, ScalarTypeDefinition) and existing.builtin
            ):
                raise SchemaError(f"Type '{definition.name}' is already defined")
            types[definition.name] = definition

        for extension in extensions:
            _apply_extension(types, extension)
        return types


def _apply_extension(types: dict[str, TypeDefinition], extension: TypeExtension) -> None:
    """Merge an ``extend`` definition into the type it extends."""
    target = types.get(extension.name)
    if target is None:
        raise SchemaError(f"Cannot extend unknown type '{extension.name}'")
    if not isinstance(target, extension.kind):
        raise SchemaError(
            f"Cannot extend '{extension.name}': it is not a {extension.kind.__name__}"
        )

    if isinstance(target, CompositeTypeDefinition):
        target.fields.extend(extension.fields)
    if isinstance(target, (ObjectTypeDefinition, InterfaceTypeDefinition)):
        target.interfaces.extend(extension.interfaces)
    if isinstance(target, EnumTypeDefinition):
        target.values.extend(extension.values)
    if isinstance(target, UnionTypeDefinition):
        target.members.extend(extension.members)
