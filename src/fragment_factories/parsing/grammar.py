"""Grammar rules shared by the schema and fragment parsers.

PLY collects ``p_*`` methods through ``dir()``, so parsers pick these
productions up by inheriting from ``CommonGrammar``.
"""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from fragment_factories.parsing.lexer import GraphQLLexer
from fragment_factories.types import ListType, NamedType, NonNullType


class Variable:
    """A ``$name`` reference inside an argument value."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"${self.name}"


class CommonGrammar:
    """Names, values, directives, arguments and type references."""

    tokens = GraphQLLexer.tokens

    # ---- Names ----

    def p_name(self, p: yacc.YaccProduction) -> None:
        """name : fragment_name
                | ON"""
        p[0] = p[1]

    def p_fragment_name(self, p: yacc.YaccProduction) -> None:
        """fragment_name : enum_value_name
                         | TRUE
                         | FALSE
                         | NULL"""
        p[0] = p[1]

    def p_enum_value_name(self, p: yacc.YaccProduction) -> None:
        """enum_value_name : NAME
                           | FRAGMENT
                           | QUERY
                           | MUTATION
                           | SUBSCRIPTION
                           | TYPE
                           | INTERFACE
                           | INPUT
                           | ENUM
                           | SCALAR
                           | UNION
                           | SCHEMA
                           | EXTEND
                           | DIRECTIVE
                           | IMPLEMENTS
                           | REPEATABLE"""
        p[0] = p[1]

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        p[0] = None

    # ---- Type references ----

    def p_type_ref_nullable(self, p: yacc.YaccProduction) -> None:
        """type_ref : nullable_type"""
        p[0] = p[1]

    def p_type_ref_non_null(self, p: yacc.YaccProduction) -> None:
        """type_ref : nullable_type BANG"""
        p[0] = NonNullType(p[1])

    def p_nullable_type_named(self, p: yacc.YaccProduction) -> None:
        """nullable_type : name"""
        p[0] = NamedType(p[1])

    def p_nullable_type_list(self, p: yacc.YaccProduction) -> None:
        """nullable_type : LBRACKET type_ref RBRACKET"""
        p[0] = ListType(p[2])

    # ---- Values ----

    def p_value_variable(self, p: yacc.YaccProduction) -> None:
        """value : DOLLAR name"""
        p[0] = Variable(p[2])

    def p_value_literal(self, p: yacc.YaccProduction) -> None:
        """value : INT
                 | FLOAT
                 | STRING
                 | BLOCK_STRING
                 | enum_value_name"""
        p[0] = p[1]

    def p_value_boolean(self, p: yacc.YaccProduction) -> None:
        """value : TRUE
                 | FALSE"""
        p[0] = p[1] == "true"

    def p_value_null(self, p: yacc.YaccProduction) -> None:
        """value : NULL"""
        p[0] = None

    def p_value_list(self, p: yacc.YaccProduction) -> None:
        """value : LBRACKET value_list RBRACKET
                 | LBRACKET RBRACKET"""
        p[0] = p[2] if len(p) == 4 else []

    def p_value_list_items(self, p: yacc.YaccProduction) -> None:
        """value_list : value
                      | value_list value"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_value_object(self, p: yacc.YaccProduction) -> None:
        """value : LBRACE object_fields RBRACE
                 | LBRACE RBRACE"""
        p[0] = dict(p[2]) if len(p) == 4 else {}

    def p_object_fields(self, p: yacc.YaccProduction) -> None:
        """object_fields : object_field
                         | object_fields object_field"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_object_field(self, p: yacc.YaccProduction) -> None:
        """object_field : name COLON value"""
        p[0] = (p[1], p[3])

    # ---- Arguments and directives ----

    def p_opt_arguments(self, p: yacc.YaccProduction) -> None:
        """opt_arguments : LPAREN argument_list RPAREN
                         | empty"""
        p[0] = dict(p[2]) if len(p) == 4 else {}

    def p_argument_list(self, p: yacc.YaccProduction) -> None:
        """argument_list : argument
                         | argument_list argument"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_argument(self, p: yacc.YaccProduction) -> None:
        """argument : name COLON value"""
        p[0] = (p[1], p[3])

    def p_opt_directives(self, p: yacc.YaccProduction) -> None:
        """opt_directives : directives
                          | empty"""
        p[0] = p[1] or []

    def p_directives(self, p: yacc.YaccProduction) -> None:
        """directives : directive
                      | directives directive"""
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[2]]

    def p_directive(self, p: yacc.YaccProduction) -> None:
        """directive : AT name opt_arguments"""
        p[0] = (p[2], p[3])

    def p_opt_default(self, p: yacc.YaccProduction) -> None:
        """opt_default : EQUALS value
                       | empty"""
        p[0] = p[2] if len(p) == 3 else None


def syntax_error(p: yacc.YaccProduction | None, error_type: type[Exception]) -> None:
    """Raise ``error_type`` describing the offending token."""
    if p:
        raise error_type(f"Syntax error at '{p.value}' (line {p.lineno})")
    raise error_type("Syntax error at end of input")


def build_parser(module: Any, **kwargs: Any) -> yacc.LRParser:
    """Build an LALR parser for ``module`` without writing table files."""
    kwargs.setdefault("debug", False)
    kwargs.setdefault("write_tables", False)
    kwargs.setdefault("errorlog", yacc.NullLogger())
    return yacc.yacc(module=module, **kwargs)
