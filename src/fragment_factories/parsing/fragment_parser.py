"""Parser for GraphQL executable documents holding fragment definitions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import ply.yacc as yacc

from fragment_factories.errors import ParseError
from fragment_factories.fragment import (
    FieldSelection,
    FragmentDocument,
    FragmentSpreadSelection,
    InlineFragmentSelection,
)
from fragment_factories.parsing.grammar import CommonGrammar, build_parser, syntax_error
from fragment_factories.parsing.lexer import GraphQLLexer


class FragmentParser(CommonGrammar):
    """Parser for ``*.fragment.gql`` documents.

    Operations are accepted so that mixed documents parse, but only fragment
    definitions are returned.
    """

    start = "document"

    def __init__(self) -> None:
        self.lexer = GraphQLLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    # ---- Document ----

    def p_document(self, p: yacc.YaccProduction) -> None:
        """document : definitions"""
        p[0] = p[1]

    def p_definitions_single(self, p: yacc.YaccProduction) -> None:
        """definitions : definition"""
        p[0] = [p[1]] if p[1] is not None else []

    def p_definitions_multiple(self, p: yacc.YaccProduction) -> None:
        """definitions : definitions definition"""
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])

    def p_definition_fragment(self, p: yacc.YaccProduction) -> None:
        """definition : FRAGMENT fragment_name ON name opt_directives selection_set"""
        p[0] = FragmentDocument(name=p[2], type_condition=p[4], selections=p[6])

    def p_definition_operation(self, p: yacc.YaccProduction) -> None:
        """definition : selection_set
                      | operation_type opt_operation_name opt_variable_defs opt_directives selection_set"""
        p[0] = None

    def p_operation_type(self, p: yacc.YaccProduction) -> None:
        """operation_type : QUERY
                          | MUTATION
                          | SUBSCRIPTION"""
        p[0] = p[1]

    def p_opt_operation_name(self, p: yacc.YaccProduction) -> None:
        """opt_operation_name : name
                              | empty"""
        p[0] = p[1]

    def p_opt_variable_defs(self, p: yacc.YaccProduction) -> None:
        """opt_variable_defs : LPAREN variable_defs RPAREN
                             | empty"""

    def p_variable_defs(self, p: yacc.YaccProduction) -> None:
        """variable_defs : variable_def
                         | variable_defs variable_def"""

    def p_variable_def(self, p: yacc.YaccProduction) -> None:
        """variable_def : DOLLAR name COLON type_ref opt_default opt_directives"""

    # ---- Selections ----

    def p_selection_set(self, p: yacc.YaccProduction) -> None:
        """selection_set : LBRACE selections RBRACE"""
        p[0] = p[2]

    def p_selections_single(self, p: yacc.YaccProduction) -> None:
        """selections : selection"""
        p[0] = p[1]

    def p_selections_multiple(self, p: yacc.YaccProduction) -> None:
        """selections : selections selection"""
        p[0] = p[1] + p[2]

    def p_selection_field(self, p: yacc.YaccProduction) -> None:
        """selection : name opt_arguments opt_directives opt_selection_set"""
        p[0] = [FieldSelection(name=p[1], selections=p[4])]

    def p_selection_aliased_field(self, p: yacc.YaccProduction) -> None:
        """selection : name COLON name opt_arguments opt_directives opt_selection_set"""
        p[0] = [FieldSelection(name=p[3], alias=p[1], selections=p[6])]

    def p_selection_spread(self, p: yacc.YaccProduction) -> None:
        """selection : SPREAD fragment_name opt_directives"""
        p[0] = [FragmentSpreadSelection(name=p[2])]

    def p_selection_inline_fragment(self, p: yacc.YaccProduction) -> None:
        """selection : SPREAD ON name opt_directives selection_set"""
        p[0] = [InlineFragmentSelection(type_condition=p[3], selections=p[5])]

    def p_selection_inline_fragment_untyped(self, p: yacc.YaccProduction) -> None:
        """selection : SPREAD directives selection_set
                     | SPREAD selection_set"""
        p[0] = [InlineFragmentSelection(type_condition=None, selections=p[len(p) - 1])]

    def p_opt_selection_set(self, p: yacc.YaccProduction) -> None:
        """opt_selection_set : selection_set
                             | empty"""
        p[0] = p[1] or []

    def p_error(self, p: yacc.YaccProduction) -> None:
        syntax_error(p, ParseError)

    # ---- Public API ----

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = build_parser(self, **kwargs)

    def parse(self, data: str) -> FragmentDocument:
        """Parse a document and return its first fragment definition.

        Raises:
            ParseError: If the document is not valid GraphQL or defines
                no fragment.
        """
        if self.parser is None:
            self.build()

        self.lexer.lexer.lineno = 1
        definitions = self.parser.parse(data, lexer=self.lexer.lexer) if data.strip() else []
        for definition in definitions or []:
            if isinstance(definition, FragmentDocument):
                return definition
        raise ParseError("No fragment definition found")


_parser: FragmentParser | None = None


def parse_fragment(data: str) -> FragmentDocument:
    """Parse fragment document text with a shared parser instance."""
    global _parser
    if _parser is None:
        _parser = FragmentParser()
    return _parser.parse(data)


def read_fragment(path: Path) -> FragmentDocument:
    """Read and parse the fragment document at ``path``.

    Raises:
        ParseError: If the file is not UTF-8 text or defines no fragment.
        OSError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"{path} is not valid UTF-8: {e}") from e
    return parse_fragment(text)


def read_fragment_name(path: Path) -> str:
    """Return the name of the fragment defined in the file at ``path``."""
    return read_fragment(path).name
