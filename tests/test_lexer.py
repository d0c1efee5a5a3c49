"""Tests for the GraphQL and ids module lexers."""

import pytest

from fragment_factories.errors import ParseError
from fragment_factories.parsing.ts_lexer import TypeScriptLexer
from fragment_factories.parsing.lexer import GraphQLLexer, block_string_value


@pytest.fixture
def lexer():
    lexer = GraphQLLexer()
    lexer.build()
    return lexer


class TestGraphQLLexer:
    """Tests for the GraphQL lexer."""

    def test_tokenize_fragment(self, lexer):
        """Test tokenizing a fragment header and selection."""
        tokens = lexer.tokenize("fragment UserCard on User { id }")
        token_types = [t.type for t in tokens]

        assert token_types == ["FRAGMENT", "NAME", "ON", "NAME", "LBRACE", "NAME", "RBRACE"]

    def test_commas_ignored(self, lexer):
        """Test that commas are insignificant."""
        tokens = lexer.tokenize("a, b,, c")
        assert [t.type for t in tokens] == ["NAME", "NAME", "NAME"]

    def test_comments_ignored(self, lexer):
        """Test that # comments are dropped and lines still counted."""
        tokens = lexer.tokenize("# header\nid # trailing\nemail")

        assert [t.value for t in tokens] == ["id", "email"]
        assert tokens[1].lineno == 3

    def test_spread_and_punctuation(self, lexer):
        """Test spreads and type punctuation."""
        tokens = lexer.tokenize("...Base tags: [String!]!")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "SPREAD",
            "NAME",
            "NAME",
            "COLON",
            "LBRACKET",
            "NAME",
            "BANG",
            "RBRACKET",
            "BANG",
        ]

    def test_numbers(self, lexer):
        """Test int and float literals."""
        tokens = lexer.tokenize("10 -3 1.5 2e3")

        assert [t.type for t in tokens] == ["INT", "INT", "FLOAT", "FLOAT"]
        assert [t.value for t in tokens] == [10, -3, 1.5, 2000.0]

    def test_string_escapes(self, lexer):
        """Test that string escapes are decoded."""
        tokens = lexer.tokenize(r'"say \"hi\"\n"')

        assert tokens[0].type == "STRING"
        assert tokens[0].value == 'say "hi"\n'

    def test_block_string(self, lexer):
        """Test block strings keep relative indentation only."""
        tokens = lexer.tokenize('"""\n    A user.\n      Indented.\n"""')

        assert tokens[0].type == "BLOCK_STRING"
        assert tokens[0].value == "A user.\n  Indented."

    def test_block_string_counts_lines(self, lexer):
        """Test that block strings advance the line number."""
        tokens = lexer.tokenize('"""\nline\n"""\nnext')
        assert tokens[1].lineno == 4

    def test_illegal_character(self, lexer):
        """Test that illegal characters raise ParseError."""
        with pytest.raises(ParseError, match="Illegal character '%'"):
            lexer.tokenize("id %")

    def test_tokenize_resets_line_numbers(self, lexer):
        """Test that each tokenize call starts at line 1."""
        lexer.tokenize("a\nb\nc")
        tokens = lexer.tokenize("d")
        assert tokens[0].lineno == 1


class TestBlockStringValue:
    def test_first_line_keeps_its_indent(self):
        assert block_string_value("  first\n    second\n    third") == "  first\nsecond\nthird"

    def test_blank_lines_trimmed(self):
        assert block_string_value("\n\n  text\n\n") == "text"


class TestTypeScriptLexer:
    """Tests for the coarse TypeScript lexer."""

    def test_tokenize_object_literal(self):
        """Test tokenizing an ids object literal."""
        lexer = TypeScriptLexer()
        lexer.build()

        tokens = lexer.tokenize('export const ids = { user: ["1", 2] };')
        token_types = [t.type for t in tokens]

        assert token_types == [
            "IDENTIFIER",
            "IDENTIFIER",
            "IDENTIFIER",
            "EQUALS",
            "LBRACE",
            "IDENTIFIER",
            "COLON",
            "LBRACKET",
            "STRING",
            "COMMA",
            "NUMBER",
            "RBRACKET",
            "RBRACE",
            "SEMI",
        ]

    def test_comments_skipped(self):
        """Test that line and block comments produce no tokens."""
        lexer = TypeScriptLexer()
        lexer.build()

        tokens = lexer.tokenize("// one\n/* two\n three */ ids")

        assert [t.value for t in tokens] == ["ids"]
        assert tokens[0].lineno == 3

    def test_unknown_characters_become_other(self):
        """Test that arrows and generics never fail to tokenize."""
        lexer = TypeScriptLexer()
        lexer.build()

        tokens = lexer.tokenize("Record<string, number> => x.y")
        token_types = [t.type for t in tokens]

        assert "OTHER" in token_types
        assert "EQUALS" not in token_types
