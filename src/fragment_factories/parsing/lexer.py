"""Lexer shared by the GraphQL schema and fragment parsers."""

import json

import ply.lex as lex

from fragment_factories.errors import ParseError


def block_string_value(raw: str) -> str:
    """Return the value of a block string body (text between the triple quotes).

    Applies the common-indentation removal and blank-line trimming rules of
    GraphQL block strings.
    """
    lines = raw.replace('\\"""', '"""').replace("\r\n", "\n").split("\n")

    common_indent: int | None = None
    for line in lines[1:]:
        stripped = line.lstrip(" \t")
        if not stripped:
            continue
        indent = len(line) - len(stripped)
        if common_indent is None or indent < common_indent:
            common_indent = indent

    if common_indent:
        lines = [lines[0]] + [line[common_indent:] for line in lines[1:]]

    while lines and not lines[0].strip(" \t"):
        lines.pop(0)
    while lines and not lines[-1].strip(" \t"):
        lines.pop()
    return "\n".join(lines)


class GraphQLLexer:
    """Lexer for tokenizing GraphQL documents (SDL and executable)."""

    # Keywords are contextual in GraphQL; the grammars accept them as names.
    reserved = {
        "fragment": "FRAGMENT",
        "on": "ON",
        "query": "QUERY",
        "mutation": "MUTATION",
        "subscription": "SUBSCRIPTION",
        "type": "TYPE",
        "interface": "INTERFACE",
        "input": "INPUT",
        "enum": "ENUM",
        "scalar": "SCALAR",
        "union": "UNION",
        "schema": "SCHEMA",
        "extend": "EXTEND",
        "directive": "DIRECTIVE",
        "implements": "IMPLEMENTS",
        "repeatable": "REPEATABLE",
        "true": "TRUE",
        "false": "FALSE",
        "null": "NULL",
    }

    tokens = [
        "NAME",
        "INT",
        "FLOAT",
        "STRING",
        "BLOCK_STRING",
        "SPREAD",
        "BANG",
        "DOLLAR",
        "AMP",
        "LPAREN",
        "RPAREN",
        "COLON",
        "EQUALS",
        "AT",
        "LBRACKET",
        "RBRACKET",
        "LBRACE",
        "RBRACE",
        "PIPE",
    ] + list(reserved.values())

    t_SPREAD = r"\.\.\."
    t_BANG = r"!"
    t_DOLLAR = r"\$"
    t_AMP = r"&"
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_COLON = r":"
    t_EQUALS = r"="
    t_AT = r"@"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_LBRACE = r"\{"
    t_RBRACE = r"\}"
    t_PIPE = r"\|"

    # Commas are insignificant in GraphQL
    t_ignore = " \t\r,\ufeff"

    t_ignore_COMMENT = r"\#[^\n]*"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_BLOCK_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"""(?:\\"""|[^"]|"(?!""))*"""'
        t.lexer.lineno += t.value.count("\n")
        t.value = block_string_value(t.value[3:-3])
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"(?:[^"\\\n]|\\.)*"'
        # GraphQL string escapes are the JSON ones
        try:
            t.value = json.loads(t.value, strict=False)
        except ValueError:
            raise ParseError(f"Invalid string literal {t.value} at line {t.lineno}") from None
        return t

    def t_FLOAT(self, t: lex.LexToken) -> lex.LexToken:
        r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+(?:[eE][+-]?[0-9]+)?|[eE][+-]?[0-9]+)"
        t.value = float(t.value)
        return t

    def t_INT(self, t: lex.LexToken) -> lex.LexToken:
        r"-?(?:0|[1-9][0-9]*)"
        t.value = int(t.value)
        return t

    def t_NAME(self, t: lex.LexToken) -> lex.LexToken:
        r"[_A-Za-z][_0-9A-Za-z]*"
        t.type = self.reserved.get(t.value, "NAME")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise ParseError(f"Illegal character '{t.value[0]}' at line {t.lineno}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.lineno = 1
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
