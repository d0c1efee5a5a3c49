"""Lexer for the TypeScript modules read by the generator: the ids registry and enum declarations."""

import ply.lex as lex


class TypeScriptLexer:
    """Coarse TypeScript tokenizer.

    Only the tokens needed to walk object literals and enum bodies are
    distinguished; any other character becomes an ``OTHER`` token so the rest
    of the module never fails to tokenize. All rules are functions because
    PLY tries function rules in definition order and ``OTHER`` must come last.
    """

    tokens = [
        "IDENTIFIER",
        "STRING",
        "NUMBER",
        "LBRACE",
        "RBRACE",
        "LBRACKET",
        "RBRACKET",
        "COLON",
        "COMMA",
        "EQUALS",
        "SEMI",
        "OTHER",
    ]

    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_LINE_COMMENT(self, t: lex.LexToken) -> None:
        r"//[^\n]*"

    def t_BLOCK_COMMENT(self, t: lex.LexToken) -> None:
        r"/\*(?:.|\n)*?\*/"
        t.lexer.lineno += t.value.count("\n")

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'|`(?:[^`\\]|\\.)*`"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_NUMBER(self, t: lex.LexToken) -> lex.LexToken:
        r"-?[0-9][0-9_]*(?:\.[0-9]+)?"
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[A-Za-z_$][A-Za-z0-9_$]*"
        return t

    def t_EQUALS(self, t: lex.LexToken) -> lex.LexToken:
        r"=>|===?|="
        if t.value != "=":
            t.type = "OTHER"
        return t

    def t_LBRACE(self, t: lex.LexToken) -> lex.LexToken:
        r"\{"
        return t

    def t_RBRACE(self, t: lex.LexToken) -> lex.LexToken:
        r"\}"
        return t

    def t_LBRACKET(self, t: lex.LexToken) -> lex.LexToken:
        r"\["
        return t

    def t_RBRACKET(self, t: lex.LexToken) -> lex.LexToken:
        r"\]"
        return t

    def t_COLON(self, t: lex.LexToken) -> lex.LexToken:
        r":"
        return t

    def t_COMMA(self, t: lex.LexToken) -> lex.LexToken:
        r","
        return t

    def t_SEMI(self, t: lex.LexToken) -> lex.LexToken:
        r";"
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_OTHER(self, t: lex.LexToken) -> lex.LexToken:
        r"."
        return t

    def t_error(self, t: lex.LexToken) -> None:
        t.lexer.skip(1)

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.lexer.lineno = 1
        self.lexer.input(data)
        tokens = []
        while True:
            tok = self.lexer.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
