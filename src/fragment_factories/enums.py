"""Locating the TypeScript declarations of schema enums under the source root."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

import structlog

from fragment_factories.config import FACTORY_SUFFIX
from fragment_factories.parsing.ts_lexer import TypeScriptLexer

logger = structlog.get_logger()

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class EnumDeclaration:
    """``enum Name { ... }`` declared in a TypeScript module."""

    name: str
    path: Path
    members: tuple[str, ...]

    def member_reference(self, member: str) -> str:
        """TypeScript expression selecting ``member`` of the enum."""
        if _IDENTIFIER_RE.match(member):
            return f"{self.name}.{member}"
        return f"{self.name}[{json.dumps(member)}]"


class EnumLocator:
    """Finds where a TypeScript enum is declared below ``source_dir``.

    Modules are searched in sorted path order and the first declaration wins.
    Generated factories are never searched. Results are cached per enum name.
    """

    def __init__(self, source_dir: Path) -> None:
        self.source_dir = source_dir
        self._lexer = TypeScriptLexer()
        self._lexer.build()
        self._found: dict[str, EnumDeclaration | None] = {}

    def find(self, enum_name: str) -> EnumDeclaration | None:
        if enum_name not in self._found:
            self._found[enum_name] = self._search(enum_name)
        return self._found[enum_name]

    def _search(self, enum_name: str) -> EnumDeclaration | None:
        if not self.source_dir.is_dir():
            return None

        pattern = re.compile(rf"\benum\s+{re.escape(enum_name)}\b")
        for path in sorted(self.source_dir.rglob("*.ts")):
            if path.name.endswith(FACTORY_SUFFIX):
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("enum_search_unreadable", path=str(path), error=str(e))
                continue
            if pattern.search(text) is None:
                continue

            members = self._members(text, enum_name)
            if members:
                logger.debug("enum_declaration_found", enum=enum_name, path=str(path))
                return EnumDeclaration(enum_name, path.resolve(), tuple(members))

        logger.debug("enum_declaration_not_found", enum=enum_name)
        return None

    def _members(self, text: str, enum_name: str) -> list[str]:
        """Member names of ``enum enum_name { ... }`` in declaration order."""
        tokens = self._lexer.tokenize(text)
        for i in range(len(tokens) - 2):
            if (
                tokens[i].type == "IDENTIFIER"
                and tokens[i].value == "enum"
                and tokens[i + 1].value == enum_name
                and tokens[i + 2].type == "LBRACE"
            ):
                return self._read_body(tokens, i + 3)
        return []

    def _read_body(self, tokens: list, pos: int) -> list[str]:
        members: list[str] = []
        expect_key = True
        depth = 0
        for tok in tokens[pos:]:
            if tok.type == "RBRACE":
                if depth == 0:
                    break
                depth -= 1
            elif tok.type == "LBRACE":
                depth += 1
            elif depth == 0 and tok.type == "COMMA":
                expect_key = True
            elif depth == 0 and expect_key and tok.type in ("IDENTIFIER", "STRING"):
                members.append(tok.value if tok.type == "IDENTIFIER" else tok.value[1:-1])
                expect_key = False
        return members
