"""Registry of stable sample identifiers per schema type."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, Union

import structlog

from fragment_factories.errors import RegistryError
from fragment_factories.parsing.ts_lexer import TypeScriptLexer

logger = structlog.get_logger()

# Samples per registry entry
SAMPLE_ID_COUNT = 3

# Id scalars whose samples are emitted as numbers; every other scalar gets strings
NUMERIC_ID_SCALARS = frozenset({"Int", "Float"})

REGISTRY_NAME = "ids"

SampleId = Union[int, float, str]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def registry_key(type_name: str) -> str:
    """Key of a type in the registry: the type name with a lower-cased first letter."""
    return type_name[:1].lower() + type_name[1:]


def _property_name(key: str) -> str:
    return key if _IDENTIFIER_RE.match(key) else json.dumps(key)


def _literal(value: SampleId) -> str:
    return json.dumps(value)


class IdentifierRegistry:
    """Mapping of registry key to sample identifiers.

    Entries are never rewritten once present. Entries created during the run
    are listed in ``pending`` (in creation order) until persisted.
    """

    def __init__(self, entries: dict[str, list[SampleId]] | None = None) -> None:
        self._entries: dict[str, list[SampleId]] = dict(entries or {})
        self._pending: list[str] = []

    def get_or_create(self, type_name: str, id_scalar: str) -> list[SampleId]:
        """Return the samples for ``type_name``, creating them on first use.

        Args:
            type_name: Schema type owning the id field.
            id_scalar: Name of the id field's scalar; ``Int`` and ``Float``
                ids get numeric samples, all others string samples.
        """
        key = registry_key(type_name)
        samples = self._entries.get(key)
        if samples is None:
            if id_scalar in NUMERIC_ID_SCALARS:
                samples = list(range(1, SAMPLE_ID_COUNT + 1))
            else:
                samples = [str(i) for i in range(1, SAMPLE_ID_COUNT + 1)]
            self._entries[key] = samples
            self._pending.append(key)
            logger.debug("registry_entry_created", key=key, samples=samples)
        return list(samples)

    def reference(self, type_name: str) -> str:
        """TypeScript expression selecting the first sample of ``type_name``."""
        key = registry_key(type_name)
        if _IDENTIFIER_RE.match(key):
            return f"{REGISTRY_NAME}.{key}[0]"
        return f"{REGISTRY_NAME}[{json.dumps(key)}][0]"

    @property
    def pending(self) -> dict[str, list[SampleId]]:
        """Entries created since load, in creation order."""
        return {key: list(self._entries[key]) for key in self._pending}

    @property
    def entries(self) -> dict[str, list[SampleId]]:
        return {key: list(samples) for key, samples in self._entries.items()}

    def mark_saved(self) -> None:
        """Forget pending entries after they were persisted."""
        self._pending = []

    def checkpoint(self) -> int:
        """Mark the current point so later entries can be rolled back."""
        return len(self._pending)

    def rollback(self, checkpoint: int, keep: Iterable[str] = ()) -> list[str]:
        """Drop entries created since ``checkpoint``, except keys in ``keep``.

        Returns the dropped keys.
        """
        keep = set(keep)
        dropped = [key for key in self._pending[checkpoint:] if key not in keep]
        for key in dropped:
            del self._entries[key]
        self._pending = [key for key in self._pending if key not in dropped]
        return dropped

    def __contains__(self, type_name: str) -> bool:
        return registry_key(type_name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class RegistryStore(Protocol):
    """Structured document the registry is read from and written to."""

    def load(self) -> IdentifierRegistry: ...

    def save(self, registry: IdentifierRegistry) -> bool: ...


@dataclass
class _ObjectLiteral:
    """Location of the registry object literal inside the module text."""

    entries: dict[str, list[SampleId]]
    close_pos: int
    last_entry_end: int | None
    trailing_comma: bool
    indent: str


class IdsModuleStore:
    """Registry persisted as ``export const ids = { ... };`` in a TypeScript module.

    Saving inserts pending entries before the object's closing brace and
    leaves the rest of the text as it was.
    """

    def __init__(self, path: Path, name: str = REGISTRY_NAME) -> None:
        self.path = Path(path)
        self.name = name
        self._lexer = TypeScriptLexer()
        self._lexer.build()

    def load(self) -> IdentifierRegistry:
        """Read the registry; a missing module yields an empty registry.

        Raises:
            RegistryError: If the module has no ``ids`` object literal or an
                entry is not an array of string/number literals.
        """
        if not self.path.exists():
            logger.info("registry_store_missing", path=str(self.path))
            return IdentifierRegistry()
        text = self.path.read_text(encoding="utf-8")
        return IdentifierRegistry(self._locate(text).entries)

    def save(self, registry: IdentifierRegistry) -> bool:
        """Write pending entries; return whether the module changed."""
        pending = registry.pending
        if not pending:
            return False

        if self.path.exists():
            text = self.path.read_text(encoding="utf-8")
            literal = self._locate(text)
            text = self._insert(text, literal, pending)
        else:
            body = "".join(
                f"  {_property_name(key)}: [{', '.join(_literal(v) for v in samples)}],\n"
                for key, samples in pending.items()
            )
            text = f"export const {self.name} = {{\n{body}}};\n"
            self.path.parent.mkdir(parents=True, exist_ok=True)

        self.path.write_text(text, encoding="utf-8")
        registry.mark_saved()
        logger.info("registry_saved", path=str(self.path), added=list(pending))
        return True

    def _insert(
        self, text: str, literal: _ObjectLiteral, pending: dict[str, list[SampleId]]
    ) -> str:
        lines = "".join(
            f"{literal.indent}{_property_name(key)}: [{', '.join(_literal(v) for v in samples)}],\n"
            for key, samples in pending.items()
        )

        close = literal.close_pos
        line_start = text.rfind("\n", 0, close) + 1
        if text[line_start:close].strip():
            # Closing brace shares its line with other text, e.g. "{}" or "{ a: [1] }"
            insert_at = close
            lines = "\n" + lines
        else:
            insert_at = line_start

        text = text[:insert_at] + lines + text[insert_at:]
        if literal.last_entry_end is not None and not literal.trailing_comma:
            text = text[: literal.last_entry_end] + "," + text[literal.last_entry_end :]
        return text

    def _locate(self, text: str) -> _ObjectLiteral:
        tokens = self._lexer.tokenize(text)
        start = self._find_initializer(tokens)

        entries: dict[str, list[SampleId]] = {}
        last_entry_end: int | None = None
        trailing_comma = False
        indent: str | None = None
        i = start + 1
        while i < len(tokens):
            tok = tokens[i]
            if tok.type == "RBRACE":
                return _ObjectLiteral(
                    entries=entries,
                    close_pos=tok.lexpos,
                    last_entry_end=last_entry_end,
                    trailing_comma=trailing_comma,
                    indent=indent if indent is not None else "  ",
                )
            if tok.type == "COMMA" and last_entry_end is not None and not trailing_comma:
                trailing_comma = True
                i += 1
                continue
            if tok.type not in ("IDENTIFIER", "STRING"):
                raise self._malformed(tok)

            if indent is None:
                line_start = text.rfind("\n", 0, tok.lexpos) + 1
                prefix = text[line_start : tok.lexpos]
                indent = prefix if not prefix.strip() else "  "

            key = tok.value if tok.type == "IDENTIFIER" else _string_value(tok.value)
            samples, i = self._read_samples(tokens, i + 1)
            if key in entries:
                raise RegistryError(f"Duplicate registry key '{key}' in {self.path}")
            entries[key] = samples
            last_entry_end = tokens[i - 1].lexpos + 1
            trailing_comma = False

        raise RegistryError(f"Unterminated '{self.name}' object literal in {self.path}")

    def _find_initializer(self, tokens: list) -> int:
        """Index of the ``{`` starting the registry object literal."""
        for i, tok in enumerate(tokens):
            if tok.type != "IDENTIFIER" or tok.value != self.name:
                continue
            if i == 0 or tokens[i - 1].value not in ("const", "let", "var"):
                continue
            # Skip an optional type annotation up to the initializer
            j = i + 1
            while j < len(tokens) and tokens[j].type not in ("EQUALS", "SEMI"):
                j += 1
            if j + 1 < len(tokens) and tokens[j].type == "EQUALS" and tokens[j + 1].type == "LBRACE":
                return j + 1
            break
        raise RegistryError(f"No '{self.name}' object literal found in {self.path}")

    def _read_samples(self, tokens: list, i: int) -> tuple[list[SampleId], int]:
        """Read ``: [lit, lit, ...]`` starting at ``tokens[i]``.

        Returns the samples and the index just past the closing bracket.
        """
        if i + 1 >= len(tokens) or tokens[i].type != "COLON" or tokens[i + 1].type != "LBRACKET":
            raise self._malformed(tokens[min(i, len(tokens) - 1)])
        samples: list[SampleId] = []
        i += 2
        while i < len(tokens):
            tok = tokens[i]
            if tok.type == "RBRACKET":
                return samples, i + 1
            if tok.type == "STRING":
                samples.append(_string_value(tok.value))
            elif tok.type == "NUMBER":
                samples.append(_number_value(tok.value))
            elif tok.type != "COMMA":
                raise self._malformed(tok)
            i += 1
        raise RegistryError(f"Unterminated array in '{self.name}' in {self.path}")

    def _malformed(self, tok) -> RegistryError:  # type: ignore[no-untyped-def]
        return RegistryError(
            f"Malformed '{self.name}' entry at '{tok.value}' (line {tok.lineno}) in {self.path}"
        )


def _string_value(raw: str) -> str:
    body = raw[1:-1]
    if raw[0] == '"':
        return json.loads(raw)
    # Single-quoted and template strings: unescape the quote character only
    return body.replace("\\" + raw[0], raw[0])


def _number_value(raw: str) -> int | float:
    raw = raw.replace("_", "")
    return float(raw) if "." in raw else int(raw)
