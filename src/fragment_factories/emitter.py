"""TypeScript emission of resolved fragment factories."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from fragment_factories.schema import TYPENAME_FIELD

INDENT = "  "


@dataclass
class ResolvedField:
    """A field of the default object and the expression producing its value."""

    name: str
    expression: str


class ImportSet:
    """Named imports grouped by module, in first-use order."""

    def __init__(self) -> None:
        self._modules: dict[str, list[str]] = {}

    def add(self, name: str, module: str) -> None:
        names = self._modules.setdefault(module, [])
        if name not in names:
            names.append(name)

    def lines(self) -> list[str]:
        return [
            f'import {{ {", ".join(names)} }} from "{module}";'
            for module, names in self._modules.items()
        ]

    def __len__(self) -> int:
        return len(self._modules)


@dataclass
class GeneratedFactory:
    """Everything needed to emit the factory of one fragment.

    ``inline_factories`` hold the factories of inline sub-selections, in the
    order they must be declared (dependencies first).
    """

    fragment_name: str
    type_name: str
    factory_name: str
    type_expression: str
    default_name: str | None = None
    fields: list[ResolvedField] = field(default_factory=list)
    spreads: list[str] = field(default_factory=list)
    imports: ImportSet = field(default_factory=ImportSet)
    inline_factories: list[GeneratedFactory] = field(default_factory=list)
    path: Path | None = None

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self.fields)

    def add_spread(self, factory_name: str) -> None:
        if factory_name not in self.spreads:
            self.spreads.append(factory_name)


def _object_body(factory: GeneratedFactory) -> list[str]:
    """Entries of the default object: spreads, fields, then the discriminator."""
    lines = [f"{INDENT}...{spread}()," for spread in factory.spreads]
    lines += [f"{INDENT}{f.name}: {f.expression}," for f in factory.fields]
    lines.append(f"{INDENT}{TYPENAME_FIELD}: {json.dumps(factory.type_name)},")
    return lines


def _emit_inline(factory: GeneratedFactory) -> list[str]:
    type_expr = factory.type_expression
    return [
        f"const {factory.factory_name} = (",
        f"{INDENT}overwrites: Partial<{type_expr}> = {{}},",
        f"): {type_expr} => ({{",
        *_object_body(factory),
        f"{INDENT}...overwrites,",
        "});",
    ]


def emit_factory(factory: GeneratedFactory) -> str:
    """Render the artifact for a top-level fragment factory.

    Identical factories always render to identical text.
    """
    type_expr = factory.type_expression
    lines = factory.imports.lines()
    lines.append("")

    for inline in factory.inline_factories:
        lines += _emit_inline(inline)
        lines.append("")

    lines.append(f"const {factory.default_name}: {type_expr} = {{")
    lines += _object_body(factory)
    lines.append("};")
    lines.append("")
    lines += [
        f"export const {factory.factory_name} = (overwrites: Partial<{type_expr}> = {{}}): {type_expr} => ({{",
        f"{INDENT}...{factory.default_name},",
        f"{INDENT}...overwrites,",
        "});",
    ]
    return "\n".join(lines) + "\n"
