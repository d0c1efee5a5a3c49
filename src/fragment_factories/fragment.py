"""AST for fragment documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class FragmentSpreadSelection:
    """``...Name`` inside a selection set."""

    name: str


@dataclass
class FieldSelection:
    """A selected field, possibly aliased, with its own sub-selection."""

    name: str
    alias: str | None = None
    selections: list[Selection] = field(default_factory=list)

    @property
    def response_name(self) -> str:
        """Key under which the field appears in the result object."""
        return self.alias or self.name

    @property
    def fields(self) -> list[FieldSelection]:
        return [s for s in self.selections if isinstance(s, FieldSelection)]

    @property
    def spreads(self) -> list[str]:
        """Names of fragments spread directly inside this field."""
        return [s.name for s in self.selections if isinstance(s, FragmentSpreadSelection)]

    @property
    def inline_fragments(self) -> list[InlineFragmentSelection]:
        return [s for s in self.selections if isinstance(s, InlineFragmentSelection)]

    @property
    def association(self) -> str | None:
        """Fragment this field is resolved through, if it spreads one.

        When several fragments are spread the first one wins.
        """
        spreads = self.spreads
        return spreads[0] if spreads else None


@dataclass
class InlineFragmentSelection:
    """``... on Type { ... }``, or ``... @include(if: $x) { ... }`` without a type condition."""

    type_condition: str | None
    selections: list[Selection] = field(default_factory=list)


Selection = Union[FieldSelection, FragmentSpreadSelection, InlineFragmentSelection]


@dataclass
class FragmentDocument:
    """A parsed ``fragment Name on Type { ... }`` definition."""

    name: str
    type_condition: str
    selections: list[Selection] = field(default_factory=list)

    @property
    def fields(self) -> list[FieldSelection]:
        """Field selections in declaration order."""
        return [s for s in self.selections if isinstance(s, FieldSelection)]

    @property
    def spreads(self) -> list[str]:
        """Top-level fragment spreads in declaration order."""
        return [s.name for s in self.selections if isinstance(s, FragmentSpreadSelection)]

    @property
    def associations(self) -> dict[str, str]:
        """Map of field response name to the fragment spread inside it."""
        return {
            f.response_name: f.association
            for f in self.fields
            if f.association is not None
        }
