"""Configuration for factory generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ENUM_MEMBER_CASES = ("keep", "pascal")

DEFAULT_SCHEMA_PATH = Path("schema.graphql")
DEFAULT_IDS_PATH = Path("src/gql/ids.ts")
DEFAULT_SOURCE_ROOT = Path("src")
DEFAULT_FRAGMENT_PATTERN = "**/*.fragment.gql"

FRAGMENT_SUFFIX = ".fragment.gql"
FACTORY_SUFFIX = ".factory.ts"
GENERATED_TYPES_SUFFIX = ".fragment.generated"


@dataclass(frozen=True)
class GeneratorConfig:
    """Where inputs live and how factories are emitted.

    Relative paths are resolved against ``root``.
    """

    root: Path = Path(".")
    schema_path: Path = DEFAULT_SCHEMA_PATH
    ids_path: Path = DEFAULT_IDS_PATH
    source_root: Path = DEFAULT_SOURCE_ROOT
    fragment_pattern: str = DEFAULT_FRAGMENT_PATTERN

    # Module exporting the TypeScript enums generated from the schema.
    # When unset, enum fields are emitted as string literals.
    enums_module: Path | None = None
    enum_member_case: str = "keep"

    # Seed for synthesized scalar values
    seed: int = 0

    def __post_init__(self) -> None:
        if self.enum_member_case not in ENUM_MEMBER_CASES:
            raise ValueError(
                f"enum_member_case must be one of {ENUM_MEMBER_CASES}, "
                f"got '{self.enum_member_case}'"
            )

    def resolve(self, path: Path) -> Path:
        """Resolve ``path`` against the project root."""
        path = Path(path)
        return path if path.is_absolute() else Path(self.root) / path

    @property
    def schema_file(self) -> Path:
        return self.resolve(self.schema_path)

    @property
    def ids_file(self) -> Path:
        return self.resolve(self.ids_path)

    @property
    def source_dir(self) -> Path:
        return self.resolve(self.source_root)

    @property
    def enums_file(self) -> Path | None:
        return self.resolve(self.enums_module) if self.enums_module is not None else None
