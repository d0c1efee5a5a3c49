"""Locating fragment documents and their generated artifacts."""

from __future__ import annotations

from pathlib import Path

from fragment_factories.config import FACTORY_SUFFIX, FRAGMENT_SUFFIX, GeneratorConfig
from fragment_factories.naming import to_kebab_case, to_pascal_case


def discover_fragments(config: GeneratorConfig) -> list[Path]:
    """Return every fragment document under the source root, sorted by path."""
    source_dir = config.source_dir
    if not source_dir.is_dir():
        return []
    return sorted(p for p in source_dir.glob(config.fragment_pattern) if p.is_file())


def fragment_file_name(fragment_name: str) -> str:
    """File name a fragment called ``fragment_name`` is expected to live in."""
    return f"{to_kebab_case(to_pascal_case(fragment_name))}{FRAGMENT_SUFFIX}"


def find_fragment(config: GeneratorConfig, fragment_name: str) -> Path | None:
    """Find the document of fragment ``fragment_name`` by file-name convention.

    When several directories hold a matching file, the first in sorted path
    order is used.
    """
    source_dir = config.source_dir
    if not source_dir.is_dir():
        return None
    matches = sorted(source_dir.rglob(fragment_file_name(fragment_name)))
    return matches[0] if matches else None


def factory_path_for(fragment_path: Path) -> Path:
    """Artifact path for the fragment document at ``fragment_path``."""
    name = fragment_path.name
    if name.endswith(FRAGMENT_SUFFIX):
        name = name[: -len(FRAGMENT_SUFFIX)]
    else:
        name = fragment_path.stem
    return fragment_path.with_name(f"{name}{FACTORY_SUFFIX}")
