"""Batch generation of fragment factories."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from fragment_factories.config import GeneratorConfig
from fragment_factories.discovery import discover_fragments
from fragment_factories.errors import ParseError, SchemaError
from fragment_factories.registry import IdsModuleStore, RegistryStore
from fragment_factories.resolver import FactoryResolver
from fragment_factories.schema import TypeSchema
from fragment_factories.synthesizer import MockValueSynthesizer

logger = structlog.get_logger()


@dataclass
class GenerationReport:
    """Outcome of a generation run."""

    generated: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    registry_updated: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


def generate_factories(
    config: GeneratorConfig,
    fragment_path: Path | None = None,
    store: RegistryStore | None = None,
) -> GenerationReport:
    """Generate factories for one fragment document or for every discovered one.

    A document that fails to parse or does not match the schema is logged
    and skipped. The identifier registry is saved once, after all documents.

    Raises:
        SchemaError: If the schema cannot be loaded.
        RegistryError: If the registry store is malformed.
    """
    schema = TypeSchema.from_file(config.schema_file)
    store = store or IdsModuleStore(config.ids_file)
    registry = store.load()

    report = GenerationReport()
    if fragment_path is not None:
        paths = [config.resolve(fragment_path)]
    else:
        paths = discover_fragments(config)
        if not paths:
            logger.warning("no_fragments_found", source_root=str(config.source_dir), pattern=config.fragment_pattern)
            return report

    resolver = FactoryResolver(config, schema, registry, MockValueSynthesizer(seed=config.seed))
    for path in paths:
        if resolver.was_produced(path):
            logger.debug("factory_already_generated", path=str(path))
            report.skipped.append(path)
            continue
        logger.info("generating_factory", path=str(path))
        try:
            resolver.resolve(path)
        except (SchemaError, ParseError, OSError) as e:
            logger.error("fragment_failed", path=str(path), error=str(e))
            report.failed.append((path, str(e)))

    report.generated = resolver.generated
    report.registry_updated = store.save(registry)
    return report
