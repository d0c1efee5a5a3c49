"""Fragment Factories - TypeScript mock factories from GraphQL fragments."""

from fragment_factories.classifier import FieldClassification, FieldKind, classify
from fragment_factories.config import GeneratorConfig
from fragment_factories.emitter import GeneratedFactory, ResolvedField, emit_factory
from fragment_factories.errors import (
    FactoryGenerationError,
    ParseError,
    RegistryError,
    ResolutionError,
    SchemaError,
)
from fragment_factories.fragment import (
    FieldSelection,
    FragmentDocument,
    FragmentSpreadSelection,
    InlineFragmentSelection,
)
from fragment_factories.generator import GenerationReport, generate_factories
from fragment_factories.parsing import FragmentParser, SchemaParser, parse_fragment
from fragment_factories.registry import IdentifierRegistry, IdsModuleStore
from fragment_factories.resolver import FactoryResolver
from fragment_factories.schema import TypeSchema
from fragment_factories.synthesizer import MockValueSynthesizer

__all__ = [
    # Main API
    "generate_factories",
    "GenerationReport",
    "GeneratorConfig",
    "FactoryResolver",
    # Schema and documents
    "TypeSchema",
    "SchemaParser",
    "FragmentParser",
    "parse_fragment",
    "FragmentDocument",
    "FieldSelection",
    "FragmentSpreadSelection",
    "InlineFragmentSelection",
    # Field strategies
    "classify",
    "FieldKind",
    "FieldClassification",
    "MockValueSynthesizer",
    # Registry
    "IdentifierRegistry",
    "IdsModuleStore",
    # Emission
    "GeneratedFactory",
    "ResolvedField",
    "emit_factory",
    # Errors
    "FactoryGenerationError",
    "SchemaError",
    "ParseError",
    "ResolutionError",
    "RegistryError",
]

__version__ = "0.1.0"
