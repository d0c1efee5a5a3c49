"""Resolution of fragment documents into factories, nested fragments included."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from fragment_factories.classifier import FieldKind, classify
from fragment_factories.config import GENERATED_TYPES_SUFFIX, GeneratorConfig
from fragment_factories.discovery import factory_path_for, find_fragment
from fragment_factories.emitter import GeneratedFactory, ImportSet, ResolvedField, emit_factory
from fragment_factories.enums import EnumLocator
from fragment_factories.errors import FactoryGenerationError, ResolutionError, SchemaError
from fragment_factories.fragment import (
    FieldSelection,
    FragmentDocument,
    FragmentSpreadSelection,
    InlineFragmentSelection,
    Selection,
)
from fragment_factories.naming import (
    default_object_name,
    enum_member_name,
    factory_name,
    fragment_type_name,
    to_kebab_case,
    to_pascal_case,
    to_relative_import,
)
from fragment_factories.parsing import read_fragment
from fragment_factories.registry import REGISTRY_NAME, IdentifierRegistry, registry_key
from fragment_factories.schema import TYPENAME_FIELD, TypeSchema
from fragment_factories.synthesizer import MockValueSynthesizer, quote
from fragment_factories.types import NonNullType, TypeDefinition, TypeRef

logger = structlog.get_logger()


@dataclass
class _Scope:
    """State shared while building one artifact."""

    fragment_path: Path
    artifact_path: Path
    imports: ImportSet
    inline_factories: list[GeneratedFactory]


class FactoryResolver:
    """Turns fragment documents into written factory artifacts.

    Each fragment is generated at most once per resolver. Fragments currently
    being generated are tracked; a reference back into one of them is not
    followed but replaced by a shallow value, which bounds recursion and keeps
    every default object free of calls into a factory not yet initialised.

    Registry entries created for a document that then fails are dropped,
    unless an artifact written meanwhile uses them.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        schema: TypeSchema,
        registry: IdentifierRegistry,
        synthesizer: MockValueSynthesizer | None = None,
    ) -> None:
        self.config = config
        self.schema = schema
        self.registry = registry
        self.synthesizer = synthesizer or MockValueSynthesizer(seed=config.seed)
        self.enums = EnumLocator(config.source_dir)
        self._produced: dict[Path, str] = {}
        self._active: dict[Path, str] = {}
        self._artifacts: list[Path] = []
        # Registry keys used by written artifacts, and by each document in progress
        self._committed_keys: set[str] = set()
        self._key_scopes: list[set[str]] = []

    @property
    def generated(self) -> list[Path]:
        """Artifacts written by this resolver, in the order they were written."""
        return list(self._artifacts)

    def was_produced(self, fragment_path: Path) -> bool:
        """Whether the fragment's artifact was written by this resolver."""
        return fragment_path.resolve() in self._produced

    def resolve(self, fragment_path: Path) -> GeneratedFactory:
        """Generate and write the factory for the document at ``fragment_path``.

        Raises:
            ParseError: If the document is unreadable or has no fragment definition.
            SchemaError: If the document does not match the schema.
        """
        fragment_path = fragment_path.resolve()
        document = read_fragment(fragment_path)
        name = factory_name(document.name)

        checkpoint = self.registry.checkpoint()
        keys: set[str] = set()
        self._active[fragment_path] = name
        self._key_scopes.append(keys)
        try:
            factory = self.resolve_document(document, fragment_path)
            factory.path.write_text(emit_factory(factory), encoding="utf-8")
        except (FactoryGenerationError, OSError):
            dropped = self.registry.rollback(checkpoint, keep=self._committed_keys)
            if dropped:
                logger.debug("registry_entries_dropped", path=str(fragment_path), keys=dropped)
            raise
        finally:
            del self._active[fragment_path]
            self._key_scopes.pop()

        self._committed_keys |= keys
        self._produced[fragment_path] = name
        self._artifacts.append(factory.path)
        logger.info("factory_generated", factory=name, path=str(factory.path))
        return factory

    def resolve_document(self, document: FragmentDocument, fragment_path: Path) -> GeneratedFactory:
        """Build the factory of a parsed fragment without writing it."""
        type_def = self.schema.get_or_raise(document.type_condition)
        type_expr = fragment_type_name(document.name)

        imports = ImportSet()
        imports.add(type_expr, f"./{to_kebab_case(to_pascal_case(document.name))}{GENERATED_TYPES_SUFFIX}")

        factory = GeneratedFactory(
            fragment_name=document.name,
            type_name=self.schema.concrete_type_name(type_def),
            factory_name=factory_name(document.name),
            type_expression=type_expr,
            default_name=default_object_name(document.name),
            imports=imports,
            path=factory_path_for(fragment_path),
        )
        scope = _Scope(
            fragment_path=fragment_path,
            artifact_path=factory.path,
            imports=imports,
            inline_factories=factory.inline_factories,
        )
        self._build(factory, type_def, document.selections, scope)
        return factory

    # ---- Selection resolution ----

    def _build(
        self,
        factory: GeneratedFactory,
        type_def: TypeDefinition,
        selections: list[Selection],
        scope: _Scope,
    ) -> None:
        for selection in selections:
            if isinstance(selection, FragmentSpreadSelection):
                self._add_spread(factory, selection.name, scope)
                continue

            if isinstance(selection, InlineFragmentSelection):
                self._add_inline_fragment(factory, type_def, selection, scope)
                continue

            if selection.name == TYPENAME_FIELD or factory.has_field(selection.response_name):
                continue
            expression = self._field_expression(factory, type_def, selection, scope)
            if expression is not None:
                factory.fields.append(ResolvedField(selection.response_name, expression))

    def _add_inline_fragment(
        self,
        factory: GeneratedFactory,
        type_def: TypeDefinition,
        selection: InlineFragmentSelection,
        scope: _Scope,
    ) -> None:
        """Merge an inline fragment whose type condition matches the mocked object."""
        condition = selection.type_condition
        if condition is None:
            self._build(factory, type_def, selection.selections, scope)
            return

        if factory.type_name not in self.schema.possible_types(condition):
            logger.debug(
                "inline_fragment_skipped",
                fragment=factory.fragment_name,
                type_condition=condition,
                mocked_type=factory.type_name,
            )
            return
        self._build(factory, self.schema.get_or_raise(condition), selection.selections, scope)

    def _add_spread(self, factory: GeneratedFactory, fragment_name: str, scope: _Scope) -> None:
        try:
            fragment_path = self._locate(fragment_name)
        except ResolutionError as e:
            self._warn_missing(e, fragment_name, scope)
            return

        if fragment_path in self._active:
            logger.debug("cyclic_spread_skipped", fragment=fragment_name, referenced_from=str(scope.fragment_path))
            return

        spread = self._nested_factory(fragment_path, scope)
        if spread is not None:
            factory.add_spread(spread)

    def _field_expression(
        self,
        factory: GeneratedFactory,
        type_def: TypeDefinition,
        selection: FieldSelection,
        scope: _Scope,
    ) -> str | None:
        type_ref = self.schema.get_field_type(type_def.name, selection.name)
        classification = classify(self.schema, type_ref, selection.name)
        base_type = classification.base_type

        if classification.kind is FieldKind.OBJECT:
            return self._object_expression(factory, base_type, selection, type_ref, classification.is_list, scope)

        if classification.kind is FieldKind.ID:
            self.registry.get_or_create(factory.type_name, base_type.name)
            if self._key_scopes:
                self._key_scopes[-1].add(registry_key(factory.type_name))
            scope.imports.add(REGISTRY_NAME, to_relative_import(scope.artifact_path.parent, self.config.ids_file.resolve()))
            expression = self.registry.reference(factory.type_name)
        elif classification.kind is FieldKind.SCALAR:
            expression = self.synthesizer.synthesize(base_type.name, selection.name)
        else:
            expression = self._enum_expression(base_type.name, scope)

        return f"[{expression}]" if classification.is_list else expression

    def _enum_expression(self, enum_name: str, scope: _Scope) -> str:
        """Reference the first member of an enum, importing the enum when it is known.

        A configured enums module wins. Otherwise the enum is looked up among
        the TypeScript modules of the source root, and the first declared value
        is emitted as a string literal when no declaration is found.
        """
        values = self.schema.enum_values(enum_name)
        if not values:
            raise SchemaError(f"Enum '{enum_name}' declares no values")

        enums_file = self.config.enums_file
        if enums_file is not None:
            scope.imports.add(enum_name, to_relative_import(scope.artifact_path.parent, enums_file.resolve()))
            return f"{enum_name}.{enum_member_name(values[0], self.config.enum_member_case)}"

        declaration = self.enums.find(enum_name)
        if declaration is None:
            return quote(values[0])
        scope.imports.add(enum_name, to_relative_import(scope.artifact_path.parent, declaration.path))
        return declaration.member_reference(declaration.members[0])

    def _object_expression(
        self,
        parent: GeneratedFactory,
        base_type: TypeDefinition,
        selection: FieldSelection,
        type_ref: TypeRef,
        is_list: bool,
        scope: _Scope,
    ) -> str | None:
        inline_fields = [f for f in selection.fields if f.name != TYPENAME_FIELD]
        spreads = selection.spreads

        if selection.selections and (inline_fields or selection.inline_fragments or not spreads):
            expression = f"{self._inline_factory(parent, base_type, selection, is_list, scope)}()"
            return f"[{expression}]" if is_list else expression

        if spreads:
            if len(spreads) > 1:
                logger.warning(
                    "ambiguous_field_fragments",
                    field=selection.response_name,
                    spreads=spreads,
                    using=spreads[0],
                )
            target = spreads[0]
        else:
            target = to_pascal_case(base_type.name)

        try:
            fragment_path = self._locate(target)
        except ResolutionError as e:
            self._warn_missing(e, target, scope, field_name=selection.response_name)
            return None

        if fragment_path in self._active:
            logger.debug(
                "cyclic_field_stubbed",
                field=selection.response_name,
                fragment=target,
                referenced_from=str(scope.fragment_path),
            )
            return self._cycle_stub(parent, base_type, selection, type_ref, is_list)

        nested = self._nested_factory(fragment_path, scope)
        if nested is None:
            return None
        return f"[{nested}()]" if is_list else f"{nested}()"

    def _cycle_stub(
        self,
        parent: GeneratedFactory,
        base_type: TypeDefinition,
        selection: FieldSelection,
        type_ref: TypeRef,
        is_list: bool,
    ) -> str:
        """Shallow value for a field pointing back into a fragment being generated."""
        if not isinstance(type_ref, NonNullType):
            return "null"
        if is_list:
            return "[]"
        typename = self.schema.concrete_type_name(base_type)
        return f'{{ __typename: "{typename}" }} as NonNullable<{parent.type_expression}["{selection.response_name}"]>'

    def _inline_factory(
        self,
        parent: GeneratedFactory,
        base_type: TypeDefinition,
        selection: FieldSelection,
        is_list: bool,
        scope: _Scope,
    ) -> str:
        """Declare a local factory for an inline sub-selection and return its name."""
        type_expr = f'NonNullable<{parent.type_expression}["{selection.response_name}"]>'
        if is_list:
            type_expr = f"{type_expr}[number]"

        inline = GeneratedFactory(
            fragment_name=parent.fragment_name,
            type_name=self.schema.concrete_type_name(base_type),
            factory_name=f"{parent.factory_name}{to_pascal_case(selection.response_name)}",
            type_expression=type_expr,
        )
        self._build(inline, base_type, selection.selections, scope)
        scope.inline_factories.append(inline)
        return inline.factory_name

    # ---- Nested fragments ----

    def _locate(self, fragment_name: str) -> Path:
        """Path of the document defining ``fragment_name``.

        Raises:
            ResolutionError: If no document matches the naming convention.
        """
        fragment_path = find_fragment(self.config, fragment_name)
        if fragment_path is None:
            raise ResolutionError(f"No fragment document found for '{fragment_name}'")
        return fragment_path.resolve()

    def _warn_missing(
        self, error: ResolutionError, fragment_name: str, scope: _Scope, field_name: str | None = None
    ) -> None:
        logger.warning(
            "nested_fragment_missing",
            fragment=fragment_name,
            field=field_name,
            referenced_from=str(scope.fragment_path),
            error=str(error),
        )

    def _nested_factory(self, fragment_path: Path, scope: _Scope) -> str | None:
        """Name of the factory for ``fragment_path``, imported into ``scope``.

        Returns None, after logging a warning, when it cannot be generated.
        """
        name = self._ensure(fragment_path)
        if name is None:
            return None

        nested_artifact = factory_path_for(fragment_path)
        if nested_artifact != scope.artifact_path:
            scope.imports.add(name, to_relative_import(scope.artifact_path.parent, nested_artifact))
        return name

    def _ensure(self, fragment_path: Path) -> str | None:
        """Make sure the factory for ``fragment_path`` exists; return its name."""
        if fragment_path in self._produced:
            return self._produced[fragment_path]

        try:
            if factory_path_for(fragment_path).exists():
                document = read_fragment(fragment_path)
                logger.debug("nested_factory_exists", path=str(fragment_path))
                return factory_name(document.name)

            logger.info("generating_nested_factory", path=str(fragment_path))
            return self.resolve(fragment_path).factory_name
        except (FactoryGenerationError, OSError) as e:
            logger.warning("nested_fragment_failed", path=str(fragment_path), error=str(e))
            return None
