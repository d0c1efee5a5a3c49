"""Exceptions raised while generating mock factories."""


class FactoryGenerationError(Exception):
    """Base class for all factory generation errors."""


class SchemaError(FactoryGenerationError):
    """A type, field or enum referenced by a fragment is not in the schema."""


class ParseError(FactoryGenerationError):
    """A document could not be parsed or has no fragment definition."""


class ResolutionError(FactoryGenerationError):
    """A nested fragment document could not be located.

    Never propagated out of the resolver: the field is skipped and the
    error is logged as a warning.
    """


class RegistryError(FactoryGenerationError):
    """The persisted identifier registry store is malformed."""
