"""Parsing module for GraphQL schemas, fragment documents and TypeScript modules."""

from fragment_factories.parsing.fragment_parser import (
    FragmentParser,
    parse_fragment,
    read_fragment,
    read_fragment_name,
)
from fragment_factories.parsing.schema_parser import SchemaParser

__all__ = [
    "FragmentParser",
    "SchemaParser",
    "parse_fragment",
    "read_fragment",
    "read_fragment_name",
]
