"""Naming conventions shared by the resolver and the emitter."""

from __future__ import annotations

import os
import re
from pathlib import Path


def to_kebab_case(name: str) -> str:
    """``UserProfile`` -> ``user-profile``"""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()


def to_pascal_case(name: str) -> str:
    """``user-profile`` -> ``UserProfile``; ``userProfile`` -> ``UserProfile``"""
    return re.sub(r"(^\w|-\w)", lambda m: m.group(0).replace("-", "").upper(), name)


def to_camel_case(name: str) -> str:
    """``UserProfile`` -> ``userProfile``"""
    return name[:1].lower() + name[1:]


def enum_member_name(value: str, case: str) -> str:
    """Name of the TypeScript enum member generated for GraphQL enum ``value``.

    ``keep`` uses the value as declared; ``pascal`` follows the default
    graphql-codegen convention (``SUPER_ADMIN`` -> ``SuperAdmin``).
    """
    if case == "keep":
        return value
    parts = [part for part in value.split("_") if part]
    return "".join(
        part[:1].upper() + (part[1:].lower() if part.isupper() else part[1:])
        for part in parts
    )


def to_relative_import(from_dir: Path, to: Path) -> str:
    """Module specifier importing file ``to`` from a module in ``from_dir``."""
    rel = os.path.relpath(to, from_dir).replace("\\", "/")
    rel = re.sub(r"(\.d)?\.tsx?$", "", rel)
    return rel if rel.startswith(".") else f"./{rel}"


def factory_name(fragment_name: str) -> str:
    return f"createMock{to_pascal_case(fragment_name)}"


def default_object_name(fragment_name: str) -> str:
    return f"default{to_pascal_case(fragment_name)}"


def fragment_type_name(fragment_name: str) -> str:
    """Type graphql-codegen generates for the fragment."""
    return f"{to_pascal_case(fragment_name)}Fragment"
