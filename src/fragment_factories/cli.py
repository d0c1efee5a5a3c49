"""Command-line entry point: ``generate-factories``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from fragment_factories.config import (
    DEFAULT_FRAGMENT_PATTERN,
    DEFAULT_IDS_PATH,
    DEFAULT_SCHEMA_PATH,
    DEFAULT_SOURCE_ROOT,
    ENUM_MEMBER_CASES,
    GeneratorConfig,
)
from fragment_factories.errors import FactoryGenerationError
from fragment_factories.generator import generate_factories
from fragment_factories.logs import configure_logging

logger = structlog.get_logger()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-factories",
        description="Generate TypeScript mock factories from GraphQL fragment documents",
    )
    parser.add_argument(
        "fragment",
        nargs="?",
        type=Path,
        help="Fragment document to generate (omit to generate every fragment)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root that relative paths are resolved against",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=DEFAULT_SCHEMA_PATH,
        help=f"GraphQL schema file (default: {DEFAULT_SCHEMA_PATH})",
    )
    parser.add_argument(
        "--ids",
        type=Path,
        default=DEFAULT_IDS_PATH,
        help=f"TypeScript module holding the ids registry (default: {DEFAULT_IDS_PATH})",
    )
    parser.add_argument(
        "--source-root",
        type=Path,
        default=DEFAULT_SOURCE_ROOT,
        help=f"Directory searched for fragment documents (default: {DEFAULT_SOURCE_ROOT})",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_FRAGMENT_PATTERN,
        help=f"Glob for fragment documents under the source root (default: {DEFAULT_FRAGMENT_PATTERN})",
    )
    parser.add_argument(
        "--enums-module",
        type=Path,
        default=None,
        help="TypeScript module exporting schema enums (omit to emit enum values as strings)",
    )
    parser.add_argument(
        "--enum-member-case",
        choices=ENUM_MEMBER_CASES,
        default="keep",
        help="Naming of enum members in the enums module",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for synthesized mock values",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug events",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, json_output=args.json_logs)

    config = GeneratorConfig(
        root=args.root,
        schema_path=args.schema,
        ids_path=args.ids,
        source_root=args.source_root,
        fragment_pattern=args.pattern,
        enums_module=args.enums_module,
        enum_member_case=args.enum_member_case,
        seed=args.seed,
    )

    try:
        report = generate_factories(config, args.fragment)
    except FactoryGenerationError as e:
        logger.error("generation_aborted", error=str(e))
        return 1

    logger.info(
        "generation_complete",
        generated=len(report.generated),
        failed=len(report.failed),
        registry_updated=report.registry_updated,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
