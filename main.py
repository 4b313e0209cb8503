#!/usr/bin/env python
# ============================================================================
# SCHEMAFORGE - COMMAND LINE ENTRY POINT
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - CLI entry point
# PURPOSE: Load a definition, run the pipeline, write the scripts
# CREATED: 15 OCT 2026
# USAGE:
#   schemaforge shop.json                      # Write scripts under ./output
#   schemaforge shop.yaml --output build       # Custom output root
#   schemaforge shop.json --dry-run            # Show what would be written
#   schemaforge shop.json --no-timestamps      # Reproducible headers
# ============================================================================
"""
SchemaForge CLI

Exit codes:
    0  all artifacts generated and written
    1  definition could not be loaded or the table list is malformed
    2  one or more artifacts failed to generate (the rest are still written)
    3  scripts could not be written to the output directory
"""

import argparse
import os
import sys
from typing import List, Optional

from __version__ import __version__, CODENAME
from core.config import Defaults
from core.logging import ComponentType, configure_logging, get_logger, log_context
from generator import ResolutionError, SchemaScriptPipeline
from services import DefinitionError, DefinitionService, ScriptWriter, describe_tables

logger = get_logger(__name__, ComponentType.CLI)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_ARTIFACT_FAILURES = 2
EXIT_WRITE_FAILED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemaforge",
        description="Generate Oracle database scripts from a schema definition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schemaforge shop.json                     # Write scripts under ./output
  schemaforge shop.yaml --output build      # Custom output root
  schemaforge shop.json --dry-run           # List files without writing

Environment Variables:
  SCHEMAFORGE_AUTHOR              Default author for script headers
  SCHEMAFORGE_LICENSE             Default license for script headers
  SCHEMAFORGE_INDENT_SIZE         DDL indentation (default: 4)
  SCHEMAFORGE_INCLUDE_TIMESTAMPS  Stamp generation time in headers (default: true)
  SCHEMAFORGE_SEED_ROW_COUNT      Seed rows per table (default: 22)
  SCHEMAFORGE_CRUD_PAGE_SIZE      Default get_records page size (default: 20)
  LOG_LEVEL                       Log level (default: INFO)
  LOG_FORMAT                      "json" for structured logs
        """,
    )
    parser.add_argument(
        "definition",
        help="Project definition file (.json, .yaml, .yml)",
    )
    parser.add_argument(
        "--output", "-o",
        default="output",
        help="Output root directory (default: output)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate scripts but do not write files",
    )
    parser.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Replace header timestamps with a placeholder",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit structured JSON log lines",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} ({CODENAME})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else os.environ.get("LOG_LEVEL", "INFO"),
        json_output=args.json_logs,
    )

    defaults = Defaults.from_env()
    if args.no_timestamps:
        defaults = defaults.without_timestamps()

    try:
        definition = DefinitionService().load(args.definition)
    except DefinitionError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    print("=" * 70)
    print(f"SCHEMAFORGE v{__version__} - {definition.name} {definition.version}")
    print("=" * 70)
    print(describe_tables(definition.database.tables))
    print()

    with log_context(project=definition.name):
        try:
            result = SchemaScriptPipeline(
                definition.database,
                metadata=definition.metadata,
                defaults=defaults,
            ).run()
        except ResolutionError as e:
            logger.error(str(e))
            return EXIT_INVALID_INPUT

        print(result.explanation)
        print()

        writer = ScriptWriter(args.output, dry_run=args.dry_run)
        try:
            paths = writer.write(result.artifacts, definition.folder)
        except OSError as e:
            logger.error(f"Failed to write scripts under {args.output}: {e}")
            return EXIT_WRITE_FAILED

    print(f"\n[{'DRY RUN' if args.dry_run else 'WRITTEN'}]\n")
    for path in paths:
        print(f"  {path}")

    if result.failures:
        print(f"\n{len(result.failures)} artifact(s) failed:")
        for failure in result.failures:
            print(f"  - {failure.table} ({failure.category.value}): {failure.error}")
        return EXIT_ARTIFACT_FAILURES

    print(f"\nGenerated {len(paths)} scripts for {len(result.ordered_tables)} tables")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
