#!/usr/bin/env python
# ============================================================================
# SCHEMA COMPILER COMMAND
# ============================================================================
# STATUS: Entry point - msi-schema command
# PURPOSE: Compile table definitions and print their schema descriptors
# USAGE:
#   msi-schema tables.yaml                # Compile a definitions file
#   msi-schema --standard                 # Compile the standard tables
#   python -m msi_schema tables.yaml -v   # Same, with debug logging
# ============================================================================

import argparse
import json
import sys
from typing import List, Optional

from msi_schema.errors import MsiSchemaError, SchemaError
from msi_schema.logging import ComponentType, configure_logging, get_logger
from msi_schema.models import STANDARD_TABLES
from msi_schema.schema.compiler import SchemaCompiler
from msi_schema.schema.loader import load_definitions

logger = get_logger("msi_schema.cli", ComponentType.CLI)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msi-schema",
        description="Compile DAO table definitions into MSI schema descriptors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  msi-schema tables.yaml                 # Print descriptors as JSON
  msi-schema --standard tables.yaml      # Standard tables plus your own
  msi-schema tables.yaml --json-logs     # JSON log lines on stderr

Environment Variables:
  MSI_SCHEMA_DEFAULT_TEXT_WIDTH   Width of Text columns without one (255)
  MSI_SCHEMA_IDENTIFIER_WIDTH     Width of Identifier columns (72)
  MSI_SCHEMA_GUID_WIDTH           Width of GUID columns (38)
  MSI_SCHEMA_PLAIN_INT_WIDTH      Bits of a plain int field, 16 or 32 (32)
  MSI_SCHEMA_LOG_FORMAT           "json" for JSON log lines
        """,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="YAML definition files",
    )
    parser.add_argument(
        "--standard",
        action="store_true",
        help="Include the standard tables (Directory, Component, ...)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write log records as JSON lines",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.paths and not args.standard:
        parser.error("give at least one definitions file or --standard")

    configure_logging(
        level="DEBUG" if args.verbose else "WARNING",
        json_output=args.json_logs,
    )

    items = list(STANDARD_TABLES) if args.standard else []
    try:
        for path in args.paths:
            items.extend(load_definitions(path))
        tables = SchemaCompiler().compile_all(items)
    except SchemaError as e:
        logger.error(f"Compilation failed for {e.table_name}")
        for violation in e.violations:
            print(f"error: {violation}", file=sys.stderr)
        return 1
    except MsiSchemaError as e:
        logger.error(f"Compilation failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    descriptors = {"tables": [table.schema.to_dict() for table in tables.values()]}
    print(json.dumps(descriptors, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
