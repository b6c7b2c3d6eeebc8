"""Command-line interface for pgschema - PostgreSQL schema introspection."""
import argparse
import asyncio
import logging
import sys

from pgschema.config import build_dsn, load_connection_config, load_mapping_options
from pgschema.database import PostgresDatabase
from pgschema.output.json import render_json, render_tables_json

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


async def run_introspect(args):
    """Async execution wrapper for the introspect command."""
    try:
        options = load_mapping_options(getattr(args, 'options_file', None))
        dsn = build_dsn(load_connection_config(getattr(args, 'conn_file', None)))
        schema_name = args.schema or PostgresDatabase.get_default_schema()

        async with PostgresDatabase(dsn) as db:
            model = await db.introspect_schema(
                schema_name, options, tables=getattr(args, 'table', None)
            )

        print(render_json(model, options))
        sys.exit(0)

    except Exception as e:  # pylint: disable=broad-except
        logger.debug("Introspection failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def run_tables(args):
    """Async execution wrapper for the tables command."""
    try:
        dsn = build_dsn(load_connection_config(getattr(args, 'conn_file', None)))
        schema_name = args.schema or PostgresDatabase.get_default_schema()

        async with PostgresDatabase(dsn) as db:
            tables = await db.get_schema_tables(schema_name)

        print(render_tables_json(tables))
        sys.exit(0)

    except Exception as e:  # pylint: disable=broad-except
        logger.debug("Table listing failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _add_common_arguments(parser):
    parser.add_argument(
        "--schema",
        help="Schema to introspect (default: public)"
    )
    parser.add_argument(
        "--conn-file",
        help="Path to connection config file (default: ~/.pgschema/postgres.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging on stderr"
    )


def main():
    """Parse command line arguments and execute appropriate command."""
    parser = argparse.ArgumentParser(
        description="pgschema - PostgreSQL schema introspection",
        epilog="Examples:\n"
               "  pgschema introspect --schema public --conn-file db.yaml\n"
               "  pgschema introspect --table users --table orders\n"
               "  pgschema tables --schema analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command")

    introspect_parser = subparsers.add_parser(
        "introspect",
        help="Dump tables, columns and enums with mapped output types as JSON"
    )
    _add_common_arguments(introspect_parser)
    introspect_parser.add_argument(
        "--table", action="append",
        help="Restrict output to this table (repeatable)"
    )
    introspect_parser.add_argument(
        "--options-file",
        help="YAML file with type mapping options"
    )

    tables_parser = subparsers.add_parser(
        "tables",
        help="List the tables and views of a schema"
    )
    _add_common_arguments(tables_parser)

    args = parser.parse_args()

    if args.command == "introspect":
        _configure_logging(args.verbose)
        asyncio.run(run_introspect(args))
    elif args.command == "tables":
        _configure_logging(args.verbose)
        asyncio.run(run_tables(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
