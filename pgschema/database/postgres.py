"""PostgreSQL database facade for catalog introspection."""
import logging
from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from pgschema.core.assembler import (
    build_schema_model,
    build_table_definition,
    enrich_with_types,
)
from pgschema.database.queries import (
    COLUMN_QUERY,
    PRIMARY_KEY_QUERY,
    TABLE_COMMENT_QUERY,
    TABLE_LIST_QUERY,
    build_enum_query,
    group_enum_rows,
    rows_to_primary_key,
    rows_to_schema_tables,
)
from pgschema.models.options import MappingOptions
from pgschema.models.schema import (
    EnumDefinitions,
    SchemaModel,
    SchemaTable,
    TableDefinition,
)

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "public"


class DatabaseNotConnectedError(RuntimeError):
    """Raised when the database is used before connect()."""


class PostgresDatabase:
    """Owns one PostgreSQL connection for the duration of an introspection run.

    Use it as an async context manager so the connection is closed on every
    exit path::

        async with PostgresDatabase(dsn) as db:
            tables = await db.get_schema_tables("public")

    Queries run sequentially on the single connection. Driver errors are
    logged and propagated unchanged.
    """

    def __init__(self, connection_string: str):
        """Initialize the facade.

        Args:
            connection_string: libpq-style DSN, e.g. ``postgresql://user@host/db``
        """
        if not connection_string:
            raise ValueError("A connection string is required")
        self.connection_string = connection_string
        self.conn: Optional[asyncpg.Connection] = None

    async def __aenter__(self) -> "PostgresDatabase":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """Open the connection if it is not already open.

        Raises:
            asyncpg.PostgresError: If the server rejects the connection
            OSError: If the server cannot be reached
        """
        if self.conn is not None:
            return
        try:
            self.conn = await asyncpg.connect(dsn=self.connection_string)
            logger.info("Successfully connected to PostgreSQL")
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("Failed to connect to PostgreSQL: %s", e)
            raise

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self.conn is None:
            return
        try:
            await self.conn.close()
            logger.info("Closed PostgreSQL connection")
        finally:
            self.conn = None

    def _require_connection(self) -> asyncpg.Connection:
        if self.conn is None:
            raise DatabaseNotConnectedError(
                "Not connected to PostgreSQL. Call connect() first."
            )
        return self.conn

    async def query(self, raw_sql: str, params: Optional[Sequence[Any]] = None) -> List[Any]:
        """Run a query verbatim and return the driver's records unprocessed."""
        conn = self._require_connection()
        logger.debug("Executing query: %s", raw_sql)
        return await conn.fetch(raw_sql, *(params or []))

    async def get_enum_types(self, schema_name: Optional[str] = None) -> EnumDefinitions:
        """Fetch enum types and their labels.

        Args:
            schema_name: Restrict to one schema. Without it, same-named enums
                from different schemas share one entry and their labels are
                merged in query order.

        Returns:
            Mapping of enum type name to labels sorted ascending
        """
        conn = self._require_connection()
        query = build_enum_query(schema_name)
        logger.debug("Executing enum query: %s", query)
        rows = await conn.fetch(query)
        enums = group_enum_rows(rows)
        logger.info("Fetched %d enum types from %s", len(enums), schema_name or "all schemas")
        return enums

    async def get_schema_tables(self, schema_name: str) -> List[SchemaTable]:
        """Fetch the tables and views of a schema ordered by lowercase name."""
        conn = self._require_connection()
        rows = await conn.fetch(TABLE_LIST_QUERY, schema_name)
        tables = rows_to_schema_tables(rows)
        logger.info("Fetched %d relations from %s", len(tables), schema_name)
        return tables

    async def get_table_definition(self, table_name: str, schema_name: str) -> TableDefinition:
        """Fetch columns, primary key and comment of one table."""
        conn = self._require_connection()
        columns = await conn.fetch(COLUMN_QUERY, table_name, schema_name)
        comment = await conn.fetchval(TABLE_COMMENT_QUERY, table_name, schema_name)
        pk_rows = await conn.fetch(PRIMARY_KEY_QUERY, table_name, schema_name)
        return build_table_definition(
            table_name,
            columns,
            primary_key=rows_to_primary_key(pk_rows),
            comment=comment
        )

    async def get_table_types(
        self,
        table_name: str,
        schema_name: str,
        options: MappingOptions
    ) -> TableDefinition:
        """Fetch a table definition enriched with output types.

        The enum types of ``schema_name`` are treated as custom types.
        """
        enums = await self.get_enum_types(schema_name)
        definition = await self.get_table_definition(table_name, schema_name)
        return self.map_table_definition_to_type(definition, list(enums), options)

    @staticmethod
    def map_table_definition_to_type(
        table_definition: TableDefinition,
        custom_types: Sequence[str],
        options: MappingOptions
    ) -> TableDefinition:
        """Enrich every column of a definition with its output type."""
        return enrich_with_types(table_definition, custom_types, options)

    @staticmethod
    def get_default_schema() -> str:
        """Return the schema used when none is specified."""
        return DEFAULT_SCHEMA

    async def introspect_schema(
        self,
        schema_name: str,
        options: MappingOptions,
        tables: Optional[Sequence[str]] = None
    ) -> SchemaModel:
        """Introspect a whole schema into an enriched schema model.

        Args:
            schema_name: Schema to introspect
            options: Mapping options
            tables: Optional subset of relation names to include

        Returns:
            SchemaModel with enums, enriched table definitions and view names
        """
        enums = await self.get_enum_types(schema_name)
        custom_types = list(enums)

        relations = await self.get_schema_tables(schema_name)
        if tables:
            wanted = set(tables)
            relations = [r for r in relations if r.table_name in wanted]

        definitions: Dict[str, TableDefinition] = {}
        for relation in relations:
            definition = await self.get_table_definition(relation.table_name, schema_name)
            definitions[relation.table_name] = enrich_with_types(definition, custom_types, options)

        views = [r.table_name for r in relations if r.is_view]
        logger.info("Introspected %d relations (%d views) in %s",
                    len(definitions), len(views), schema_name)
        return build_schema_model(schema_name, enums, definitions, views)
