"""Catalog queries and translation of their result rows."""
from typing import Any, Iterable, List, Mapping, Optional

from sqlglot import exp

from pgschema.models.schema import EnumDefinitions, SchemaTable

VIEW_TABLE_TYPE = "VIEW"

ENUM_QUERY_TEMPLATE = (
    "select n.nspname as schema, t.typname as name, e.enumlabel as value "
    "from pg_type t join pg_enum e on t.oid = e.enumtypid "
    "join pg_catalog.pg_namespace n ON n.oid = t.typnamespace "
    "{where}"
    " order by t.typname asc, e.enumlabel asc;"
)

TABLE_LIST_QUERY = (
    "SELECT c.table_name, t.table_type "
    "FROM information_schema.columns c "
    "INNER JOIN information_schema.tables t ON t.table_name = c.table_name "
    "WHERE c.table_schema = $1 "
    "GROUP BY c.table_name, t.table_type ORDER BY lower(c.table_name)"
)

COLUMN_QUERY = """
    SELECT
        column_name,
        udt_name,
        is_nullable,
        column_default IS NOT NULL AS has_default
    FROM information_schema.columns
    WHERE table_name = $1
      AND table_schema = $2
    ORDER BY ordinal_position
"""

TABLE_COMMENT_QUERY = """
    SELECT obj_description(
        (quote_ident($2) || '.' || quote_ident($1))::regclass, 'pg_class'
    ) AS comment
"""

PRIMARY_KEY_QUERY = """
    SELECT a.attname AS column_name
    FROM pg_index i
    JOIN pg_attribute a
      ON a.attrelid = i.indrelid
     AND a.attnum = ANY(i.indkey)
    WHERE i.indrelid = (quote_ident($2) || '.' || quote_ident($1))::regclass
      AND i.indisprimary
    ORDER BY a.attnum
"""


def quote_literal(value: str) -> str:
    """Render a value as a PostgreSQL string literal."""
    return exp.Literal.string(value).sql(dialect="postgres")


def build_enum_query(schema_name: Optional[str] = None) -> str:
    """Build the enum listing query.

    When no schema is given the filter is left out entirely, which leaves
    two spaces before ``order by``.
    """
    where = ""
    if schema_name:
        where = f"where n.nspname = {quote_literal(schema_name)}"
    return ENUM_QUERY_TEMPLATE.format(where=where)


def group_enum_rows(rows: Iterable[Mapping[str, Any]]) -> EnumDefinitions:
    """Group enum rows by type name, keeping the row order of labels.

    Same-named enums from different schemas share one entry.
    """
    enums: EnumDefinitions = {}
    for row in rows:
        enums.setdefault(row["name"], []).append(row["value"])
    return enums


def rows_to_schema_tables(rows: Iterable[Mapping[str, Any]]) -> List[SchemaTable]:
    """Translate table listing rows into SchemaTable objects."""
    return [
        SchemaTable(
            table_name=row["table_name"],
            is_view=row.get("table_type") == VIEW_TABLE_TYPE
        )
        for row in rows
    ]


def rows_to_primary_key(rows: Iterable[Mapping[str, Any]]) -> Optional[str]:
    """Return the primary key column name for single-column keys."""
    names = [row["column_name"] for row in rows]
    if len(names) == 1:
        return names[0]
    return None
