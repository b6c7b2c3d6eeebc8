"""Assembly of catalog rows into table definitions and schema models."""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pgschema.core.type_mapper import map_type
from pgschema.models.options import MappingOptions
from pgschema.models.schema import (
    ColumnDefinition,
    EnumDefinitions,
    SchemaModel,
    TableDefinition,
)

logger = logging.getLogger(__name__)


def _is_nullable(value: Any) -> bool:
    # information_schema reports YES/NO
    if isinstance(value, str):
        return value.upper() == "YES"
    return bool(value)


def build_table_definition(
    table_name: str,
    raw_columns: Iterable[Mapping[str, Any]],
    primary_key: Optional[str] = None,
    comment: Optional[str] = None
) -> TableDefinition:
    """Build a table definition from raw column rows.

    Args:
        table_name: Name of the table (used for logging only)
        raw_columns: Rows with ``column_name``, ``udt_name``, ``is_nullable``
            and ``has_default``
        primary_key: Primary key column name, if any
        comment: Table comment, if any

    Returns:
        TableDefinition whose columns follow row order. A table without
        column rows yields an empty columns mapping.
    """
    columns: Dict[str, ColumnDefinition] = {}
    for row in raw_columns:
        columns[row["column_name"]] = ColumnDefinition(
            udt_name=row["udt_name"],
            nullable=_is_nullable(row["is_nullable"]),
            has_default=bool(row["has_default"])
        )

    logger.debug("Built definition for %s with %d columns", table_name, len(columns))
    return TableDefinition(columns=columns, primary_key=primary_key, comment=comment)


def enrich_with_types(
    table_definition: TableDefinition,
    custom_types: Sequence[str],
    options: MappingOptions
) -> TableDefinition:
    """Return a copy of the definition with ``ts_type`` set on every column.

    The input definition is left untouched. Re-applying the transform yields
    the same types.
    """
    columns = {
        name: column.model_copy(update={"ts_type": map_type(column, custom_types, options)})
        for name, column in table_definition.columns.items()
    }
    return table_definition.model_copy(update={"columns": columns})


def build_schema_model(
    schema_name: str,
    enums: EnumDefinitions,
    tables: Dict[str, TableDefinition],
    views: Optional[List[str]] = None
) -> SchemaModel:
    """Bundle enriched tables and enums into a schema model."""
    return SchemaModel(
        schema_name=schema_name,
        enums=enums,
        tables=tables,
        views=views or []
    )
