"""Schema model produced by catalog introspection."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Enum type name -> member labels in ascending label order
EnumDefinitions = Dict[str, List[str]]


class ColumnDefinition(BaseModel):
    """Represents a single column as reported by the catalog.

    ``ts_type`` stays unset until the column has been enriched by the type
    mapper; nullability is never folded into it.
    """

    udt_name: str = Field(alias="udtName")
    nullable: bool
    has_default: bool = Field(alias="hasDefault")
    ts_type: Optional[str] = Field(default=None, alias="tsType")

    model_config = ConfigDict(populate_by_name=True)


class TableDefinition(BaseModel):
    """Represents a table or view with its columns in catalog order."""

    columns: Dict[str, ColumnDefinition] = {}
    primary_key: Optional[str] = Field(default=None, alias="primaryKey")
    comment: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_enriched(self) -> bool:
        """True when every column carries a resolved output type."""
        return all(col.ts_type is not None for col in self.columns.values())


class SchemaTable(BaseModel):
    """Represents a relation listed in a schema."""

    table_name: str = Field(alias="tableName")
    is_view: bool = Field(default=False, alias="isView")

    model_config = ConfigDict(populate_by_name=True)


class SchemaModel(BaseModel):
    """Enriched description of one database schema."""

    schema_name: str = Field(alias="schemaName")
    enums: EnumDefinitions = {}
    tables: Dict[str, TableDefinition] = {}
    views: List[str] = []

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "schemaName": "public",
                "enums": {"order_status": ["paid", "pending"]},
                "tables": {
                    "orders": {
                        "columns": {
                            "id": {
                                "udtName": "uuid",
                                "nullable": False,
                                "hasDefault": True,
                                "tsType": "string"
                            }
                        },
                        "primaryKey": "id",
                        "comment": None
                    }
                },
                "views": []
            }
        }
    )
