"""Tests for JSON output rendering."""
import json

from pgschema.core.assembler import build_schema_model, enrich_with_types
from pgschema.models.options import CaseStyle, MappingOptions
from pgschema.models.schema import SchemaTable
from pgschema.output.json import render_json, render_tables_json, schema_model_to_dict


def _model(column_factory, table_definition_factory, options):
    definition = table_definition_factory(
        columns={
            "user_id": column_factory(udt_name="int4"),
            "display_name": column_factory(udt_name="text", nullable=True),
        },
        primary_key="user_id"
    )
    return build_schema_model(
        "public",
        {"mood": ["happy"]},
        {"users": enrich_with_types(definition, [], options)}
    )


def test_render_json_uses_camel_case_keys(column_factory, table_definition_factory,
                                          default_options):
    """Model keys are serialized with their aliases."""
    data = json.loads(render_json(
        _model(column_factory, table_definition_factory, default_options)
    ))

    assert data["schemaName"] == "public"
    assert data["enums"] == {"mood": ["happy"]}
    users = data["tables"]["users"]
    assert users["primaryKey"] == "user_id"
    assert users["columns"]["display_name"] == {
        "udtName": "text",
        "nullable": True,
        "hasDefault": False,
        "tsType": "string"
    }


def test_render_json_transforms_column_names(column_factory, table_definition_factory):
    """Column names follow the column case option."""
    options = MappingOptions(column_case=CaseStyle.CAMEL)
    data = schema_model_to_dict(
        _model(column_factory, table_definition_factory, options), options
    )
    assert list(data["tables"]["users"]["columns"]) == ["userId", "displayName"]


def test_render_tables_json():
    """Relation listings render as a list."""
    output = render_tables_json([SchemaTable(table_name="t", is_view=True)])
    assert json.loads(output) == [{"tableName": "t", "isView": True}]


def test_render_json_without_options(column_factory, table_definition_factory,
                                     default_options):
    """Column names are kept as-is when no options are given."""
    data = json.loads(render_json(
        _model(column_factory, table_definition_factory, default_options)
    ))
    assert list(data["tables"]["users"]["columns"]) == ["user_id", "display_name"]
