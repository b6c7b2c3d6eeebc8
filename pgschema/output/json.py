"""JSON output rendering for schema models."""
import json  # pylint: disable=import-self,redefined-builtin
from typing import List, Optional

from pgschema.models.options import MappingOptions, load_default_options
from pgschema.models.schema import SchemaModel, SchemaTable


def schema_model_to_dict(model: SchemaModel, options: Optional[MappingOptions] = None) -> dict:
    """Serialize a schema model with camelCase keys and transformed column names."""
    options = options or load_default_options()
    data = model.model_dump(by_alias=True)
    for table in data["tables"].values():
        table["columns"] = {
            options.transform_column_name(name): column
            for name, column in table["columns"].items()
        }
    return data


def render_json(model: SchemaModel, options: Optional[MappingOptions] = None) -> str:
    """Render a schema model as a JSON string."""
    return json.dumps(schema_model_to_dict(model, options), indent=2)


def render_tables_json(tables: List[SchemaTable]) -> str:
    """Render a relation listing as a JSON string."""
    return json.dumps([t.model_dump(by_alias=True) for t in tables], indent=2)
