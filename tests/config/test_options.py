"""Tests for mapping options loading and case transforms."""
import pytest
from pydantic import ValidationError
import yaml

from pgschema.config.options import MappingOptionsError, load_mapping_options
from pgschema.models.options import (
    CaseStyle,
    MappingOptions,
    UnknownTypePolicy,
    apply_case,
)


def test_defaults_without_file():
    """No file gives the default options."""
    options = load_mapping_options()
    assert options == MappingOptions()
    assert options.unknown_type == UnknownTypePolicy.FALLBACK
    assert options.fallback_type == "any"


def test_load_from_file(tmp_path):
    """Options are read from YAML."""
    options_file = tmp_path / "options.yaml"
    options_file.write_text(yaml.dump({
        'column_case': 'camel',
        'type_case': 'pascal',
        'unknown_type': 'error',
        'type_overrides': {'geometry': 'GeoJSON'}
    }))

    options = load_mapping_options(str(options_file))

    assert options.column_case == CaseStyle.CAMEL
    assert options.type_case == CaseStyle.PASCAL
    assert options.unknown_type == UnknownTypePolicy.ERROR
    assert options.type_overrides == {'geometry': 'GeoJSON'}


def test_empty_file_gives_defaults(tmp_path):
    """An empty file is valid."""
    options_file = tmp_path / "empty.yaml"
    options_file.write_text("")
    assert load_mapping_options(str(options_file)) == MappingOptions()


def test_invalid_value(tmp_path):
    """Unknown enum values are rejected."""
    options_file = tmp_path / "bad.yaml"
    options_file.write_text(yaml.dump({'unknown_type': 'guess'}))

    with pytest.raises(MappingOptionsError, match="Invalid mapping options"):
        load_mapping_options(str(options_file))


def test_unknown_key(tmp_path):
    """Misspelled keys are rejected."""
    options_file = tmp_path / "typo.yaml"
    options_file.write_text(yaml.dump({'type_overides': {}}))

    with pytest.raises(MappingOptionsError):
        load_mapping_options(str(options_file))


def test_missing_file():
    """A missing options file is an error."""
    with pytest.raises(MappingOptionsError, match="not found"):
        load_mapping_options('/nonexistent/options.yaml')


@pytest.mark.parametrize("name,style,expected", [
    ("order_status", CaseStyle.PRESERVE, "order_status"),
    ("order_status", CaseStyle.CAMEL, "orderStatus"),
    ("order_status", CaseStyle.PASCAL, "OrderStatus"),
    ("created_at_utc", CaseStyle.CAMEL, "createdAtUtc"),
    ("id", CaseStyle.PASCAL, "Id"),
    ("alreadyCamel", CaseStyle.CAMEL, "alreadyCamel"),
])
def test_apply_case(name, style, expected):
    """Case styles transform snake_case identifiers."""
    assert apply_case(name, style) == expected


def test_transform_helpers():
    """Column and type transforms use their own styles."""
    options = MappingOptions(column_case=CaseStyle.CAMEL, type_case=CaseStyle.PASCAL)
    assert options.transform_column_name("user_id") == "userId"
    assert options.transform_type_name("user_role") == "UserRole"


def test_column_case_rejects_pascal():
    """Column names only support preserve and camel."""
    with pytest.raises(ValidationError, match="column_case"):
        MappingOptions(column_case=CaseStyle.PASCAL)


def test_column_case_pascal_in_file(tmp_path):
    """An unsupported column case in a file is reported."""
    options_file = tmp_path / "pascal.yaml"
    options_file.write_text(yaml.dump({'column_case': 'pascal'}))

    with pytest.raises(MappingOptionsError, match="column_case"):
        load_mapping_options(str(options_file))
