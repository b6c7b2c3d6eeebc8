"""Mapping of PostgreSQL native types to output type names."""
import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from pgschema.models.options import MappingOptions, UnknownTypePolicy
from pgschema.models.schema import ColumnDefinition

logger = logging.getLogger(__name__)

ARRAY_PREFIX = "_"
ARRAY_SUFFIX = "[]"


class TypeMappingError(ValueError):
    """Raised when a native type cannot be mapped and no fallback is allowed."""


class TypeCategory(str, Enum):
    """Built-in categories of native types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    DATE = "date"


# Evaluated in order; the first category containing the type wins.
TYPE_RULES: Tuple[Tuple[TypeCategory, frozenset, str], ...] = (
    (TypeCategory.STRING, frozenset({
        "bpchar", "char", "varchar", "text", "citext", "uuid", "bytea",
        "inet", "time", "timetz", "interval", "name",
    }), "string"),
    (TypeCategory.NUMBER, frozenset({
        "int2", "int4", "int8", "float4", "float8", "numeric", "money", "oid",
    }), "number"),
    (TypeCategory.BOOLEAN, frozenset({"bool"}), "boolean"),
    (TypeCategory.JSON, frozenset({"json", "jsonb"}), "Json"),
    (TypeCategory.DATE, frozenset({"date", "timestamp", "timestamptz"}), "Date"),
)


def split_array_type(udt_name: str) -> Tuple[str, bool]:
    """Split a native type into (base type, is_array).

    Only a single leading underscore is treated as the array marker.
    """
    if udt_name.startswith(ARRAY_PREFIX):
        return udt_name[len(ARRAY_PREFIX):], True
    return udt_name, False


def classify(udt_name: str) -> Optional[TypeCategory]:
    """Return the built-in category of a base type, or None."""
    for category, members, _ in TYPE_RULES:
        if udt_name in members:
            return category
    return None


def _resolve_base_type(
    base_type: str,
    custom_types: Sequence[str],
    options: MappingOptions
) -> str:
    if base_type in options.type_overrides:
        return options.type_overrides[base_type]

    for _, members, result in TYPE_RULES:
        if base_type in members:
            return result

    if base_type in custom_types:
        return options.transform_type_name(base_type)

    if options.unknown_type == UnknownTypePolicy.ERROR:
        raise TypeMappingError(f"No output type found for native type '{base_type}'")

    logger.warning(
        "Type [%s] has been mapped to [%s] because no specific type has been found",
        base_type, options.fallback_type
    )
    return options.fallback_type


def map_type(
    column: ColumnDefinition,
    custom_types: Sequence[str],
    options: MappingOptions
) -> str:
    """Map a column's native type to an output type name.

    Resolution order: user overrides, built-in categories, custom types,
    then the unknown-type policy from ``options``. Array types resolve their
    base type and get ``[]`` appended. ``column.nullable`` is not considered;
    composing nullable unions is left to the emitter.

    Args:
        column: Column definition holding the native ``udt_name``
        custom_types: Names of user-defined types (enums, composites)
        options: Mapping options

    Returns:
        Output type name, e.g. ``"number"`` or ``"string[]"``

    Raises:
        TypeMappingError: If the type is unknown and the policy is ``error``
    """
    base_type, is_array = split_array_type(column.udt_name)
    result = _resolve_base_type(base_type, custom_types, options)
    if is_array:
        return result + ARRAY_SUFFIX
    return result
