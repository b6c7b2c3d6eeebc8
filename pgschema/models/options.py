"""Options controlling how native types are mapped to output types."""
import re
from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, field_validator


class CaseStyle(str, Enum):
    """Case transforms applied to generated names."""

    PRESERVE = "preserve"
    CAMEL = "camel"
    PASCAL = "pascal"


class UnknownTypePolicy(str, Enum):
    """What the type mapper does with a type it cannot classify."""

    ERROR = "error"
    FALLBACK = "fallback"


def _split_words(name: str):
    return [part for part in re.split(r"[_\-\s]+", name) if part]


def apply_case(name: str, style: CaseStyle) -> str:
    """Apply a case style to an identifier such as ``order_status``."""
    if style == CaseStyle.PRESERVE:
        return name
    words = _split_words(name)
    if not words:
        return name
    pascal = "".join(word[:1].upper() + word[1:] for word in words)
    if style == CaseStyle.PASCAL:
        return pascal
    return words[0][:1].lower() + words[0][1:] + pascal[len(words[0]):]


class MappingOptions(BaseModel):
    """Configuration for the type mapper and the JSON output.

    The unknown-type behaviour is explicit: ``fallback`` (the default) maps
    unrecognized types to ``fallback_type`` and logs a warning, ``error``
    raises ``TypeMappingError``.
    """

    column_case: CaseStyle = CaseStyle.PRESERVE
    type_case: CaseStyle = CaseStyle.PRESERVE
    type_overrides: Dict[str, str] = {}
    unknown_type: UnknownTypePolicy = UnknownTypePolicy.FALLBACK
    fallback_type: str = "any"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("column_case")
    @classmethod
    def _check_column_case(cls, value: CaseStyle) -> CaseStyle:
        if value not in (CaseStyle.PRESERVE, CaseStyle.CAMEL):
            raise ValueError("column_case must be 'preserve' or 'camel'")
        return value

    def transform_column_name(self, name: str) -> str:
        """Transform a column name according to ``column_case``."""
        return apply_case(name, self.column_case)

    def transform_type_name(self, name: str) -> str:
        """Transform a custom type name according to ``type_case``."""
        return apply_case(name, self.type_case)


def load_default_options() -> MappingOptions:
    """Return the default mapping options."""
    return MappingOptions()
