"""Loading of type-mapping options from YAML."""
import logging
from typing import Optional

from pydantic import ValidationError

from pgschema.config.connection import load_yaml_file
from pgschema.models.options import MappingOptions, load_default_options

logger = logging.getLogger(__name__)


class MappingOptionsError(ValueError):
    """Raised when a mapping options file is invalid."""


def load_mapping_options(options_file: Optional[str] = None) -> MappingOptions:
    """Load mapping options, falling back to the defaults.

    Example file::

        column_case: camel
        type_case: pascal
        unknown_type: error
        type_overrides:
          geometry: GeoJSON
    """
    if not options_file:
        return load_default_options()

    data = load_yaml_file(options_file, MappingOptionsError)
    try:
        options = MappingOptions(**data)
    except ValidationError as e:
        raise MappingOptionsError(f"Invalid mapping options in {options_file}:\n{e}") from e

    logger.info("Loaded mapping options from: %s", options_file)
    return options
