"""Configuration management."""
from pgschema.config.connection import (
    ConnectionConfigError,
    build_dsn,
    load_connection_config,
    validate_connection_config,
)
from pgschema.config.options import MappingOptionsError, load_mapping_options

__all__ = [
    'ConnectionConfigError',
    'MappingOptionsError',
    'build_dsn',
    'load_connection_config',
    'load_mapping_options',
    'validate_connection_config',
]
