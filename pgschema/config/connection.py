"""Connection configuration management."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "POSTGRES"


class ConnectionConfigError(ValueError):
    """Raised when connection configuration loading fails."""


def default_config_path() -> Path:
    """Location of the per-user connection file."""
    return Path.home() / '.pgschema' / 'postgres.yaml'


def load_connection_config(conn_file: Optional[str] = None) -> Dict[str, Any]:
    """Load PostgreSQL connection configuration.

    Loads configuration with the following priority:
    1. Explicit --conn-file path (highest priority)
    2. ~/.pgschema/postgres.yaml
    3. POSTGRES_* environment variables
    4. Defaults (localhost:5432)

    Args:
        conn_file: Optional explicit connection file path

    Returns:
        Dictionary with connection configuration

    Raises:
        ConnectionConfigError: If a configuration file is invalid
    """
    if conn_file:
        config = load_yaml_file(conn_file, ConnectionConfigError)
        logger.info("Loaded connection config from: %s", conn_file)
        return config

    default_path = default_config_path()
    if default_path.exists():
        config = load_yaml_file(str(default_path), ConnectionConfigError)
        logger.info("Loaded connection config from: %s", default_path)
        return config

    env_config = _load_from_env()
    if env_config:
        logger.info("Loaded connection config from environment variables")
        return env_config

    logger.warning("No connection config found. Using defaults.")
    return _get_defaults()


def load_yaml_file(file_path: str, error_cls=ConnectionConfigError) -> Dict[str, Any]:
    """Load a YAML file that must contain a dictionary.

    Args:
        file_path: Path to YAML file
        error_cls: Exception type raised on failure

    Returns:
        Parsed configuration dictionary (empty for an empty file)

    Raises:
        error_cls: If the file is missing, unreadable or not a dictionary
    """
    if not os.path.exists(file_path):
        raise error_cls(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_cls(f"Invalid YAML configuration: {file_path}\n{e}") from e
    except OSError as e:
        raise error_cls(f"Error reading configuration file: {file_path}\n{e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise error_cls(f"Configuration file must contain a YAML dictionary: {file_path}")
    return config


def _load_from_env() -> Optional[Dict[str, Any]]:
    """Load configuration from POSTGRES_* environment variables."""
    config = {}
    for param in ['DSN', 'HOST', 'PORT', 'USER', 'PASSWORD', 'DATABASE']:
        value = os.getenv(f"{ENV_PREFIX}_{param}")
        if value:
            config[param.lower()] = value

    return config if config else None


def _get_defaults() -> Dict[str, Any]:
    return {
        'host': 'localhost',
        'port': 5432,
        'user': '',
        'password': '',
        'database': ''
    }


def validate_connection_config(config: Dict[str, Any]) -> bool:
    """Validate that required connection parameters are present.

    A ``dsn`` entry is sufficient on its own; otherwise host, user and
    database are required.

    Raises:
        ConnectionConfigError: If required parameters are missing
    """
    if config.get('dsn'):
        return True

    required_fields = ['host', 'user', 'database']
    missing_fields = [f for f in required_fields if not config.get(f)]

    if missing_fields:
        raise ConnectionConfigError(
            f"Missing required connection parameters: {', '.join(missing_fields)}. "
            f"Provide via --conn-file or {default_config_path()}"
        )

    return True


def build_dsn(config: Dict[str, Any]) -> str:
    """Build a postgresql:// connection string from a validated config."""
    validate_connection_config(config)
    if config.get('dsn'):
        return str(config['dsn'])

    credentials = quote(str(config['user']), safe='')
    if config.get('password'):
        credentials += ':' + quote(str(config['password']), safe='')
    port = config.get('port') or 5432
    database = quote(str(config['database']), safe='')
    return f"postgresql://{credentials}@{config['host']}:{port}/{database}"
