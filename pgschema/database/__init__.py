"""PostgreSQL catalog access."""
from pgschema.database.postgres import (
    DEFAULT_SCHEMA,
    DatabaseNotConnectedError,
    PostgresDatabase,
)

__all__ = [
    'DEFAULT_SCHEMA',
    'DatabaseNotConnectedError',
    'PostgresDatabase',
]
