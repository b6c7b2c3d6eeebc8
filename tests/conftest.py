"""Common test fixtures."""
# pylint: disable=redefined-outer-name
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pgschema.models.options import load_default_options
from pgschema.models.schema import ColumnDefinition, TableDefinition


@pytest.fixture
def default_options():
    """Fixture for the default mapping options."""
    return load_default_options()


@pytest.fixture
def column_factory():
    """Factory to create ColumnDefinition instances for testing."""
    def _make_column(udt_name="text", nullable=False, has_default=False, ts_type=None):
        return ColumnDefinition(
            udt_name=udt_name,
            nullable=nullable,
            has_default=has_default,
            ts_type=ts_type
        )
    return _make_column


@pytest.fixture
def table_definition_factory(column_factory):
    """Factory to create TableDefinition instances for testing."""
    def _make_table(columns=None, primary_key=None, comment=None):
        if columns is None:
            columns = {"id": column_factory(udt_name="uuid", has_default=True)}
        return TableDefinition(columns=columns, primary_key=primary_key, comment=comment)
    return _make_table


@pytest.fixture
def mock_connection():
    """Fixture to mock asyncpg.connect and the connection it returns."""
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchval = AsyncMock(return_value=None)
    conn.close = AsyncMock()
    with patch("asyncpg.connect", new=AsyncMock(return_value=conn)) as mock_connect:
        conn.connect_mock = mock_connect
        yield conn
