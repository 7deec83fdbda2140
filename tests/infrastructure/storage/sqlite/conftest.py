"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import matinv.infrastructure.storage.sqlite.connection as conn_module
from matinv.core.entities import Material, Supplier, Warehouse
from matinv.infrastructure.storage.sqlite.connection import close_pool
from matinv.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Temporary database with the schema migrations applied, no sample data."""
    results = await initialize_database(
        temp_db_path, create_backup_before=False, include_sample_data=False
    )
    assert all(r.success for r in results)
    yield temp_db_path


@pytest.fixture
async def db(initialized_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the migrated temp database."""
    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield initialized_db
        finally:
            await close_pool()


@pytest.fixture
def sample_material() -> Material:
    return Material(
        material_code="STL-001",
        name="Cold Rolled Steel Sheet",
        unit="kg",
        current_quantity=450,
        reorder_point=500,
        safety_stock=200,
        avg_daily_usage=50,
        lead_time_days=7,
    )


@pytest.fixture
def sample_supplier() -> Supplier:
    return Supplier(
        name="Steel Corp Ltd",
        contact_person="John Smith",
        email="john@steelcorp.com",
        phone="+1-555-0101",
        rating=4.5,
    )


@pytest.fixture
def sample_warehouse() -> Warehouse:
    return Warehouse(name="Main Warehouse", location="Building A, Floor 1", capacity=10000)
